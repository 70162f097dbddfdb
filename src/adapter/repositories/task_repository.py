"""SQLAlchemy Task Repository Implementation

Invoiced-state changes are conditional bulk UPDATEs; their row counts tell
the caller how many tasks were actually affected.
"""

from typing import Optional, List, Tuple
from datetime import datetime
from sqlalchemy import update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.task_repository import TaskRepository
from src.domain.base import utcnow
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from src.domain.task import Task, TaskStatus


class SqlAlchemyTaskRepository(TaskRepository):
    """
    SQLAlchemy implementation of TaskRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE when billing
    - Conditional claim (WHERE invoiced = false) so a task is billed once
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, task: Task) -> Task:
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def get_by_id(self, tenant_id: str, task_id: str) -> Optional[Task]:
        statement = select(Task).where(Task.tenant_id == tenant_id).where(Task.id == task_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(
        self, tenant_id: str, task_ids: List[str], for_update: bool = False
    ) -> List[Task]:
        """
        Retrieve tasks by IDs with optional row-level locking

        Args:
            tenant_id: Tenant identifier
            task_ids: Task IDs
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            Tasks found for the tenant
        """
        if not task_ids:
            return []

        statement = (
            select(Task)
            .where(Task.tenant_id == tenant_id)
            .where(Task.id.in_(task_ids))
            .order_by(Task.id)
        )

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list(
        self,
        tenant_id: str,
        client_id: Optional[str] = None,
        status: Optional[TaskStatus] = None,
        invoiced: Optional[bool] = None,
        created_since: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[Task], int]:
        filters = [Task.tenant_id == tenant_id]

        if client_id:
            filters.append(Task.client_id == client_id)
        if status:
            filters.append(Task.status == status)
        if invoiced is not None:
            filters.append(Task.invoiced.is_(invoiced))
        if created_since:
            filters.append(Task.created_at >= created_since)

        count_statement = select(func.count()).select_from(Task).where(*filters)
        total = (await self.session.execute(count_statement)).scalar_one()

        statement = (
            select(Task)
            .where(*filters)
            .order_by(Task.work_date.desc(), Task.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            statement = statement.limit(limit)

        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, task: Task) -> Task:
        task.updated_at = utcnow()
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def delete(self, task: Task) -> None:
        await self.session.delete(task)
        await self.session.flush()

    async def count_by_client(self, tenant_id: str, client_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(Task)
            .where(Task.tenant_id == tenant_id)
            .where(Task.client_id == client_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def mark_invoiced(self, tenant_id: str, task_ids: List[str], invoice_id: str) -> int:
        if not task_ids:
            return 0

        statement = (
            update(Task)
            .where(Task.tenant_id == tenant_id)
            .where(Task.id.in_(task_ids))
            .where(Task.invoiced.is_(False))
            .values(invoiced=True, invoice_id=invoice_id, updated_at=utcnow())
        )
        result = await self.session.execute(statement)
        return result.rowcount

    async def release_from_invoice(self, tenant_id: str, invoice_id: str) -> int:
        statement = (
            update(Task)
            .where(Task.tenant_id == tenant_id)
            .where(Task.invoice_id == invoice_id)
            .values(invoiced=False, invoice_id=None, updated_at=utcnow())
        )
        result = await self.session.execute(statement)
        return result.rowcount

    async def mark_completed(self, tenant_id: str, invoice_id: str) -> int:
        statement = (
            update(Task)
            .where(Task.tenant_id == tenant_id)
            .where(Task.invoice_id == invoice_id)
            .values(status=TaskStatus.COMPLETED, updated_at=utcnow())
        )
        result = await self.session.execute(statement)
        return result.rowcount

    async def get_invoiced_orphans(self) -> List[Task]:
        statement = (
            select(Task)
            .outerjoin(Invoice, Task.invoice_id == Invoice.id)
            .where(Task.invoiced.is_(True))
            .where(Invoice.id.is_(None))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_unflagged_billed(self) -> List[Task]:
        billed = select(InvoiceLine.task_id)
        statement = (
            select(Task)
            .where(Task.invoiced.is_(False))
            .where(Task.id.in_(billed))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
