"""Task Repository Interface

Defines the contract for task persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List, Tuple
from src.domain.task import Task, TaskStatus


class TaskRepository(ABC):
    """
    Repository interface for Task persistence

    Invoiced-state changes are expressed as conditional bulk updates so a
    task cannot be claimed by two invoices.
    """

    @abstractmethod
    async def create(self, task: Task) -> Task:
        pass

    @abstractmethod
    async def get_by_id(self, tenant_id: str, task_id: str) -> Optional[Task]:
        """
        Retrieve a tenant's task by ID

        Returns:
            Task if found and owned by the tenant, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_ids(
        self, tenant_id: str, task_ids: List[str], for_update: bool = False
    ) -> List[Task]:
        """
        Retrieve a tenant's tasks by IDs

        Args:
            tenant_id: Tenant identifier
            task_ids: Task IDs to load
            for_update: If True, lock the rows with SELECT FOR UPDATE

        Returns:
            Tasks that exist and belong to the tenant (missing IDs are skipped)
        """
        pass

    @abstractmethod
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
        """
        List a tenant's tasks, newest first

        Returns:
            Tuple of (tasks, total matching count)
        """
        pass

    @abstractmethod
    async def update(self, task: Task) -> Task:
        pass

    @abstractmethod
    async def delete(self, task: Task) -> None:
        pass

    @abstractmethod
    async def count_by_client(self, tenant_id: str, client_id: str) -> int:
        pass

    @abstractmethod
    async def mark_invoiced(self, tenant_id: str, task_ids: List[str], invoice_id: str) -> int:
        """
        Claim tasks for an invoice

        Only tasks that are still un-invoiced are updated.

        Returns:
            Number of tasks actually claimed
        """
        pass

    @abstractmethod
    async def release_from_invoice(self, tenant_id: str, invoice_id: str) -> int:
        """
        Revert every task claimed by the invoice to invoiced=False

        Returns:
            Number of tasks released
        """
        pass

    @abstractmethod
    async def mark_completed(self, tenant_id: str, invoice_id: str) -> int:
        """
        Set status=completed on every task claimed by the invoice

        Returns:
            Number of tasks updated
        """
        pass

    @abstractmethod
    async def get_invoiced_orphans(self) -> List[Task]:
        """
        Tasks flagged invoiced whose invoice no longer exists (all tenants)
        """
        pass

    @abstractmethod
    async def get_unflagged_billed(self) -> List[Task]:
        """
        Tasks referenced by an invoice line but not flagged invoiced (all tenants)
        """
        pass
