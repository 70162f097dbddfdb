"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from decimal import Decimal
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utcnow
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_sequence import InvoiceSequence
from src.domain.money import quantize


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, tenant_id: str, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve a tenant's invoice by ID

        Args:
            tenant_id: Tenant identifier
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        statement = (
            select(Invoice)
            .where(Invoice.tenant_id == tenant_id)
            .where(Invoice.id == invoice_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: str,
        client_id: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        Retrieve invoices by tenant ID

        Args:
            tenant_id: Tenant identifier
            client_id: Optional filter by client
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            Tuple of (invoices, total matching count)
        """
        filters = [Invoice.tenant_id == tenant_id]

        if client_id:
            filters.append(Invoice.client_id == client_id)

        if status:
            filters.append(Invoice.status == status)

        count_statement = select(func.count()).select_from(Invoice).where(*filters)
        total = (await self.session.execute(count_statement)).scalar_one()

        statement = select(Invoice).where(*filters)
        statement = statement.order_by(Invoice.created_at.desc(), Invoice.number.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def count_by_client(self, tenant_id: str, client_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.tenant_id == tenant_id)
            .where(Invoice.client_id == client_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def sum_total_by_status(self, tenant_id: str, status: InvoiceStatus) -> Decimal:
        statement = (
            select(func.sum(Invoice.total))
            .where(Invoice.tenant_id == tenant_id)
            .where(Invoice.status == status)
        )
        result = await self.session.execute(statement)
        value = result.scalar_one_or_none()
        return quantize(Decimal(str(value)) if value is not None else Decimal("0"))

    async def next_invoice_number(self, tenant_id: str) -> str:
        """
        Reserve the next invoice number for a tenant

        Format: INV-NNNNNN (e.g., INV-000001). The tenant's sequence row is
        locked with SELECT FOR UPDATE until the surrounding transaction ends.

        Returns:
            Unique invoice number string
        """
        statement = (
            select(InvoiceSequence)
            .where(InvoiceSequence.tenant_id == tenant_id)
            .with_for_update()
        )
        result = await self.session.execute(statement)
        sequence = result.scalar_one_or_none()

        if sequence is None:
            sequence = InvoiceSequence(tenant_id=tenant_id, last_number=0)
            self.session.add(sequence)

        number = sequence.next_number()
        await self.session.flush()
        return number
