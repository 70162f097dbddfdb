"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, List, Tuple
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for billing operations.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, tenant_id: str, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve a tenant's invoice by ID

        Args:
            tenant_id: Tenant identifier
            invoice_id: Invoice ID

        Returns:
            Invoice if found and owned by the tenant, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        tenant_id: str,
        client_id: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        Retrieve invoices by tenant ID, newest first

        Args:
            tenant_id: Tenant identifier
            client_id: Optional filter by client
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            Tuple of (invoices, total matching count)
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def count_by_client(self, tenant_id: str, client_id: str) -> int:
        pass

    @abstractmethod
    async def sum_total_by_status(self, tenant_id: str, status: InvoiceStatus) -> Decimal:
        pass

    @abstractmethod
    async def next_invoice_number(self, tenant_id: str) -> str:
        """
        Reserve the next invoice number for a tenant

        Format: INV-NNNNNN, monotonic per tenant. Must be called inside the
        transaction that inserts the invoice.

        Returns:
            Unique invoice number string
        """
        pass
