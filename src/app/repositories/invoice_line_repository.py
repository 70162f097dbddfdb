"""Invoice Line Repository Interface

Defines the contract for invoice line persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_line import InvoiceLine


class InvoiceLineRepository(ABC):
    """
    Repository interface for InvoiceLine persistence
    """

    @abstractmethod
    async def create_many(self, lines: List[InvoiceLine]) -> List[InvoiceLine]:
        """
        Persist the lines of a new invoice

        Args:
            lines: Lines to persist

        Returns:
            Persisted lines
        """
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLine]:
        """
        Retrieve all lines of an invoice ordered by position

        Args:
            invoice_id: Invoice ID

        Returns:
            List of invoice lines
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        pass
