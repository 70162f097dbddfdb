"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.business_profile import BusinessProfile
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF generation capabilities for invoices.
    """

    @abstractmethod
    def render_invoice(
        self,
        invoice: Invoice,
        client: Client,
        invoice_lines: List[InvoiceLine],
        profile: Optional[BusinessProfile] = None,
    ) -> bytes:
        """
        Render an invoice PDF

        Args:
            invoice: Invoice entity with billing details
            client: Client being billed
            invoice_lines: Line items of the invoice, ordered by position
            profile: Sender business details (optional)

        Returns:
            PDF document as bytes
        """
        pass
