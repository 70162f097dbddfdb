"""GenerateInvoicePdf Use Case

Renders an invoice to PDF for download.
"""

import base64
from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.business_profile_repository import BusinessProfileRepository
from src.app.services.pdf_service import PdfService
from src.app.use_cases import errors
from src.domain.base import utcnow
from .dtos import InvoicePdfResponseDTO


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must belong to the tenant (any status)
    2. PDF carries the client, line items and the sender business profile
    3. Returns PDF as base64-encoded string

    Flow:
    1. Retrieve invoice, client and line items
    2. Retrieve business profile (optional)
    3. Generate PDF using PDF service
    4. Return response with PDF as base64
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        client_repo: ClientRepository,
        profile_repo: BusinessProfileRepository,
        pdf_service: PdfService,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.client_repo = client_repo
        self.profile_repo = profile_repo
        self.pdf_service = pdf_service

    async def execute(self, tenant_id: str, invoice_id: str) -> Result[InvoicePdfResponseDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            # Step 1: Invoice, client, lines
            invoice = await self.invoice_repo.get_by_id(tenant_id, invoice_id)
            if not invoice:
                return Return.err(errors.not_found("invoice", invoice_id))

            client = await self.client_repo.get_by_id(tenant_id, invoice.client_id)
            if not client:
                return Return.err(errors.not_found("client", invoice.client_id))

            invoice_lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)

            # Step 2: Sender details
            profile = await self.profile_repo.get_by_tenant_id(tenant_id)

            # Step 3: Render
            pdf_bytes = self.pdf_service.render_invoice(
                invoice=invoice,
                client=client,
                invoice_lines=invoice_lines,
                profile=profile,
            )

            # Step 4: Build response
            return Return.ok(
                InvoicePdfResponseDTO(
                    invoice_id=invoice.id,
                    number=invoice.number,
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                errors.internal("GENERATE_PDF_FAILED", "Failed to generate invoice PDF", e)
            )
