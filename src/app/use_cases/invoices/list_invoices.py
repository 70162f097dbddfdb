"""ListInvoices Use Case"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.use_cases import errors
from .dtos import ListInvoicesQueryDTO, ListInvoicesResponseDTO, InvoiceResponseDTO


class ListInvoices:
    """
    Use Case: List a tenant's invoices, newest first

    Optional filters by client and status.
    """

    def __init__(self, invoice_repo: InvoiceRepository, invoice_line_repo: InvoiceLineRepository):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, query: ListInvoicesQueryDTO) -> Result[ListInvoicesResponseDTO]:
        if not query.tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            invoices, total = await self.invoice_repo.list(
                tenant_id=query.tenant_id,
                client_id=query.client_id,
                status=query.status,
                limit=query.limit,
                offset=query.offset,
            )

            items = []
            for invoice in invoices:
                lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
                items.append(InvoiceResponseDTO.from_entity(invoice, lines))

            return Return.ok(
                ListInvoicesResponseDTO(
                    invoices=items,
                    total=total,
                    limit=query.limit,
                    offset=query.offset,
                )
            )

        except Exception as e:
            return Return.err(errors.internal("LIST_INVOICES_FAILED", "Failed to list invoices", e))
