"""GetInvoice and GetInvoiceData Use Cases"""

from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.business_profile_repository import BusinessProfileRepository
from src.app.use_cases import errors
from src.app.use_cases.clients.dtos import ClientResponseDTO
from src.app.use_cases.profiles.dtos import BusinessProfileResponseDTO
from .dtos import InvoiceDetailDTO, InvoiceDataDTO, InvoiceLineDTO, InvoiceResponseDTO


class GetInvoice:
    """
    Use Case: Retrieve an invoice with its client and line items
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        client_repo: ClientRepository,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.client_repo = client_repo

    async def execute(self, tenant_id: str, invoice_id: str) -> Result[InvoiceDetailDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            invoice = await self.invoice_repo.get_by_id(tenant_id, invoice_id)
            if not invoice:
                return Return.err(errors.not_found("invoice", invoice_id))

            client = await self.client_repo.get_by_id(tenant_id, invoice.client_id)
            if not client:
                return Return.err(errors.not_found("client", invoice.client_id))

            lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)

            return Return.ok(
                InvoiceDetailDTO(
                    invoice=InvoiceResponseDTO.from_entity(invoice, lines),
                    client=ClientResponseDTO.from_entity(client),
                    line_items=[InvoiceLineDTO.from_entity(line) for line in lines],
                )
            )

        except Exception as e:
            return Return.err(errors.internal("GET_INVOICE_FAILED", "Failed to get invoice", e))


class GetInvoiceData(GetInvoice):
    """
    Use Case: Retrieve everything needed to render an invoice

    Adds the tenant's business profile (if any) to the invoice detail.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        client_repo: ClientRepository,
        profile_repo: BusinessProfileRepository,
    ):
        super().__init__(invoice_repo, invoice_line_repo, client_repo)
        self.profile_repo = profile_repo

    async def execute(self, tenant_id: str, invoice_id: str) -> Result[InvoiceDataDTO]:
        result = await super().execute(tenant_id, invoice_id)
        if result.is_err():
            return result

        try:
            profile = await self.profile_repo.get_by_tenant_id(tenant_id)
        except Exception as e:
            return Return.err(errors.internal("GET_INVOICE_FAILED", "Failed to get invoice", e))

        detail = result.value
        return Return.ok(
            InvoiceDataDTO(
                invoice=detail.invoice,
                client=detail.client,
                line_items=detail.line_items,
                profile=BusinessProfileResponseDTO.from_entity(profile) if profile else None,
            )
        )
