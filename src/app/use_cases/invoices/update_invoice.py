"""UpdateInvoice and UpdateInvoiceStatus Use Cases"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.task_repository import TaskRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from src.domain.invoice import InvoiceStatus
from src.domain.money import HUNDRED, ZERO
from .dtos import UpdateInvoiceCommandDTO, InvoiceResponseDTO
from .lifecycle import change_status


class UpdateInvoiceStatus:
    """
    Use Case: Move an invoice along its lifecycle

    Business Rules:
    1. Invoice must belong to the tenant
    2. Only allowed edges are accepted (paid is terminal)
    3. sent sets sent_at; paid sets paid_at and completes the billed tasks
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        task_repo: TaskRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.task_repo = task_repo

    async def execute(
        self, tenant_id: str, invoice_id: str, status: InvoiceStatus
    ) -> Result[InvoiceResponseDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            invoice = await self.invoice_repo.get_by_id(tenant_id, invoice_id)
            if not invoice:
                return Return.err(errors.not_found("invoice", invoice_id))

            error = await change_status(invoice, status, self.task_repo)
            if error:
                await self.uow.rollback()
                return Return.err(error)

            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            lines = await self.invoice_line_repo.get_by_invoice_id(updated.id)
            return Return.ok(InvoiceResponseDTO.from_entity(updated, lines))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                errors.internal("UPDATE_INVOICE_STATUS_FAILED", "Failed to update invoice status", e)
            )


class MarkInvoicePaid(UpdateInvoiceStatus):
    """
    Use Case: Record payment of an invoice

    paid_at is set to now and every billed task becomes completed.
    """

    async def execute(self, tenant_id: str, invoice_id: str) -> Result[InvoiceResponseDTO]:
        return await super().execute(tenant_id, invoice_id, InvoiceStatus.PAID)


class UpdateInvoice:
    """
    Use Case: Edit an invoice

    Business Rules:
    1. Unset fields keep their current value
    2. A tax change recomputes total from the stored subtotal
    3. due_date must not precede issue_date after the patch
    4. A status change follows the same rules as UpdateInvoiceStatus
    5. A paid invoice is read-only; any field edit is a conflict
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        task_repo: TaskRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.task_repo = task_repo

    @staticmethod
    def _edits_fields(command: UpdateInvoiceCommandDTO) -> bool:
        return any(
            value is not None
            for value in (command.issue_date, command.due_date, command.tax_rate, command.notes)
        )

    async def execute(self, command: UpdateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        if not command.tenant_id:
            return Return.err(errors.unauthenticated())

        if command.tax_rate is not None and (command.tax_rate < ZERO or command.tax_rate > HUNDRED):
            return Return.err(
                errors.validation("INVALID_TAX_RATE", "Tax rate must be between 0 and 100")
            )

        try:
            invoice = await self.invoice_repo.get_by_id(command.tenant_id, command.invoice_id)
            if not invoice:
                return Return.err(errors.not_found("invoice", command.invoice_id))

            if invoice.status == InvoiceStatus.PAID and self._edits_fields(command):
                return Return.err(
                    errors.conflict(
                        "INVOICE_PAID",
                        "Paid invoices cannot be edited",
                        reason=f"invoice_id={invoice.id}",
                    )
                )

            issue_date = command.issue_date or invoice.issue_date
            due_date = command.due_date if command.due_date is not None else invoice.due_date
            if due_date is not None and due_date < issue_date:
                return Return.err(
                    errors.validation("INVALID_DUE_DATE", "Due date cannot be before issue date")
                )

            if command.status is not None:
                error = await change_status(invoice, command.status, self.task_repo)
                if error:
                    await self.uow.rollback()
                    return Return.err(error)

            invoice.issue_date = issue_date
            invoice.due_date = due_date
            if command.notes is not None:
                invoice.notes = command.notes
            if command.tax_rate is not None:
                invoice.tax_rate = command.tax_rate
                invoice.recompute_total()
            invoice.updated_at = utcnow()

            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            lines = await self.invoice_line_repo.get_by_invoice_id(updated.id)
            return Return.ok(InvoiceResponseDTO.from_entity(updated, lines))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("UPDATE_INVOICE_FAILED", "Failed to update invoice", e))
