"""DeleteInvoice Use Case

Deletes an invoice and returns its tasks to the unbilled pool.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.task_repository import TaskRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.use_cases import errors

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice

    Business Rules:
    1. Invoice must belong to the tenant
    2. Every billed task reverts to invoiced=False, invoice_id=None
    3. Lines and invoice are deleted in the same transaction
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

    async def execute(self, tenant_id: str, invoice_id: str) -> Result[bool]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            invoice = await self.invoice_repo.get_by_id(tenant_id, invoice_id)
            if not invoice:
                return Return.err(errors.not_found("invoice", invoice_id))

            released = await self.task_repo.release_from_invoice(tenant_id, invoice.id)
            await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(
                f"Deleted invoice {invoice.number} for tenant {tenant_id}, "
                f"released {released} tasks"
            )
            return Return.ok(True)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("DELETE_INVOICE_FAILED", "Failed to delete invoice", e))
