"""Invoice status transitions shared by the invoice use cases"""

from typing import Optional
from libs.result import Error
from src.app.repositories.task_repository import TaskRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from src.domain.invoice import Invoice, InvoiceStatus


def transition_error(invoice: Invoice, status: InvoiceStatus) -> Error:
    current = InvoiceStatus(invoice.status)
    return errors.conflict(
        "INVALID_STATUS_TRANSITION",
        f"Invoice {invoice.number} cannot move from {current.value} to {status.value}",
        reason="Paid invoices are final",
    )


async def change_status(
    invoice: Invoice, status: InvoiceStatus, task_repo: TaskRepository
) -> Optional[Error]:
    """
    Apply a status change to an invoice in place

    Setting the current status again changes nothing. Moving to paid
    completes every task the invoice bills.

    Returns:
        None on success, a conflict Error for a disallowed edge
    """
    if not invoice.can_transition_to(status):
        return transition_error(invoice, status)

    if InvoiceStatus(invoice.status) == status:
        return None

    now = utcnow()
    invoice.status = status
    invoice.updated_at = now

    if status == InvoiceStatus.SENT:
        invoice.sent_at = now
    elif status == InvoiceStatus.PAID:
        invoice.paid_at = now
        await task_repo.mark_completed(invoice.tenant_id, invoice.id)

    return None
