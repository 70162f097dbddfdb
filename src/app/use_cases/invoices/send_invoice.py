"""SendInvoice Use Case

E-mails an invoice link to the client and marks the invoice sent.
"""

import html
import logging
from typing import Optional
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.mail_service import EmailMessage, MailService, TransientMailError
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.task_repository import TaskRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.business_profile_repository import BusinessProfileRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from src.domain.business_profile import BusinessProfile
from src.domain.client import Client, is_valid_email, normalize_email
from src.domain.invoice import Invoice, InvoiceStatus
from .dtos import SendInvoiceCommandDTO, SendInvoiceResponseDTO, InvoiceResponseDTO
from .lifecycle import change_status, transition_error

logger = logging.getLogger(__name__)


def preview_url(base_url: str, invoice_id: str) -> str:
    return f"{base_url.rstrip('/')}/invoices/{invoice_id}/preview"


def compose_invoice_email(
    invoice: Invoice,
    client: Client,
    url: str,
    profile: Optional[BusinessProfile] = None,
    recipient_name: Optional[str] = None,
    message: Optional[str] = None,
) -> tuple[str, str]:
    """Build (subject, html_body) for an invoice e-mail"""
    sender = profile.display_name if profile else "Your contractor"
    greeting = html.escape(recipient_name or client.name)
    due = invoice.due_date.isoformat() if invoice.due_date else "on receipt"

    subject = f"Invoice {invoice.number} from {sender}"
    parts = [
        f"<p>Hello {greeting},</p>",
        f"<p>{html.escape(sender)} has sent you invoice <strong>{html.escape(invoice.number)}</strong> "
        f"for {invoice.total:.2f} {html.escape(invoice.currency)}, due {due}.</p>",
    ]
    if message:
        parts.append(f"<p>{html.escape(message)}</p>")
    parts.append(f'<p><a href="{html.escape(url, quote=True)}">View invoice</a></p>')
    if profile and profile.payment_instructions:
        parts.append(f"<p>{html.escape(profile.payment_instructions)}</p>")

    return subject, "\n".join(parts)


class SendInvoice:
    """
    Use Case: Send an invoice by e-mail

    Business Rules:
    1. Invoice must belong to the tenant and be able to move to sent
    2. Recipient defaults to the client's e-mail and name
    3. Delivery retries transient failures (handled by the mail service)
    4. Status moves to sent only after delivery succeeded; a failed
       delivery leaves the invoice untouched
    5. Re-sending a sent invoice refreshes sent_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        client_repo: ClientRepository,
        task_repo: TaskRepository,
        profile_repo: BusinessProfileRepository,
        mail_service: MailService,
        app_base_url: str,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.client_repo = client_repo
        self.task_repo = task_repo
        self.profile_repo = profile_repo
        self.mail_service = mail_service
        self.app_base_url = app_base_url

    async def execute(self, command: SendInvoiceCommandDTO) -> Result[SendInvoiceResponseDTO]:
        if not command.tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            invoice = await self.invoice_repo.get_by_id(command.tenant_id, command.invoice_id)
            if not invoice:
                return Return.err(errors.not_found("invoice", command.invoice_id))

            if not invoice.can_transition_to(InvoiceStatus.SENT):
                return Return.err(transition_error(invoice, InvoiceStatus.SENT))

            client = await self.client_repo.get_by_id(command.tenant_id, invoice.client_id)
            if not client:
                return Return.err(errors.not_found("client", invoice.client_id))

            recipient = normalize_email(command.recipient_email or client.email)
            if not is_valid_email(recipient):
                return Return.err(
                    errors.validation("INVALID_EMAIL", f"Invalid recipient email: {recipient}")
                )

            profile = await self.profile_repo.get_by_tenant_id(command.tenant_id)
            url = preview_url(self.app_base_url, invoice.id)
            subject, body = compose_invoice_email(
                invoice,
                client,
                url,
                profile=profile,
                recipient_name=command.recipient_name,
                message=command.message,
            )

            email = EmailMessage(
                to=recipient,
                subject=subject,
                html_body=body,
                to_name=command.recipient_name or client.name,
                reply_to=profile.email if profile else None,
            )

            try:
                delivered = await self.mail_service.send(email)
            except TransientMailError as e:
                logger.warning(f"Invoice {invoice.number} delivery gave up after retries: {e}")
                return Return.err(
                    errors.delivery("EMAIL_DELIVERY_FAILED", "Failed to send invoice e-mail", str(e))
                )

            if not delivered:
                logger.warning(f"Invoice {invoice.number} delivery rejected for {recipient}")
                return Return.err(
                    errors.delivery(
                        "EMAIL_DELIVERY_FAILED",
                        "Failed to send invoice e-mail",
                        "Mail provider rejected the message",
                    )
                )

            if InvoiceStatus(invoice.status) == InvoiceStatus.SENT:
                invoice.sent_at = utcnow()
                invoice.updated_at = invoice.sent_at
            else:
                error = await change_status(invoice, InvoiceStatus.SENT, self.task_repo)
                if error:
                    return Return.err(error)

            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {invoice.number} sent to {recipient} for tenant {command.tenant_id}")

            lines = await self.invoice_line_repo.get_by_invoice_id(updated.id)
            return Return.ok(
                SendInvoiceResponseDTO(
                    invoice=InvoiceResponseDTO.from_entity(updated, lines),
                    recipient_email=recipient,
                    preview_url=url,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("SEND_INVOICE_FAILED", "Failed to send invoice", e))
