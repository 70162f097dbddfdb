"""Unit tests for SendInvoice use case

Tests cover:
- Delivery then status change to sent
- Re-sending refreshes sent_at
- Failed delivery leaves the invoice untouched
- Paid invoices cannot be sent
- E-mail composition
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from libs.result import ErrorKind
from src.app.services.mail_service import TransientMailError
from src.app.use_cases.invoices import SendInvoice, SendInvoiceCommandDTO
from src.app.use_cases.invoices.send_invoice import compose_invoice_email, preview_url
from src.domain.business_profile import BusinessProfile
from src.domain.invoice import InvoiceStatus
from tests.unit.factories import TENANT_ID, make_client, make_invoice, make_line


@pytest.fixture
def mock_mail_service():
    service = AsyncMock()
    service.send = AsyncMock(return_value=True)
    return service


@pytest.fixture
def use_case(
    mock_uow,
    mock_invoice_repo,
    mock_invoice_line_repo,
    mock_client_repo,
    mock_task_repo,
    mock_profile_repo,
    mock_mail_service,
):
    mock_invoice_repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    mock_invoice_line_repo.get_by_invoice_id = AsyncMock(return_value=[make_line(0)])
    mock_client_repo.get_by_id = AsyncMock(return_value=make_client())
    mock_profile_repo.get_by_tenant_id = AsyncMock(
        return_value=BusinessProfile(
            tenant_id=TENANT_ID,
            name="Jane Doe",
            email="jane@studio.example",
            business_name="Doe Studio",
            payment_instructions="IBAN DE00 1234",
        )
    )
    return SendInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        invoice_line_repo=mock_invoice_line_repo,
        client_repo=mock_client_repo,
        task_repo=mock_task_repo,
        profile_repo=mock_profile_repo,
        mail_service=mock_mail_service,
        app_base_url="https://app.example/",
    )


@pytest.mark.asyncio
class TestSendInvoice:

    async def test_sends_to_client_and_marks_sent(
        self, use_case, mock_invoice_repo, mock_mail_service, mock_uow
    ):
        """
        Given: A draft invoice and a client with an e-mail
        When: The invoice is sent without an explicit recipient
        Then: The client receives a link and the invoice becomes sent
        """
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        result = await use_case.execute(
            SendInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id="invoice_1")
        )

        assert result.is_ok()
        assert result.value.recipient_email == "billing@acme.example"
        assert result.value.preview_url == "https://app.example/invoices/invoice_1/preview"
        assert result.value.invoice.status == "sent"
        assert result.value.invoice.sent_at is not None

        message = mock_mail_service.send.call_args.args[0]
        assert message.to == "billing@acme.example"
        assert message.reply_to == "jane@studio.example"
        assert "INV-000001" in message.subject
        assert "Doe Studio" in message.subject
        mock_uow.commit.assert_called_once()

    async def test_explicit_recipient_is_normalized(self, use_case, mock_invoice_repo, mock_mail_service):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        result = await use_case.execute(
            SendInvoiceCommandDTO(
                tenant_id=TENANT_ID,
                invoice_id="invoice_1",
                recipient_email="  AP@Acme.Example ",
                recipient_name="Accounts Payable",
            )
        )

        assert result.value.recipient_email == "ap@acme.example"
        assert mock_mail_service.send.call_args.args[0].to_name == "Accounts Payable"

    async def test_resend_refreshes_sent_at(self, use_case, mock_invoice_repo):
        first_sent = datetime(2024, 2, 2, tzinfo=timezone.utc)
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.SENT, sent_at=first_sent)
        )

        result = await use_case.execute(
            SendInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id="invoice_1")
        )

        assert result.value.invoice.status == "sent"
        assert result.value.invoice.sent_at > first_sent

    async def test_paid_invoice_cannot_be_sent(self, use_case, mock_invoice_repo, mock_mail_service):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.PAID)
        )

        result = await use_case.execute(
            SendInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id="invoice_1")
        )

        assert result.error.code == "INVALID_STATUS_TRANSITION"
        mock_mail_service.send.assert_not_called()

    async def test_transient_failure_after_retries(
        self, use_case, mock_invoice_repo, mock_mail_service, mock_uow
    ):
        """
        Given: The mail provider keeps timing out
        When: The invoice is sent
        Then: DELIVERY error and the invoice stays a draft
        """
        invoice = make_invoice()
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_mail_service.send = AsyncMock(side_effect=TransientMailError("timeout"))

        result = await use_case.execute(
            SendInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id="invoice_1")
        )

        assert result.error.code == "EMAIL_DELIVERY_FAILED"
        assert result.error.kind == ErrorKind.DELIVERY
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.sent_at is None
        mock_invoice_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_rejected_message(self, use_case, mock_invoice_repo, mock_mail_service, mock_uow):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_mail_service.send = AsyncMock(return_value=False)

        result = await use_case.execute(
            SendInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id="invoice_1")
        )

        assert result.error.kind == ErrorKind.DELIVERY
        mock_uow.commit.assert_not_called()

    async def test_invalid_recipient(self, use_case, mock_invoice_repo, mock_mail_service):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        result = await use_case.execute(
            SendInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id="invoice_1", recipient_email="nope")
        )

        assert result.error.code == "INVALID_EMAIL"
        mock_mail_service.send.assert_not_called()


class TestComposeInvoiceEmail:

    def test_escapes_user_content(self):
        client = make_client(name="<Acme & Sons>")
        subject, body = compose_invoice_email(
            make_invoice(),
            client,
            preview_url("https://app.example", "invoice_1"),
            message="<script>alert(1)</script>",
        )

        assert subject == "Invoice INV-000001 from Your contractor"
        assert "&lt;Acme &amp; Sons&gt;" in body
        assert "<script>" not in body
        assert "275.00 USD" in body
        assert "due 2024-03-01" in body
        assert 'href="https://app.example/invoices/invoice_1/preview"' in body
