"""Unit tests for UpdateInvoiceStatus, MarkInvoicePaid and UpdateInvoice"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

from libs.result import ErrorKind
from src.app.use_cases.invoices import (
    UpdateInvoiceStatus,
    MarkInvoicePaid,
    UpdateInvoice,
    UpdateInvoiceCommandDTO,
)
from src.domain.invoice import InvoiceStatus
from tests.unit.factories import TENANT_ID, make_invoice, make_line


@pytest.fixture
def repos(mock_invoice_repo, mock_invoice_line_repo, mock_task_repo):
    mock_invoice_repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    mock_invoice_line_repo.get_by_invoice_id = AsyncMock(return_value=[make_line(0), make_line(1)])
    mock_task_repo.mark_completed = AsyncMock(return_value=2)


@pytest.mark.asyncio
class TestUpdateInvoiceStatus:

    async def test_draft_to_sent_sets_sent_at(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        use_case = UpdateInvoiceStatus(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(TENANT_ID, "invoice_1", InvoiceStatus.SENT)

        assert result.is_ok()
        assert result.value.status == "sent"
        assert result.value.sent_at is not None
        assert result.value.task_ids == ["task_1", "task_2"]
        mock_task_repo.mark_completed.assert_not_called()
        mock_uow.commit.assert_called_once()

    async def test_paid_completes_billed_tasks(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        """
        Given: A sent invoice
        When: It is marked paid
        Then: paid_at is set and every billed task becomes completed
        """
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(
                status=InvoiceStatus.SENT, sent_at=datetime(2024, 2, 2, tzinfo=timezone.utc)
            )
        )
        use_case = MarkInvoicePaid(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(TENANT_ID, "invoice_1")

        assert result.value.status == "paid"
        assert result.value.paid_at is not None
        mock_task_repo.mark_completed.assert_called_once_with(TENANT_ID, "invoice_1")

    async def test_paid_is_terminal(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(
                status=InvoiceStatus.PAID, paid_at=datetime(2024, 2, 3, tzinfo=timezone.utc)
            )
        )
        use_case = UpdateInvoiceStatus(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(TENANT_ID, "invoice_1", InvoiceStatus.SENT)

        assert result.error.code == "INVALID_STATUS_TRANSITION"
        assert result.error.kind == ErrorKind.CONFLICT
        mock_invoice_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_same_status_keeps_timestamps(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        sent_at = datetime(2024, 2, 2, tzinfo=timezone.utc)
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.SENT, sent_at=sent_at)
        )
        use_case = UpdateInvoiceStatus(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(TENANT_ID, "invoice_1", InvoiceStatus.SENT)

        assert result.value.sent_at == sent_at

    async def test_unknown_invoice(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)
        use_case = UpdateInvoiceStatus(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(TENANT_ID, "missing", InvoiceStatus.SENT)

        assert result.error.code == "INVOICE_NOT_FOUND"
        assert result.error.kind == ErrorKind.NOT_FOUND


@pytest.mark.asyncio
class TestUpdateInvoice:

    async def test_tax_change_recomputes_total(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        use_case = UpdateInvoice(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(
            UpdateInvoiceCommandDTO(
                tenant_id=TENANT_ID, invoice_id="invoice_1", tax_rate=Decimal("20"), notes="Net 30"
            )
        )

        assert result.value.total == Decimal("300")
        assert result.value.subtotal == Decimal("250")
        assert result.value.notes == "Net 30"

    async def test_due_date_checked_against_stored_issue_date(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        use_case = UpdateInvoice(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(
            UpdateInvoiceCommandDTO(
                tenant_id=TENANT_ID, invoice_id="invoice_1", due_date=date(2024, 1, 1)
            )
        )

        assert result.error.code == "INVALID_DUE_DATE"
        mock_invoice_repo.update.assert_not_called()

    async def test_rejects_out_of_range_tax(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock()
        use_case = UpdateInvoice(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(
            UpdateInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id="invoice_1", tax_rate=Decimal("101"))
        )

        assert result.error.code == "INVALID_TAX_RATE"
        mock_invoice_repo.get_by_id.assert_not_called()

    async def test_status_change_through_edit_follows_lifecycle(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.PAID)
        )
        use_case = UpdateInvoice(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(
            UpdateInvoiceCommandDTO(
                tenant_id=TENANT_ID, invoice_id="invoice_1", status=InvoiceStatus.DRAFT
            )
        )

        assert result.error.code == "INVALID_STATUS_TRANSITION"

    async def test_paid_invoice_fields_are_read_only(
        self, repos, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        """
        Given: A paid invoice
        When: Its tax rate is edited
        Then: CONFLICT, and neither tax nor total changes
        """
        paid = make_invoice(
            status=InvoiceStatus.PAID, paid_at=datetime(2024, 2, 3, tzinfo=timezone.utc)
        )
        total = paid.total
        mock_invoice_repo.get_by_id = AsyncMock(return_value=paid)
        mock_invoice_repo.update = AsyncMock()
        use_case = UpdateInvoice(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)

        result = await use_case.execute(
            UpdateInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id="invoice_1", tax_rate=Decimal("20"))
        )

        assert result.error.code == "INVOICE_PAID"
        assert result.error.kind == ErrorKind.CONFLICT
        assert paid.tax_rate == Decimal("10")
        assert paid.total == total
        mock_invoice_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()
