"""Unit tests for DeleteInvoice use case"""

import pytest
from unittest.mock import AsyncMock

from src.app.use_cases.invoices import DeleteInvoice
from src.domain.invoice import InvoiceStatus
from tests.unit.factories import TENANT_ID, make_invoice


@pytest.fixture
def use_case(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo):
    mock_task_repo.release_from_invoice = AsyncMock(return_value=2)
    mock_invoice_line_repo.delete_by_invoice_id = AsyncMock()
    mock_invoice_repo.delete = AsyncMock()
    return DeleteInvoice(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo)


@pytest.mark.asyncio
class TestDeleteInvoice:

    @pytest.mark.parametrize("status", list(InvoiceStatus))
    async def test_releases_tasks_in_any_status(
        self, use_case, status, mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_task_repo
    ):
        """
        Given: An invoice in any status billing two tasks
        When: It is deleted
        Then: Tasks are released, lines and invoice removed, and the change committed
        """
        invoice = make_invoice(status=status)
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await use_case.execute(TENANT_ID, "invoice_1")

        assert result.is_ok()
        assert result.value is True
        mock_task_repo.release_from_invoice.assert_called_once_with(TENANT_ID, "invoice_1")
        mock_invoice_line_repo.delete_by_invoice_id.assert_called_once_with("invoice_1")
        mock_invoice_repo.delete.assert_called_once_with(invoice)
        mock_uow.commit.assert_called_once()

    async def test_other_tenant_invoice_is_not_found(self, use_case, mock_invoice_repo, mock_task_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute("tenant_other", "invoice_1")

        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_task_repo.release_from_invoice.assert_not_called()

    async def test_failure_rolls_back(self, use_case, mock_uow, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_invoice_repo.delete = AsyncMock(side_effect=Exception("db down"))

        result = await use_case.execute(TENANT_ID, "invoice_1")

        assert result.error.code == "DELETE_INVOICE_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_requires_tenant(self, use_case):
        result = await use_case.execute("", "invoice_1")

        assert result.error.code == "UNAUTHENTICATED"
