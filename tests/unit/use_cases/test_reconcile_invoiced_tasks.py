"""Unit tests for ReconcileInvoicedTasks use case"""

import pytest
from unittest.mock import AsyncMock

from src.app.use_cases.invoices import ReconcileInvoicedTasks
from src.app.use_cases.invoices.reconcile_invoiced_tasks import ORPHANED_FLAG, MISSING_FLAG
from tests.unit.factories import make_task


@pytest.fixture
def drifted_repo(mock_task_repo):
    mock_task_repo.get_invoiced_orphans = AsyncMock(
        return_value=[make_task(id="task_orphan", invoiced=True, invoice_id="invoice_gone")]
    )
    mock_task_repo.get_unflagged_billed = AsyncMock(return_value=[make_task(id="task_unflagged")])
    mock_task_repo.update = AsyncMock(side_effect=lambda task: task)
    return mock_task_repo


@pytest.mark.asyncio
class TestReconcileInvoicedTasks:

    async def test_no_drift(self, mock_uow, mock_task_repo):
        mock_task_repo.get_invoiced_orphans = AsyncMock(return_value=[])
        mock_task_repo.get_unflagged_billed = AsyncMock(return_value=[])

        result = await ReconcileInvoicedTasks(mock_uow, mock_task_repo).execute()

        assert result.is_ok()
        assert result.value.drifts == []
        mock_uow.commit.assert_not_called()

    async def test_report_only_by_default(self, mock_uow, drifted_repo):
        """
        Given: One orphaned flag and one missing flag
        When: Reconciliation runs without repair
        Then: Both drifts are reported and nothing is written
        """
        result = await ReconcileInvoicedTasks(mock_uow, drifted_repo).execute()

        assert result.value.orphaned_flags == 1
        assert result.value.missing_flags == 1
        assert result.value.repaired == 0
        assert [d.drift for d in result.value.drifts] == [ORPHANED_FLAG, MISSING_FLAG]
        drifted_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_repair_releases_orphans_only(self, mock_uow, drifted_repo):
        result = await ReconcileInvoicedTasks(mock_uow, drifted_repo, repair=True).execute()

        assert result.value.repaired == 1
        released = drifted_repo.update.call_args.args[0]
        assert released.id == "task_orphan"
        assert released.invoiced is False
        assert released.invoice_id is None
        assert result.value.drifts[0].repaired is True
        assert result.value.drifts[1].repaired is False
        mock_uow.commit.assert_called_once()

    async def test_failure_rolls_back(self, mock_uow, mock_task_repo):
        mock_task_repo.get_invoiced_orphans = AsyncMock(side_effect=Exception("db down"))

        result = await ReconcileInvoicedTasks(mock_uow, mock_task_repo).execute()

        assert result.error.code == "RECONCILIATION_FAILED"
        mock_uow.rollback.assert_called_once()
