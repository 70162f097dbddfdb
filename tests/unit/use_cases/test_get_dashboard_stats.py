"""Unit tests for GetDashboardStats use case"""

import pytest
from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.tasks import GetDashboardStats
from src.domain.base import utcnow
from src.domain.invoice import InvoiceStatus
from tests.unit.factories import TENANT_ID, make_task


@pytest.mark.asyncio
class TestGetDashboardStats:

    async def test_aggregates_unbilled_work_and_invoices(self, mock_task_repo, mock_invoice_repo):
        """
        Given: Two unbilled tasks for one client, one invoiced task, and one old task
        When: Dashboard stats are computed
        Then: Unbilled figures use the snapshotted amounts and invoice sums come from the repo
        """
        old = utcnow() - timedelta(days=45)
        tasks = [
            make_task(id="t1", hours=Decimal("2"), amount=Decimal("100")),
            make_task(id="t2", hours=Decimal("3"), amount=Decimal("150")),
            make_task(id="t3", invoiced=True, invoice_id="invoice_1", amount=Decimal("500")),
            make_task(id="t4", client_id="client_2", hours=Decimal("1"),
                      amount=Decimal("70"), created_at=old),
        ]
        mock_task_repo.list = AsyncMock(return_value=(tasks, len(tasks)))

        async def sum_by_status(tenant_id, status):
            return {InvoiceStatus.SENT: Decimal("275"), InvoiceStatus.PAID: Decimal("1200")}[status]

        mock_invoice_repo.sum_total_by_status = AsyncMock(side_effect=sum_by_status)

        result = await GetDashboardStats(mock_task_repo, mock_invoice_repo).execute(TENANT_ID)

        assert result.is_ok()
        stats = result.value
        assert stats.unbilled_hours == Decimal("6.000000")
        assert stats.unbilled_amount == Decimal("320.000000")
        assert stats.unbilled_tasks_count == 3
        assert stats.recent_tasks_count == 3
        assert stats.active_clients == 2
        assert stats.outstanding_amount == Decimal("275.000000")
        assert stats.paid_amount == Decimal("1200.000000")

    async def test_empty_tenant(self, mock_task_repo, mock_invoice_repo):
        mock_task_repo.list = AsyncMock(return_value=([], 0))
        mock_invoice_repo.sum_total_by_status = AsyncMock(return_value=Decimal("0"))

        result = await GetDashboardStats(mock_task_repo, mock_invoice_repo).execute(TENANT_ID)

        assert result.value.unbilled_amount == Decimal("0")
        assert result.value.active_clients == 0
