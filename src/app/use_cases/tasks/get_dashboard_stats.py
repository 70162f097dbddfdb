"""Get Dashboard Stats Use Case

Aggregates unbilled work and invoice totals for a tenant.
"""

from datetime import timedelta
from decimal import Decimal
from libs.result import Result, Return
from src.app.repositories.task_repository import TaskRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases import errors
from src.domain.base import as_utc, utcnow
from src.domain.invoice import InvoiceStatus
from src.domain.money import quantize
from .dtos import DashboardStatsDTO
from .list_tasks import RECENT_TASKS_DAYS


class GetDashboardStats:
    """
    Get Dashboard Stats Use Case

    Read-only aggregation over all of the tenant's tasks.

    unbilled_amount sums each task's snapshotted amount rather than
    re-pricing with the client's current rate, so it always matches what an
    invoice created now would bill.
    """

    def __init__(self, task_repo: TaskRepository, invoice_repo: InvoiceRepository):
        self.task_repo = task_repo
        self.invoice_repo = invoice_repo

    async def execute(self, tenant_id: str) -> Result[DashboardStatsDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        now = utcnow()
        recent_since = now - timedelta(days=RECENT_TASKS_DAYS)

        try:
            tasks, _ = await self.task_repo.list(tenant_id=tenant_id)
            outstanding = await self.invoice_repo.sum_total_by_status(tenant_id, InvoiceStatus.SENT)
            paid = await self.invoice_repo.sum_total_by_status(tenant_id, InvoiceStatus.PAID)
        except Exception as e:
            return Return.err(
                errors.internal("DASHBOARD_STATS_FAILED", "Failed to compute dashboard stats", e)
            )

        unbilled = [task for task in tasks if not task.invoiced]
        unbilled_hours = sum((Decimal(t.hours) for t in unbilled), Decimal("0"))
        unbilled_amount = sum((Decimal(t.amount) for t in unbilled), Decimal("0"))
        recent_count = sum(1 for t in tasks if as_utc(t.created_at) >= recent_since)
        active_clients = {t.client_id for t in unbilled}

        return Return.ok(
            DashboardStatsDTO(
                tenant_id=tenant_id,
                unbilled_hours=quantize(unbilled_hours),
                unbilled_amount=quantize(unbilled_amount),
                unbilled_tasks_count=len(unbilled),
                recent_tasks_count=recent_count,
                active_clients=len(active_clients),
                outstanding_amount=quantize(outstanding),
                paid_amount=quantize(paid),
                generated_at=now,
            )
        )
