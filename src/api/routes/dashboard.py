"""Dashboard API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.tasks import GetDashboardStats, DashboardStatsDTO
from src.adapter.repositories.task_repository import SqlAlchemyTaskRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.depends import get_session, get_tenant_id
from src.api.error import ClientError

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsDTO)
async def dashboard_stats(
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Unbilled work, recent activity and invoice totals for the tenant.

    **Example response:**
    ```json
    {
      "tenant_id": "tenant_xyz789",
      "unbilled_hours": "5.000000",
      "unbilled_amount": "250.000000",
      "unbilled_tasks_count": 2,
      "recent_tasks_count": 4,
      "active_clients": 1,
      "outstanding_amount": "275.000000",
      "paid_amount": "1200.000000",
      "generated_at": "2024-02-01T12:00:00Z"
    }
    ```
    """
    use_case = GetDashboardStats(
        SqlAlchemyTaskRepository(session),
        SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(tenant_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
