"""Data Transfer Objects for Task Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field
from src.domain.base import as_utc
from src.domain.task import Task, TaskStatus


class CreateTaskCommandDTO(BaseModel):
    """
    Command DTO for logging a task

    hourly_rate overrides the client's current rate when given.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    client_id: str = Field(..., description="Client the work was performed for")
    description: str = Field(..., description="What was done")
    hours: Decimal = Field(..., description="Hours worked (must be >= 0)")
    work_date: date = Field(..., description="Date the work was performed")
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    hourly_rate: Optional[Decimal] = Field(
        default=None,
        description="Rate override; defaults to the client's rate"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "client_id": "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed",
                "description": "Landing page redesign",
                "hours": "2.5",
                "work_date": "2024-01-15",
                "status": "pending",
            }
        }


class UpdateTaskCommandDTO(BaseModel):
    """
    Command DTO for editing a task

    Unset fields keep their current value. amount is always recomputed.
    """

    tenant_id: str
    task_id: str
    description: Optional[str] = None
    hours: Optional[Decimal] = None
    work_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    client_id: Optional[str] = Field(
        default=None,
        description="Moving to another client re-snapshots the rate"
    )
    hourly_rate: Optional[Decimal] = None


class ListTasksQueryDTO(BaseModel):
    tenant_id: str
    client_id: Optional[str] = None
    status: Optional[TaskStatus] = None
    invoiced: Optional[bool] = None
    limit: int = Field(default=50, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class TaskResponseDTO(BaseModel):
    id: str
    tenant_id: str
    client_id: str
    description: str
    hours: Decimal
    work_date: date
    status: str
    hourly_rate: Decimal
    amount: Decimal
    invoiced: bool
    invoice_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponseDTO":
        return cls(
            id=task.id,
            tenant_id=task.tenant_id,
            client_id=task.client_id,
            description=task.description,
            hours=task.hours,
            work_date=task.work_date,
            status=TaskStatus(task.status).value,
            hourly_rate=task.hourly_rate,
            amount=task.amount,
            invoiced=bool(task.invoiced),
            invoice_id=task.invoice_id,
            created_at=as_utc(task.created_at),
            updated_at=as_utc(task.updated_at),
        )


class ListTasksResponseDTO(BaseModel):
    tasks: List[TaskResponseDTO]
    total: int
    limit: Optional[int] = None
    offset: int = 0


class DashboardStatsDTO(BaseModel):
    """
    Response DTO for dashboard statistics

    Unbilled figures use each task's snapshotted amount, the same basis as
    invoice subtotals.
    """

    tenant_id: str
    unbilled_hours: Decimal = Field(..., description="Hours of tasks not yet invoiced")
    unbilled_amount: Decimal = Field(..., description="Amount of tasks not yet invoiced")
    unbilled_tasks_count: int
    recent_tasks_count: int = Field(..., description="Tasks created in the last 30 days")
    active_clients: int = Field(..., description="Distinct clients with unbilled work")
    outstanding_amount: Decimal = Field(..., description="Total of sent, unpaid invoices")
    paid_amount: Decimal = Field(..., description="Total of paid invoices")
    generated_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
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
        }
