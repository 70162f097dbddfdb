"""Request schemas for Task API"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.task import TaskStatus


class CreateTaskRequestSchema(BaseModel):
    """
    Request schema for logging a task

    Used for POST /tasks endpoint.
    """

    client_id: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    hours: Decimal = Field(..., ge=0, description="Hours worked (must be >= 0)")
    work_date: date
    status: TaskStatus = TaskStatus.PENDING
    hourly_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Rate override; defaults to the client's rate"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed",
                "description": "Landing page redesign",
                "hours": "2.5",
                "work_date": "2024-01-15",
            }
        }


class UpdateTaskRequestSchema(BaseModel):
    """Request schema for PATCH /tasks/{task_id}; omitted fields are unchanged"""

    client_id: Optional[str] = None
    description: Optional[str] = Field(default=None, min_length=1)
    hours: Optional[Decimal] = Field(default=None, ge=0)
    work_date: Optional[date] = None
    status: Optional[TaskStatus] = None
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0)
