"""Task Domain Entity

A billable unit of work performed for a client. The hourly rate is a
snapshot taken from the client, so later client rate changes do not
alter already logged work.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow
from src.domain.money import compute_amount


class TaskStatus(str, Enum):
    """Task progress status"""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Task(BaseModel, table=True):
    """
    Task - Billable work logged against a client

    Domain Rules:
    - amount = hours * hourly_rate, recomputed on every write
    - hourly_rate is snapshotted from the client on create and on client change
    - invoiced tasks cannot be deleted
    - invoiced is reverted to False when the owning invoice is deleted
    """

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint('hours >= 0', name='task_hours_non_negative'),
        CheckConstraint('hourly_rate >= 0', name='task_hourly_rate_non_negative'),
        Index('ix_tasks_tenant_client', 'tenant_id', 'client_id'),
        Index('ix_tasks_tenant_invoiced', 'tenant_id', 'invoiced'),
        Index('ix_tasks_tenant_created_at', 'tenant_id', 'created_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique task identifier (UUID)"
    )

    tenant_id: str = Field(
        index=True,
        description="Owning tenant"
    )

    client_id: str = Field(
        foreign_key="clients.id",
        description="Client the work was performed for"
    )

    description: str = Field(
        sa_column=Column(Text, nullable=False),
        description="What was done"
    )

    hours: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Hours worked"
    )

    work_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date the work was performed"
    )

    status: TaskStatus = Field(
        default=TaskStatus.PENDING,
        description="Task status (pending, in-progress, completed)"
    )

    hourly_rate: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Rate snapshot at creation/update"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Derived: hours * hourly_rate"
    )

    invoiced: bool = Field(
        default=False,
        description="True while claimed by an invoice"
    )

    invoice_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(36), nullable=True, index=True),
        description="Invoice currently claiming this task"
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    updated_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    def recompute_amount(self) -> Decimal:
        self.amount = compute_amount(self.hours, self.hourly_rate)
        return self.amount
