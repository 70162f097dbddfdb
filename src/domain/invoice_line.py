"""Invoice Line Domain Entity

One task reference within an invoice, with the task's values frozen at
invoice creation.
"""

from datetime import datetime
from decimal import Decimal
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow


class InvoiceLine(BaseModel, table=True):
    """
    Invoice Line - Snapshot of a task billed by an invoice

    Domain Rules:
    - Each line belongs to exactly one invoice and references one task
    - amount = hours * hourly_rate, copied from the task at creation
    - position preserves the order in which tasks were selected
    - Lines are removed together with their invoice
    """

    __tablename__ = "invoice_lines"
    __table_args__ = (
        Index('ix_invoice_lines_invoice_id', 'invoice_id'),
        Index('ix_invoice_lines_task_id', 'task_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice line identifier (UUID)"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    task_id: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="Task billed by this line"
    )

    position: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Order of the line within the invoice"
    )

    description: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Task description at invoice creation"
    )

    hours: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Hours billed"
    )

    hourly_rate: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Rate per hour (precision: 18,6)"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Line total (hours * hourly_rate)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=timestamp_column(),
        description="Line item creation timestamp"
    )
