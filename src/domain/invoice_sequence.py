"""Invoice Sequence Domain Entity

Per-tenant counter used to number invoices. Each tenant has exactly one
sequence row, locked while it is incremented.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, CheckConstraint
from src.domain.base import BaseModel, timestamp_column, utcnow

INVOICE_NUMBER_PREFIX = "INV-"


def format_invoice_number(sequence: int) -> str:
    return f"{INVOICE_NUMBER_PREFIX}{sequence:06d}"


class InvoiceSequence(BaseModel, table=True):
    """
    Invoice Sequence - Monotonic invoice counter per tenant

    Domain Rules:
    - One sequence per tenant (tenant_id is the primary key)
    - last_number only grows, so numbers are never reused even after deletes
    """

    __tablename__ = "invoice_sequences"
    __table_args__ = (
        CheckConstraint('last_number >= 0', name='last_number_non_negative'),
    )

    tenant_id: str = Field(
        primary_key=True,
        description="Tenant ID (one sequence per tenant)"
    )

    last_number: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Last issued sequence value"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=timestamp_column(),
        description="Last increment timestamp"
    )

    def next_number(self) -> str:
        self.last_number += 1
        self.updated_at = utcnow()
        return format_invoice_number(self.last_number)
