"""Invoice Domain Entity

Tracks client invoices and their payment status.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Numeric, String, Date, Text, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow
from src.domain.money import compute_total


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


# paid is terminal; sent -> draft recalls an invoice for editing
ALLOWED_STATUS_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.PAID},
    InvoiceStatus.SENT: {InvoiceStatus.SENT, InvoiceStatus.PAID, InvoiceStatus.DRAFT},
    InvoiceStatus.PAID: set(),
}


class Invoice(BaseModel, table=True):
    """
    Invoice - Bill for a set of tasks performed for one client

    Domain Rules:
    - number is unique per tenant (tenant-scoped sequence, INV-000001)
    - subtotal is a snapshot of the referenced task amounts at creation
    - total = subtotal + subtotal * tax_rate / 100
    - Status transitions: draft -> sent -> paid (see ALLOWED_STATUS_TRANSITIONS)
    - sent_at and paid_at are set when status changes
    """

    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint('tenant_id', 'number', name='uq_invoices_tenant_number'),
        CheckConstraint('tax_rate >= 0 AND tax_rate <= 100', name='invoice_tax_rate_range'),
        Index('ix_invoices_tenant_status', 'tenant_id', 'status'),
        Index('ix_invoices_tenant_client', 'tenant_id', 'client_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier (UUID)"
    )

    tenant_id: str = Field(
        index=True,
        description="Owning tenant"
    )

    number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Human-readable invoice number (e.g., INV-000001)"
    )

    client_id: str = Field(
        foreign_key="clients.id",
        description="Client being billed"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, sent, paid)"
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date of issue"
    )

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Payment due date"
    )

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Sum of task amounts at creation (precision: 18,6)"
    )

    tax_rate: Decimal = Field(
        sa_column=Column(Numeric(9, 6), nullable=False, default=0),
        description="Tax percentage (0-100)"
    )

    total: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="subtotal + subtotal * tax_rate / 100"
    )

    currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    sent_at: Optional[datetime] = Field(
        default=None,
        sa_column=timestamp_column(nullable=True),
        description="Timestamp when invoice was last sent"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        sa_column=timestamp_column(nullable=True),
        description="Timestamp when invoice was paid"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=timestamp_column(),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=timestamp_column(),
        description="Last update timestamp"
    )

    def recompute_total(self) -> Decimal:
        self.total = compute_total(self.subtotal, self.tax_rate)
        return self.total

    def can_transition_to(self, status: InvoiceStatus) -> bool:
        return status in ALLOWED_STATUS_TRANSITIONS[self.status]
