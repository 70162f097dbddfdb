"""Client Domain Entity

A customer of the tenant. Tasks and invoices reference a client and the
client's hourly rate is snapshotted onto new tasks.
"""

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Numeric, String, text
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email.strip()) is not None


class ClientStatus(str, Enum):
    """Client status types"""
    ACTIVE = "active"
    INACTIVE = "inactive"  # Archived


ACTIVE_ONLY = f"status = '{ClientStatus.ACTIVE.name}'"


class Client(BaseModel, table=True):
    """
    Client - Customer billed by a tenant

    Domain Rules:
    - Email is unique among a tenant's active clients
    - hourly_rate must be non-negative
    - A client referenced by tasks or invoices is archived, never deleted
    """

    __tablename__ = "clients"
    __table_args__ = (
        CheckConstraint('hourly_rate >= 0', name='client_hourly_rate_non_negative'),
        Index('ix_clients_tenant_email', 'tenant_id', 'email'),
        # Enum columns persist member names
        Index(
            'uq_clients_tenant_active_email', 'tenant_id', 'email',
            unique=True,
            sqlite_where=text(ACTIVE_ONLY),
            postgresql_where=text(ACTIVE_ONLY),
        ),
        Index('ix_clients_tenant_status', 'tenant_id', 'status'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique client identifier (UUID)"
    )

    tenant_id: str = Field(
        index=True,
        description="Owning tenant"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client display name"
    )

    email: str = Field(
        sa_column=Column(String(320), nullable=False),
        description="Contact email (stored lower-cased)"
    )

    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    address: Optional[str] = Field(default=None, sa_column=Column(String(500), nullable=True))

    website: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    hourly_rate: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Current hourly rate (precision: 18,6)"
    )

    status: ClientStatus = Field(
        default=ClientStatus.ACTIVE,
        description="Client status (active, inactive)"
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    updated_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    @property
    def is_active(self) -> bool:
        return self.status == ClientStatus.ACTIVE
