"""Business Profile Domain Entity

The tenant's own business details, printed on invoices and e-mails.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel, timestamp_column, utcnow


class BusinessProfile(BaseModel, table=True):
    """
    Business Profile - Sender details for a tenant

    Domain Rules:
    - One profile per tenant (tenant_id is the primary key)
    """

    __tablename__ = "business_profiles"

    tenant_id: str = Field(
        primary_key=True,
        description="Tenant ID (one profile per tenant)"
    )

    name: str = Field(sa_column=Column(String(255), nullable=False))

    email: str = Field(sa_column=Column(String(320), nullable=False))

    business_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    address: Optional[str] = Field(default=None, sa_column=Column(String(500), nullable=True))

    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    website: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    logo_url: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))

    payment_instructions: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    invoice_notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Default notes printed on every invoice"
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    updated_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    @property
    def display_name(self) -> str:
        return self.business_name or self.name
