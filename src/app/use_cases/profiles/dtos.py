"""Data Transfer Objects for Business Profile Use Cases"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.base import as_utc
from src.domain.business_profile import BusinessProfile


class UpsertBusinessProfileCommandDTO(BaseModel):
    tenant_id: str
    name: str
    email: str
    business_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = Field(default=None, description="Public URL of an uploaded logo")
    payment_instructions: Optional[str] = None
    invoice_notes: Optional[str] = None


class BusinessProfileResponseDTO(BaseModel):
    tenant_id: str
    name: str
    email: str
    business_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    payment_instructions: Optional[str] = None
    invoice_notes: Optional[str] = None
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: BusinessProfile) -> "BusinessProfileResponseDTO":
        return cls(
            tenant_id=profile.tenant_id,
            name=profile.name,
            email=profile.email,
            business_name=profile.business_name,
            address=profile.address,
            phone=profile.phone,
            website=profile.website,
            logo_url=profile.logo_url,
            payment_instructions=profile.payment_instructions,
            invoice_notes=profile.invoice_notes,
            updated_at=as_utc(profile.updated_at),
        )
