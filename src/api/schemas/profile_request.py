"""Request schemas for Business Profile API"""

from typing import Optional
from pydantic import BaseModel, Field


class BusinessProfileRequestSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    business_name: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = Field(default=None, max_length=255)
    logo_url: Optional[str] = None
    payment_instructions: Optional[str] = None
    invoice_notes: Optional[str] = None
