"""Request schemas for Client API

Pydantic models for validating incoming HTTP requests.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.client import ClientStatus


class ClientRequestSchema(BaseModel):
    """
    Request schema for creating or replacing a client

    Used for POST /clients and PUT /clients/{client_id}.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    hourly_rate: Decimal = Field(..., ge=0, description="Hourly rate (must be >= 0)")
    address: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = Field(default=None, max_length=255)
    status: Optional[ClientStatus] = Field(
        default=None,
        description="Only honoured on update; new clients are active"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be blank")
        return v.strip()

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Acme Corp",
                "email": "billing@acme.example",
                "hourly_rate": "50.00",
                "address": "1 Main St, Springfield",
            }
        }
