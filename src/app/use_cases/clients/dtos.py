"""Data Transfer Objects for Client Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field
from src.domain.base import as_utc
from src.domain.client import Client, ClientStatus


class CreateClientCommandDTO(BaseModel):
    """
    Command DTO for creating a client

    Used as input to CreateClient use case.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    name: str = Field(..., description="Client display name")
    email: str = Field(..., description="Contact email (must be unique among active clients)")
    hourly_rate: Decimal = Field(..., description="Hourly rate (must be >= 0)")
    address: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "name": "Acme Corp",
                "email": "billing@acme.example",
                "hourly_rate": "50.00",
                "address": "1 Main St, Springfield",
            }
        }


class UpdateClientCommandDTO(BaseModel):
    """
    Command DTO for updating a client

    Rates already snapshotted onto tasks are not affected.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    client_id: str = Field(..., description="Client to update")
    name: str
    email: str
    hourly_rate: Decimal
    address: Optional[str] = None
    status: Optional[ClientStatus] = Field(default=None, description="Leave unset to keep current status")
    phone: Optional[str] = None
    website: Optional[str] = None


class ListClientsQueryDTO(BaseModel):
    tenant_id: str
    search: Optional[str] = None
    status: Optional[ClientStatus] = None
    sort_by: str = Field(default="name", pattern="^(name|email|hourly_rate|created_at)$")
    sort_order: str = Field(default="asc", pattern="^(asc|desc)$")
    limit: int = Field(default=10, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ClientResponseDTO(BaseModel):
    """
    Response DTO for client operations
    """

    id: str
    tenant_id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    hourly_rate: Decimal
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, client: Client) -> "ClientResponseDTO":
        return cls(
            id=client.id,
            tenant_id=client.tenant_id,
            name=client.name,
            email=client.email,
            phone=client.phone,
            address=client.address,
            website=client.website,
            hourly_rate=client.hourly_rate,
            status=ClientStatus(client.status).value,
            created_at=as_utc(client.created_at),
            updated_at=as_utc(client.updated_at),
        )


class ListClientsResponseDTO(BaseModel):
    clients: List[ClientResponseDTO]
    total: int = Field(..., description="Total clients matching the filters")
    has_more: bool
    limit: int
    offset: int
