"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from src.domain.invoice import InvoiceStatus


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    client_id: str = Field(..., min_length=1)
    task_ids: List[str] = Field(..., min_length=1, description="Tasks to bill, in display order")
    issue_date: date
    due_date: Optional[date] = None
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, description="Tax percentage")
    notes: Optional[str] = None

    @field_validator("task_ids")
    @classmethod
    def validate_unique_tasks(cls, v):
        if len(set(v)) != len(v):
            raise ValueError("Task IDs must be unique")
        return v

    @model_validator(mode="after")
    def validate_dates(self):
        if self.due_date is not None and self.due_date < self.issue_date:
            raise ValueError("Due date cannot be before issue date")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed",
                "task_ids": ["6ec0bd7f-11c0-43da-975e-2a8ad9ebae0b"],
                "issue_date": "2024-02-01",
                "due_date": "2024-03-01",
                "tax_rate": "10",
            }
        }


class UpdateInvoiceRequestSchema(BaseModel):
    """Request schema for PATCH /invoices/{invoice_id}"""

    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None
    status: Optional[InvoiceStatus] = None


class UpdateInvoiceStatusRequestSchema(BaseModel):
    status: InvoiceStatus


class SendInvoiceRequestSchema(BaseModel):
    """Request schema for POST /invoices/{invoice_id}/send; recipient defaults to the client"""

    recipient_email: Optional[str] = None
    recipient_name: Optional[str] = None
    message: Optional[str] = Field(default=None, max_length=2000)
