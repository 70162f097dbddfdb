"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field
from src.domain.base import as_utc
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine
from src.app.use_cases.clients.dtos import ClientResponseDTO
from src.app.use_cases.profiles.dtos import BusinessProfileResponseDTO


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    client_id: str = Field(..., description="Client being billed")
    task_ids: List[str] = Field(..., description="Un-invoiced tasks of the client, in display order")
    issue_date: date = Field(..., description="Invoice date")
    due_date: Optional[date] = Field(default=None, description="Payment due date (>= issue_date)")
    tax_rate: Decimal = Field(default=Decimal("0"), description="Tax percentage (0-100)")
    notes: Optional[str] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "client_id": "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed",
                "task_ids": ["6ec0bd7f-11c0-43da-975e-2a8ad9ebae0b"],
                "issue_date": "2024-02-01",
                "due_date": "2024-03-01",
                "tax_rate": "10",
                "notes": "Thank you for your business",
            }
        }


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for editing an invoice

    Unset fields keep their current value. A tax change recomputes total;
    a status change follows the lifecycle rules.
    """

    tenant_id: str
    invoice_id: str
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    tax_rate: Optional[Decimal] = None
    notes: Optional[str] = None
    status: Optional[InvoiceStatus] = None


class SendInvoiceCommandDTO(BaseModel):
    """
    Command DTO for e-mailing an invoice

    Recipient defaults to the invoice's client.
    """

    tenant_id: str
    invoice_id: str
    recipient_email: Optional[str] = None
    recipient_name: Optional[str] = None
    message: Optional[str] = Field(default=None, description="Optional personal note in the e-mail")


class ListInvoicesQueryDTO(BaseModel):
    tenant_id: str
    client_id: Optional[str] = None
    status: Optional[InvoiceStatus] = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class InvoiceLineDTO(BaseModel):
    """Invoice line item"""

    id: str
    task_id: str
    position: int
    description: str
    hours: Decimal
    hourly_rate: Decimal
    amount: Decimal

    @classmethod
    def from_entity(cls, line: InvoiceLine) -> "InvoiceLineDTO":
        return cls(
            id=line.id,
            task_id=line.task_id,
            position=line.position,
            description=line.description,
            hours=line.hours,
            hourly_rate=line.hourly_rate,
            amount=line.amount,
        )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations
    """

    id: str
    tenant_id: str
    number: str
    client_id: str
    status: str
    issue_date: date
    due_date: Optional[date] = None
    subtotal: Decimal
    tax_rate: Decimal
    total: Decimal
    currency: str
    notes: Optional[str] = None
    task_ids: List[str] = Field(default_factory=list)
    sent_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, invoice: Invoice, lines: Optional[List[InvoiceLine]] = None
    ) -> "InvoiceResponseDTO":
        ordered = sorted(lines or [], key=lambda line: line.position)
        return cls(
            id=invoice.id,
            tenant_id=invoice.tenant_id,
            number=invoice.number,
            client_id=invoice.client_id,
            status=InvoiceStatus(invoice.status).value,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            subtotal=invoice.subtotal,
            tax_rate=invoice.tax_rate,
            total=invoice.total,
            currency=invoice.currency,
            notes=invoice.notes,
            task_ids=[line.task_id for line in ordered],
            sent_at=as_utc(invoice.sent_at),
            paid_at=as_utc(invoice.paid_at),
            created_at=as_utc(invoice.created_at),
            updated_at=as_utc(invoice.updated_at),
        )

    class Config:
        json_schema_extra = {
            "example": {
                "id": "0b8e2f4c-1111-4c3a-9f25-8d7c2a1e5b10",
                "tenant_id": "tenant_xyz789",
                "number": "INV-000001",
                "client_id": "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed",
                "status": "draft",
                "issue_date": "2024-02-01",
                "due_date": "2024-03-01",
                "subtotal": "250.000000",
                "tax_rate": "10.000000",
                "total": "275.000000",
                "currency": "USD",
                "task_ids": ["6ec0bd7f-11c0-43da-975e-2a8ad9ebae0b"],
                "created_at": "2024-02-01T00:00:00Z",
                "updated_at": "2024-02-01T00:00:00Z"
            }
        }


class InvoiceDetailDTO(BaseModel):
    """Invoice with its client and line items"""

    invoice: InvoiceResponseDTO
    client: ClientResponseDTO
    line_items: List[InvoiceLineDTO]


class InvoiceDataDTO(InvoiceDetailDTO):
    """Everything a renderer needs: invoice detail plus the sender profile"""

    profile: Optional[BusinessProfileResponseDTO] = None


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceResponseDTO]
    total: int
    limit: int
    offset: int


class SendInvoiceResponseDTO(BaseModel):
    invoice: InvoiceResponseDTO
    recipient_email: str
    preview_url: str


class InvoicePdfResponseDTO(BaseModel):
    """
    Response DTO for PDF generation

    PDF is returned base64-encoded.
    """

    invoice_id: str
    number: str
    pdf_base64: str = Field(..., description="Base64-encoded PDF document")
    generated_at: datetime


class TaskDriftDTO(BaseModel):
    """A task whose invoiced flag disagrees with the invoices"""

    tenant_id: str
    task_id: str
    invoice_id: Optional[str] = None
    drift: str = Field(..., description="orphaned_flag or missing_flag")
    repaired: bool = False


class ReconciliationResultDTO(BaseModel):
    """
    Result of invoiced-task reconciliation
    """

    orphaned_flags: int = Field(..., description="Tasks flagged invoiced whose invoice is gone")
    missing_flags: int = Field(..., description="Billed tasks not flagged invoiced")
    repaired: int
    drifts: List[TaskDriftDTO]
    reconciliation_time: datetime
    execution_time_ms: int
