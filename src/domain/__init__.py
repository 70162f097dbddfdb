from .base import BaseModel, generate_uuid
from .client import Client, ClientStatus
from .task import Task, TaskStatus
from .invoice import Invoice, InvoiceStatus, ALLOWED_STATUS_TRANSITIONS
from .invoice_line import InvoiceLine
from .invoice_sequence import InvoiceSequence
from .business_profile import BusinessProfile

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Client",
    "ClientStatus",
    "Task",
    "TaskStatus",
    "Invoice",
    "InvoiceStatus",
    "ALLOWED_STATUS_TRANSITIONS",
    "InvoiceLine",
    "InvoiceSequence",
    "BusinessProfile",
]
