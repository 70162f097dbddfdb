"""Invoice use cases"""
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice, UpdateInvoiceStatus, MarkInvoicePaid
from .delete_invoice import DeleteInvoice
from .send_invoice import SendInvoice
from .get_invoice import GetInvoice, GetInvoiceData
from .list_invoices import ListInvoices
from .generate_invoice_pdf import GenerateInvoicePdf
from .reconcile_invoiced_tasks import ReconcileInvoicedTasks
from .dtos import (
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    SendInvoiceCommandDTO,
    ListInvoicesQueryDTO,
    InvoiceLineDTO,
    InvoiceResponseDTO,
    InvoiceDetailDTO,
    InvoiceDataDTO,
    ListInvoicesResponseDTO,
    SendInvoiceResponseDTO,
    InvoicePdfResponseDTO,
    TaskDriftDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "CreateInvoice",
    "UpdateInvoice",
    "UpdateInvoiceStatus",
    "MarkInvoicePaid",
    "DeleteInvoice",
    "SendInvoice",
    "GetInvoice",
    "GetInvoiceData",
    "ListInvoices",
    "GenerateInvoicePdf",
    "ReconcileInvoicedTasks",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "SendInvoiceCommandDTO",
    "ListInvoicesQueryDTO",
    "InvoiceLineDTO",
    "InvoiceResponseDTO",
    "InvoiceDetailDTO",
    "InvoiceDataDTO",
    "ListInvoicesResponseDTO",
    "SendInvoiceResponseDTO",
    "InvoicePdfResponseDTO",
    "TaskDriftDTO",
    "ReconciliationResultDTO",
]
