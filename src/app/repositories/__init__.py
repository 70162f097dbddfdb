from .client_repository import ClientRepository
from .task_repository import TaskRepository
from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .business_profile_repository import BusinessProfileRepository

__all__ = [
    "ClientRepository",
    "TaskRepository",
    "InvoiceRepository",
    "InvoiceLineRepository",
    "BusinessProfileRepository",
]
