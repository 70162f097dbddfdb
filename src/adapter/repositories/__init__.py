from .client_repository import SqlAlchemyClientRepository
from .task_repository import SqlAlchemyTaskRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .business_profile_repository import SqlAlchemyBusinessProfileRepository

__all__ = [
    "SqlAlchemyClientRepository",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyBusinessProfileRepository",
]
