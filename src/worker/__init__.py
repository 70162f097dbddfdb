"""Background workers"""

from .invoice_reconciler import InvoiceReconcilerWorker

__all__ = ["InvoiceReconcilerWorker"]
