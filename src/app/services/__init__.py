from .unit_of_work import UnitOfWork
from .mail_service import MailService, EmailMessage, TransientMailError
from .pdf_service import PdfService
from .identity_provider import IdentityProvider, Identity

__all__ = [
    "UnitOfWork",
    "MailService",
    "EmailMessage",
    "TransientMailError",
    "PdfService",
    "IdentityProvider",
    "Identity",
]
