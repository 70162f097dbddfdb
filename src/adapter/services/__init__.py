from .unit_of_work import SqlAlchemyUnitOfWork
from .mail_service import (
    LoggingMailService,
    HttpMailService,
    RetryingMailService,
    create_mail_service,
)
from .pdf_service import ReportLabPdfService
from .identity_provider import HeaderIdentityProvider, StaticIdentityProvider

__all__ = [
    "SqlAlchemyUnitOfWork",
    "LoggingMailService",
    "HttpMailService",
    "RetryingMailService",
    "create_mail_service",
    "ReportLabPdfService",
    "HeaderIdentityProvider",
    "StaticIdentityProvider",
]
