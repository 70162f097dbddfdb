from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error, ErrorKind
from src.adapter.services.identity_provider import HeaderIdentityProvider, StaticIdentityProvider
from src.adapter.services.mail_service import create_mail_service
from src.adapter.services.pdf_service import ReportLabPdfService
from src.api.error import ClientError
from src.app.services.identity_provider import IdentityProvider
from src.app.services.mail_service import MailService
from src.app.services.pdf_service import PdfService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

mail_service = create_mail_service(ApplicationConfig)
pdf_service = ReportLabPdfService()


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_identity_provider() -> IdentityProvider:
    if ApplicationConfig.AUTH_DISABLED:
        return StaticIdentityProvider(ApplicationConfig.DEV_TENANT_ID)
    return HeaderIdentityProvider(ApplicationConfig.TENANT_HEADER, ApplicationConfig.EMAIL_HEADER)


def get_tenant_id(
    request: Request,
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> str:
    identity = identity_provider.identify(request)
    if identity is None:
        raise ClientError(
            Error(
                code="UNAUTHENTICATED",
                message="Not authenticated",
                reason=f"Missing {ApplicationConfig.TENANT_HEADER} header",
                kind=ErrorKind.UNAUTHENTICATED,
            )
        )
    return identity.tenant_id


def get_mail_service() -> MailService:
    return mail_service


def get_pdf_service() -> PdfService:
    return pdf_service
