import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers table metadata
from src.app.services.mail_service import EmailMessage, MailService
from src.adapter.services.identity_provider import HeaderIdentityProvider
from src.depends import get_session, get_identity_provider, get_mail_service

TENANT_A = "tenant_a"
TENANT_B = "tenant_b"


class RecordingMailService(MailService):
    """Keeps sent messages in memory; set fail=True to simulate rejection"""

    def __init__(self):
        self.sent: list[EmailMessage] = []
        self.fail = False

    async def send(self, message: EmailMessage) -> bool:
        if self.fail:
            return False
        self.sent.append(message)
        return True


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """File-backed SQLite database, created fresh for every test"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db", echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest.fixture
def mail_service():
    return RecordingMailService()


@pytest_asyncio.fixture
async def client(db_session, mail_service):
    """Test client bound to the test session, authenticated via X-Tenant-ID"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_identity_provider] = lambda: HeaderIdentityProvider()
    app.dependency_overrides[get_mail_service] = lambda: mail_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Tenant-ID": TENANT_A},
    ) as ac:
        yield ac
