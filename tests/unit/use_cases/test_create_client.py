"""Unit tests for CreateClient use case

Tests cover:
- Successful creation with normalized e-mail
- Duplicate e-mail among active clients
- Input validation
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from sqlalchemy.exc import IntegrityError

from libs.result import ErrorKind
from src.app.use_cases.clients import CreateClient, CreateClientCommandDTO
from tests.unit.factories import TENANT_ID, make_client


@pytest.fixture
def use_case(mock_uow, mock_client_repo):
    return CreateClient(uow=mock_uow, client_repo=mock_client_repo)


def command(**overrides) -> CreateClientCommandDTO:
    data = dict(
        tenant_id=TENANT_ID,
        name="Acme Corp",
        email="Billing@ACME.example",
        hourly_rate=Decimal("50"),
    )
    data.update(overrides)
    return CreateClientCommandDTO(**data)


@pytest.mark.asyncio
class TestCreateClientSuccess:

    async def test_creates_active_client(self, use_case, mock_client_repo, mock_uow):
        """
        Given: No active client uses the e-mail
        When: A client is created
        Then: It is stored active with a lower-cased e-mail and committed
        """
        mock_client_repo.find_by_email = AsyncMock(return_value=None)
        mock_client_repo.create = AsyncMock(side_effect=lambda client: client)

        result = await use_case.execute(command())

        assert result.is_ok()
        assert result.value.email == "billing@acme.example"
        assert result.value.status == "active"
        assert result.value.tenant_id == TENANT_ID
        mock_client_repo.find_by_email.assert_called_once_with(
            TENANT_ID, "billing@acme.example", active_only=True
        )
        mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
class TestCreateClientRejections:

    async def test_duplicate_active_email_conflicts(self, use_case, mock_client_repo, mock_uow):
        mock_client_repo.find_by_email = AsyncMock(return_value=make_client())
        mock_client_repo.create = AsyncMock()

        result = await use_case.execute(command())

        assert result.is_err()
        assert result.error.code == "CLIENT_EMAIL_EXISTS"
        assert result.error.kind == ErrorKind.CONFLICT
        mock_client_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_invalid_email(self, use_case, mock_client_repo):
        mock_client_repo.find_by_email = AsyncMock()

        result = await use_case.execute(command(email="not-an-email"))

        assert result.is_err()
        assert result.error.code == "INVALID_EMAIL"
        assert result.error.kind == ErrorKind.VALIDATION
        mock_client_repo.find_by_email.assert_not_called()

    async def test_negative_rate(self, use_case):
        result = await use_case.execute(command(hourly_rate=Decimal("-1")))

        assert result.error.code == "INVALID_HOURLY_RATE"

    async def test_missing_tenant_is_unauthenticated(self, use_case):
        result = await use_case.execute(command(tenant_id=""))

        assert result.error.kind == ErrorKind.UNAUTHENTICATED

    async def test_repository_failure_rolls_back(self, use_case, mock_client_repo, mock_uow):
        mock_client_repo.find_by_email = AsyncMock(return_value=None)
        mock_client_repo.create = AsyncMock(side_effect=Exception("Database error"))

        result = await use_case.execute(command())

        assert result.error.code == "CREATE_CLIENT_FAILED"
        assert "Database error" in result.error.reason
        mock_uow.rollback.assert_called_once()

    async def test_unique_index_violation_conflicts(self, use_case, mock_client_repo, mock_uow):
        """
        Given: The lookup finds no active client but a concurrent insert wins the unique index
        When: The client is created
        Then: CONFLICT instead of an internal error
        """
        mock_client_repo.find_by_email = AsyncMock(return_value=None)
        mock_client_repo.create = AsyncMock(
            side_effect=IntegrityError("INSERT INTO clients", {}, Exception("UNIQUE constraint failed"))
        )

        result = await use_case.execute(command())

        assert result.error.code == "CLIENT_EMAIL_EXISTS"
        assert result.error.kind == ErrorKind.CONFLICT
        mock_uow.rollback.assert_called_once()
