"""Unit tests for business profile use cases"""

import pytest
from unittest.mock import AsyncMock

from src.app.use_cases.profiles import (
    GetBusinessProfile,
    UpsertBusinessProfile,
    UpsertBusinessProfileCommandDTO,
)
from src.domain.business_profile import BusinessProfile
from tests.unit.factories import TENANT_ID


@pytest.mark.asyncio
class TestBusinessProfile:

    async def test_missing_profile(self, mock_profile_repo):
        mock_profile_repo.get_by_tenant_id = AsyncMock(return_value=None)

        result = await GetBusinessProfile(mock_profile_repo).execute(TENANT_ID)

        assert result.error.code == "PROFILE_NOT_FOUND"

    async def test_upsert_creates_profile(self, mock_uow, mock_profile_repo):
        mock_profile_repo.get_by_tenant_id = AsyncMock(return_value=None)
        mock_profile_repo.save = AsyncMock(side_effect=lambda profile: profile)

        result = await UpsertBusinessProfile(mock_uow, mock_profile_repo).execute(
            UpsertBusinessProfileCommandDTO(
                tenant_id=TENANT_ID,
                name="Jane Doe",
                email="Jane@Studio.Example",
                business_name="Doe Studio",
            )
        )

        assert result.is_ok()
        assert result.value.email == "jane@studio.example"
        assert result.value.business_name == "Doe Studio"
        mock_uow.commit.assert_called_once()

    async def test_upsert_replaces_fields(self, mock_uow, mock_profile_repo):
        existing = BusinessProfile(
            tenant_id=TENANT_ID, name="Jane", email="jane@studio.example", phone="123"
        )
        mock_profile_repo.get_by_tenant_id = AsyncMock(return_value=existing)
        mock_profile_repo.save = AsyncMock(side_effect=lambda profile: profile)

        result = await UpsertBusinessProfile(mock_uow, mock_profile_repo).execute(
            UpsertBusinessProfileCommandDTO(tenant_id=TENANT_ID, name="Jane Doe", email="jane@studio.example")
        )

        assert result.value.name == "Jane Doe"
        assert result.value.phone is None

    async def test_upsert_rejects_bad_email(self, mock_uow, mock_profile_repo):
        mock_profile_repo.save = AsyncMock()

        result = await UpsertBusinessProfile(mock_uow, mock_profile_repo).execute(
            UpsertBusinessProfileCommandDTO(tenant_id=TENANT_ID, name="Jane", email="not-an-email")
        )

        assert result.error.code == "INVALID_EMAIL"
        mock_profile_repo.save.assert_not_called()
