"""Business profile use cases"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.business_profile_repository import BusinessProfileRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from src.domain.business_profile import BusinessProfile
from src.domain.client import is_valid_email, normalize_email
from .dtos import UpsertBusinessProfileCommandDTO, BusinessProfileResponseDTO

PROFILE_FIELDS = (
    "name",
    "business_name",
    "address",
    "phone",
    "website",
    "logo_url",
    "payment_instructions",
    "invoice_notes",
)


class GetBusinessProfile:

    def __init__(self, profile_repo: BusinessProfileRepository):
        self.profile_repo = profile_repo

    async def execute(self, tenant_id: str) -> Result[BusinessProfileResponseDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        profile = await self.profile_repo.get_by_tenant_id(tenant_id)
        if not profile:
            return Return.err(errors.not_found("profile"))

        return Return.ok(BusinessProfileResponseDTO.from_entity(profile))


class UpsertBusinessProfile:
    """
    Use Case: Create or replace the tenant's business profile
    """

    def __init__(self, uow: UnitOfWork, profile_repo: BusinessProfileRepository):
        self.uow = uow
        self.profile_repo = profile_repo

    async def execute(self, command: UpsertBusinessProfileCommandDTO) -> Result[BusinessProfileResponseDTO]:
        if not command.tenant_id:
            return Return.err(errors.unauthenticated())

        if not is_valid_email(command.email):
            return Return.err(
                errors.validation("INVALID_EMAIL", f"Invalid email format: {command.email}")
            )

        try:
            profile = await self.profile_repo.get_by_tenant_id(command.tenant_id)
            if profile is None:
                profile = BusinessProfile(tenant_id=command.tenant_id, name=command.name, email="")

            for field in PROFILE_FIELDS:
                setattr(profile, field, getattr(command, field))
            profile.email = normalize_email(command.email)
            profile.updated_at = utcnow()

            saved = await self.profile_repo.save(profile)
            await self.uow.commit()
            return Return.ok(BusinessProfileResponseDTO.from_entity(saved))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                errors.internal("SAVE_PROFILE_FAILED", "Failed to save business profile", e)
            )
