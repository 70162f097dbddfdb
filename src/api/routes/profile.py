"""Business Profile API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.profile_request import BusinessProfileRequestSchema
from src.app.use_cases.profiles import (
    GetBusinessProfile,
    UpsertBusinessProfile,
    UpsertBusinessProfileCommandDTO,
    BusinessProfileResponseDTO,
)
from src.adapter.repositories.business_profile_repository import SqlAlchemyBusinessProfileRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_tenant_id
from src.api.error import ClientError

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=BusinessProfileResponseDTO)
async def get_profile(
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    result = await GetBusinessProfile(SqlAlchemyBusinessProfileRepository(session)).execute(tenant_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("", response_model=BusinessProfileResponseDTO)
async def upsert_profile(
    request: BusinessProfileRequestSchema,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Create or replace the sender details printed on invoices and e-mails.
    """
    command = UpsertBusinessProfileCommandDTO(tenant_id=tenant_id, **request.model_dump())

    use_case = UpsertBusinessProfile(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyBusinessProfileRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
