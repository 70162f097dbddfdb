"""Client API Routes

FastAPI routes for managing a tenant's clients.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.client_request import ClientRequestSchema
from src.app.use_cases.clients import (
    CreateClient,
    UpdateClient,
    ArchiveClient,
    RemoveClient,
    GetClient,
    ListClients,
    CreateClientCommandDTO,
    UpdateClientCommandDTO,
    ListClientsQueryDTO,
    ClientResponseDTO,
    ListClientsResponseDTO,
)
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.repositories.task_repository import SqlAlchemyTaskRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.client import ClientStatus
from src.depends import get_session, get_tenant_id
from src.api.error import ClientError

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post(
    "",
    response_model=ClientResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "An active client already uses this e-mail",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CLIENT_EMAIL_EXISTS",
                            "message": "A client with email billing@acme.example already exists"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "hourly_rate: Input should be greater than or equal to 0"
                        }
                    }
                }
            }
        }
    }
)
async def create_client(
    request: ClientRequestSchema,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Create a client for the authenticated tenant.

    **Request body:**
    - `name` (required): Display name
    - `email` (required): Contact e-mail, unique among the tenant's active clients
    - `hourly_rate` (required): Default rate for new tasks (>= 0)
    - `address`, `phone`, `website` (optional)

    **Returns:**
    - 201: Client created
    - 400: Invalid request parameters
    - 409: E-mail already used by an active client
    """
    uow = SqlAlchemyUnitOfWork(session)
    client_repo = SqlAlchemyClientRepository(session)

    command = CreateClientCommandDTO(
        tenant_id=tenant_id,
        name=request.name,
        email=request.email,
        hourly_rate=request.hourly_rate,
        address=request.address,
        phone=request.phone,
        website=request.website,
    )

    result = await CreateClient(uow, client_repo).execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=ListClientsResponseDTO)
async def list_clients(
    search: Optional[str] = Query(default=None, description="Matches name or e-mail"),
    client_status: Optional[ClientStatus] = Query(default=None, alias="status"),
    sort_by: str = Query(default="name", pattern="^(name|email|hourly_rate|created_at)$"),
    sort_order: str = Query(default="asc", pattern="^(asc|desc)$"),
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    List clients with search, status filter, sorting and pagination.
    """
    query = ListClientsQueryDTO(
        tenant_id=tenant_id,
        search=search,
        status=client_status,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )

    result = await ListClients(SqlAlchemyClientRepository(session)).execute(query)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{client_id}", response_model=ClientResponseDTO)
async def get_client(
    client_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    result = await GetClient(SqlAlchemyClientRepository(session)).execute(tenant_id, client_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/{client_id}", response_model=ClientResponseDTO)
async def update_client(
    client_id: str,
    request: ClientRequestSchema,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Replace a client's details.

    Rates already snapshotted onto tasks are not changed.

    **Returns:**
    - 200: Client updated
    - 404: Client not found
    - 409: E-mail already used by another active client
    """
    uow = SqlAlchemyUnitOfWork(session)
    client_repo = SqlAlchemyClientRepository(session)

    command = UpdateClientCommandDTO(
        tenant_id=tenant_id,
        client_id=client_id,
        name=request.name,
        email=request.email,
        hourly_rate=request.hourly_rate,
        address=request.address,
        status=request.status,
        phone=request.phone,
        website=request.website,
    )

    result = await UpdateClient(uow, client_repo).execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/{client_id}/archive", response_model=ClientResponseDTO)
async def archive_client(
    client_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Archive a client (status becomes inactive). Always allowed.
    """
    uow = SqlAlchemyUnitOfWork(session)
    result = await ArchiveClient(uow, SqlAlchemyClientRepository(session)).execute(
        tenant_id, client_id
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        409: {
            "description": "Client still has tasks or invoices",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CLIENT_HAS_DEPENDENTS",
                            "message": "Cannot delete client with existing tasks or invoices. "
                                       "Please archive the client instead."
                        }
                    }
                }
            }
        }
    }
)
async def delete_client(
    client_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Delete a client that has no tasks or invoices.

    **Returns:**
    - 204: Client deleted
    - 404: Client not found
    - 409: Client has tasks or invoices; archive it instead
    """
    use_case = RemoveClient(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyTaskRepository(session),
        SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(tenant_id, client_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
