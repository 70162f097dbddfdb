"""Task API Routes

FastAPI routes for logging billable work.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.task_request import CreateTaskRequestSchema, UpdateTaskRequestSchema
from src.app.use_cases.tasks import (
    CreateTask,
    UpdateTask,
    DeleteTask,
    ListTasks,
    GetUnbilledTasksByClient,
    GetRecentTasks,
    CreateTaskCommandDTO,
    UpdateTaskCommandDTO,
    ListTasksQueryDTO,
    TaskResponseDTO,
    ListTasksResponseDTO,
)
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.repositories.task_repository import SqlAlchemyTaskRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.task import TaskStatus
from src.depends import get_session, get_tenant_id
from src.api.error import ClientError

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.post(
    "",
    response_model=TaskResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {
            "description": "Client not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CLIENT_NOT_FOUND",
                            "message": "Client 1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed not found"
                        }
                    }
                }
            }
        }
    }
)
async def create_task(
    request: CreateTaskRequestSchema,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Log a task against a client.

    The client's current hourly rate is snapshotted onto the task unless
    `hourly_rate` is given. `amount = hours * hourly_rate`.

    **Returns:**
    - 201: Task created
    - 400: Invalid request parameters
    - 404: Client not found
    """
    command = CreateTaskCommandDTO(
        tenant_id=tenant_id,
        client_id=request.client_id,
        description=request.description,
        hours=request.hours,
        work_date=request.work_date,
        status=request.status,
        hourly_rate=request.hourly_rate,
    )

    use_case = CreateTask(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyTaskRepository(session),
        SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=ListTasksResponseDTO)
async def list_tasks(
    client_id: Optional[str] = None,
    task_status: Optional[TaskStatus] = Query(default=None, alias="status"),
    invoiced: Optional[bool] = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    query = ListTasksQueryDTO(
        tenant_id=tenant_id,
        client_id=client_id,
        status=task_status,
        invoiced=invoiced,
        limit=limit,
        offset=offset,
    )

    result = await ListTasks(SqlAlchemyTaskRepository(session)).execute(query)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/recent", response_model=ListTasksResponseDTO)
async def recent_tasks(
    days: int = Query(default=30, ge=1, le=365),
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Tasks created in the last `days` days (default 30), newest first.
    """
    result = await GetRecentTasks(SqlAlchemyTaskRepository(session)).execute(tenant_id, days)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/unbilled/{client_id}", response_model=ListTasksResponseDTO)
async def unbilled_tasks(
    client_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    A client's un-invoiced tasks, i.e. the candidates for a new invoice.
    """
    use_case = GetUnbilledTasksByClient(
        SqlAlchemyTaskRepository(session),
        SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(tenant_id, client_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch("/{task_id}", response_model=TaskResponseDTO)
async def update_task(
    task_id: str,
    request: UpdateTaskRequestSchema,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Edit a task. amount is recomputed from hours and rate.

    Moving the task to another client re-snapshots that client's rate and is
    rejected once the task is invoiced.

    **Returns:**
    - 200: Task updated
    - 404: Task or client not found
    - 409: Task is invoiced and cannot change client
    """
    command = UpdateTaskCommandDTO(
        tenant_id=tenant_id,
        task_id=task_id,
        **request.model_dump(exclude_unset=True),
    )

    use_case = UpdateTask(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyTaskRepository(session),
        SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        409: {
            "description": "Task is invoiced",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "TASK_INVOICED",
                            "message": "Cannot delete a task that has been invoiced"
                        }
                    }
                }
            }
        }
    }
)
async def delete_task(
    task_id: str,
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_session)
):
    use_case = DeleteTask(SqlAlchemyUnitOfWork(session), SqlAlchemyTaskRepository(session))
    result = await use_case.execute(tenant_id, task_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
