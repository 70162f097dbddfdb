"""
Task listing use cases

ListTasks, GetUnbilledTasksByClient and GetRecentTasks are read-only views
over a tenant's tasks.
"""
from datetime import timedelta
from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.task_repository import TaskRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from .dtos import ListTasksQueryDTO, ListTasksResponseDTO, TaskResponseDTO

RECENT_TASKS_DAYS = 30


class ListTasks:
    """
    Use case: List a tenant's tasks, newest first
    """

    def __init__(self, task_repo: TaskRepository):
        self.task_repo = task_repo

    async def execute(self, query: ListTasksQueryDTO) -> Result[ListTasksResponseDTO]:
        if not query.tenant_id:
            return Return.err(errors.unauthenticated())

        tasks, total = await self.task_repo.list(
            tenant_id=query.tenant_id,
            client_id=query.client_id,
            status=query.status,
            invoiced=query.invoiced,
            limit=query.limit,
            offset=query.offset,
        )

        return Return.ok(
            ListTasksResponseDTO(
                tasks=[TaskResponseDTO.from_entity(t) for t in tasks],
                total=total,
                limit=query.limit,
                offset=query.offset,
            )
        )


class GetUnbilledTasksByClient:
    """
    Use case: Tasks of one client that are not claimed by any invoice

    Feeds the invoice creation form.
    """

    def __init__(self, task_repo: TaskRepository, client_repo: ClientRepository):
        self.task_repo = task_repo
        self.client_repo = client_repo

    async def execute(self, tenant_id: str, client_id: str) -> Result[ListTasksResponseDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        client = await self.client_repo.get_by_id(tenant_id, client_id)
        if not client:
            return Return.err(errors.not_found("client", client_id))

        tasks, total = await self.task_repo.list(
            tenant_id=tenant_id,
            client_id=client_id,
            invoiced=False,
        )

        return Return.ok(
            ListTasksResponseDTO(
                tasks=[TaskResponseDTO.from_entity(t) for t in tasks],
                total=total,
            )
        )


class GetRecentTasks:
    """
    Use case: Tasks created within the last `days` days, newest first
    """

    def __init__(self, task_repo: TaskRepository):
        self.task_repo = task_repo

    async def execute(self, tenant_id: str, days: int = RECENT_TASKS_DAYS) -> Result[ListTasksResponseDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        if days < 1:
            return Return.err(errors.validation("INVALID_WINDOW", "days must be at least 1"))

        since = utcnow() - timedelta(days=days)
        tasks, total = await self.task_repo.list(tenant_id=tenant_id, created_since=since)

        return Return.ok(
            ListTasksResponseDTO(
                tasks=[TaskResponseDTO.from_entity(t) for t in tasks],
                total=total,
            )
        )
