"""CreateTask Use Case

Logs billable work against a client, snapshotting the client's hourly rate.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.task_repository import TaskRepository
from src.app.use_cases import errors
from src.domain.task import Task
from .dtos import CreateTaskCommandDTO, TaskResponseDTO


class CreateTask:
    """
    Use Case: Create a task

    Business Rules:
    1. Referenced client must exist and belong to the tenant
    2. hourly_rate is snapshotted from the client unless overridden
    3. amount = hours * hourly_rate
    4. New tasks start with invoiced=False

    Flow:
    1. Validate hours and rate override
    2. Load client
    3. Resolve rate, compute amount
    4. Persist and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        task_repo: TaskRepository,
        client_repo: ClientRepository,
    ):
        self.uow = uow
        self.task_repo = task_repo
        self.client_repo = client_repo

    async def execute(self, command: CreateTaskCommandDTO) -> Result[TaskResponseDTO]:
        if not command.tenant_id:
            return Return.err(errors.unauthenticated())

        if command.hours < 0:
            return Return.err(errors.validation("INVALID_HOURS", "Hours cannot be negative"))

        if command.hourly_rate is not None and command.hourly_rate < 0:
            return Return.err(
                errors.validation("INVALID_HOURLY_RATE", "Hourly rate cannot be negative")
            )

        try:
            client = await self.client_repo.get_by_id(command.tenant_id, command.client_id)
            if not client:
                return Return.err(errors.not_found("client", command.client_id))

            hourly_rate = (
                command.hourly_rate if command.hourly_rate is not None else client.hourly_rate
            )

            task = Task(
                tenant_id=command.tenant_id,
                client_id=client.id,
                description=command.description,
                hours=command.hours,
                work_date=command.work_date,
                status=command.status,
                hourly_rate=hourly_rate,
                invoiced=False,
            )
            task.recompute_amount()

            created = await self.task_repo.create(task)
            await self.uow.commit()

            return Return.ok(TaskResponseDTO.from_entity(created))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("CREATE_TASK_FAILED", "Failed to create task", e))
