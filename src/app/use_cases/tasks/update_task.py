"""UpdateTask Use Case

Edits a task and keeps amount = hours * hourly_rate.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.task_repository import TaskRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from .dtos import UpdateTaskCommandDTO, TaskResponseDTO


class UpdateTask:
    """
    Use Case: Update a task

    Business Rules:
    1. Task must belong to the caller's tenant
    2. Changing client_id re-snapshots hourly_rate from the new client
       (an explicit hourly_rate wins)
    3. An invoiced task cannot move to another client
    4. amount is recomputed on every update
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

    async def execute(self, command: UpdateTaskCommandDTO) -> Result[TaskResponseDTO]:
        if not command.tenant_id:
            return Return.err(errors.unauthenticated())

        if command.hours is not None and command.hours < 0:
            return Return.err(errors.validation("INVALID_HOURS", "Hours cannot be negative"))

        if command.hourly_rate is not None and command.hourly_rate < 0:
            return Return.err(
                errors.validation("INVALID_HOURLY_RATE", "Hourly rate cannot be negative")
            )

        try:
            task = await self.task_repo.get_by_id(command.tenant_id, command.task_id)
            if not task:
                return Return.err(errors.not_found("task", command.task_id))

            if command.client_id is not None and command.client_id != task.client_id:
                if task.invoiced:
                    return Return.err(
                        errors.conflict(
                            "TASK_INVOICED",
                            "Cannot move an invoiced task to another client",
                            reason=f"invoice_id={task.invoice_id}",
                        )
                    )

                client = await self.client_repo.get_by_id(command.tenant_id, command.client_id)
                if not client:
                    return Return.err(errors.not_found("client", command.client_id))

                task.client_id = client.id
                task.hourly_rate = client.hourly_rate

            if command.hourly_rate is not None:
                task.hourly_rate = command.hourly_rate
            if command.description is not None:
                task.description = command.description
            if command.hours is not None:
                task.hours = command.hours
            if command.work_date is not None:
                task.work_date = command.work_date
            if command.status is not None:
                task.status = command.status

            task.recompute_amount()
            task.updated_at = utcnow()

            updated = await self.task_repo.update(task)
            await self.uow.commit()

            return Return.ok(TaskResponseDTO.from_entity(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("UPDATE_TASK_FAILED", "Failed to update task", e))
