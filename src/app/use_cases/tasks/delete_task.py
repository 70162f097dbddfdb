"""DeleteTask Use Case"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.task_repository import TaskRepository
from src.app.use_cases import errors


class DeleteTask:
    """
    Use Case: Delete a task

    Invoiced tasks are rejected with CONFLICT; delete the invoice first.
    """

    def __init__(self, uow: UnitOfWork, task_repo: TaskRepository):
        self.uow = uow
        self.task_repo = task_repo

    async def execute(self, tenant_id: str, task_id: str) -> Result[bool]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            task = await self.task_repo.get_by_id(tenant_id, task_id)
            if not task:
                return Return.err(errors.not_found("task", task_id))

            if task.invoiced:
                return Return.err(
                    errors.conflict(
                        "TASK_INVOICED",
                        "Cannot delete a task that has been invoiced",
                        reason=f"invoice_id={task.invoice_id}",
                    )
                )

            await self.task_repo.delete(task)
            await self.uow.commit()
            return Return.ok(True)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("DELETE_TASK_FAILED", "Failed to delete task", e))
