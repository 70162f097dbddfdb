"""RemoveClient Use Case

Hard-deletes a client that nothing references.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.task_repository import TaskRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases import errors

logger = logging.getLogger(__name__)


class RemoveClient:
    """
    Use Case: Delete a client

    Business Rules:
    1. Client must belong to the caller's tenant
    2. Rejected with CONFLICT while any task or invoice references the client;
       such clients must be archived instead
    """

    def __init__(
        self,
        uow: UnitOfWork,
        client_repo: ClientRepository,
        task_repo: TaskRepository,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.client_repo = client_repo
        self.task_repo = task_repo
        self.invoice_repo = invoice_repo

    async def execute(self, tenant_id: str, client_id: str) -> Result[bool]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            client = await self.client_repo.get_by_id(tenant_id, client_id)
            if not client:
                return Return.err(errors.not_found("client", client_id))

            task_count = await self.task_repo.count_by_client(tenant_id, client_id)
            invoice_count = await self.invoice_repo.count_by_client(tenant_id, client_id)

            if task_count > 0 or invoice_count > 0:
                return Return.err(
                    errors.conflict(
                        "CLIENT_HAS_DEPENDENTS",
                        "Cannot delete client with existing tasks or invoices. "
                        "Please archive the client instead.",
                        reason=f"tasks={task_count}, invoices={invoice_count}",
                    )
                )

            await self.client_repo.delete(client)
            await self.uow.commit()

            logger.info(f"Client {client_id} deleted for tenant {tenant_id}")
            return Return.ok(True)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("REMOVE_CLIENT_FAILED", "Failed to delete client", e))
