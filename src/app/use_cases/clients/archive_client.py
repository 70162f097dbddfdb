"""ArchiveClient Use Case

Archiving is the way to retire a client that still has tasks or invoices.
"""

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases import errors
from src.domain.base import utcnow
from src.domain.client import ClientStatus
from .dtos import ClientResponseDTO


class ArchiveClient:
    """
    Use Case: Archive a client (status=inactive)

    Always permitted, regardless of associated tasks or invoices.
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, tenant_id: str, client_id: str) -> Result[ClientResponseDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        try:
            client = await self.client_repo.get_by_id(tenant_id, client_id)
            if not client:
                return Return.err(errors.not_found("client", client_id))

            client.status = ClientStatus.INACTIVE
            client.updated_at = utcnow()
            updated = await self.client_repo.update(client)
            await self.uow.commit()

            return Return.ok(ClientResponseDTO.from_entity(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(errors.internal("ARCHIVE_CLIENT_FAILED", "Failed to archive client", e))
