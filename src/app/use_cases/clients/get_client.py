"""Get Client Use Case"""

from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases import errors
from .dtos import ClientResponseDTO


class GetClient:

    def __init__(self, client_repo: ClientRepository):
        self.client_repo = client_repo

    async def execute(self, tenant_id: str, client_id: str) -> Result[ClientResponseDTO]:
        if not tenant_id:
            return Return.err(errors.unauthenticated())

        client = await self.client_repo.get_by_id(tenant_id, client_id)
        if not client:
            return Return.err(errors.not_found("client", client_id))

        return Return.ok(ClientResponseDTO.from_entity(client))
