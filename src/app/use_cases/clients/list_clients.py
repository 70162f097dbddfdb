"""
List Clients Use Case

Paginated, searchable and sortable client listing for a tenant.
"""
from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases import errors
from .dtos import ListClientsQueryDTO, ListClientsResponseDTO, ClientResponseDTO


class ListClients:
    """
    Use case: List a tenant's clients

    Search matches name or email case-insensitively.
    """

    def __init__(self, client_repo: ClientRepository):
        self.client_repo = client_repo

    async def execute(self, query: ListClientsQueryDTO) -> Result[ListClientsResponseDTO]:
        if not query.tenant_id:
            return Return.err(errors.unauthenticated())

        clients, total = await self.client_repo.list(
            tenant_id=query.tenant_id,
            search=query.search,
            status=query.status,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
            limit=query.limit,
            offset=query.offset,
        )

        return Return.ok(
            ListClientsResponseDTO(
                clients=[ClientResponseDTO.from_entity(c) for c in clients],
                total=total,
                has_more=(query.offset + query.limit) < total,
                limit=query.limit,
                offset=query.offset,
            )
        )
