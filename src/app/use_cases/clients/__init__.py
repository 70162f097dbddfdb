"""Client use cases"""
from .create_client import CreateClient
from .update_client import UpdateClient
from .archive_client import ArchiveClient
from .remove_client import RemoveClient
from .get_client import GetClient
from .list_clients import ListClients
from .dtos import (
    CreateClientCommandDTO,
    UpdateClientCommandDTO,
    ListClientsQueryDTO,
    ClientResponseDTO,
    ListClientsResponseDTO,
)

__all__ = [
    "CreateClient",
    "UpdateClient",
    "ArchiveClient",
    "RemoveClient",
    "GetClient",
    "ListClients",
    "CreateClientCommandDTO",
    "UpdateClientCommandDTO",
    "ListClientsQueryDTO",
    "ClientResponseDTO",
    "ListClientsResponseDTO",
]
