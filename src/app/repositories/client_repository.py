"""Client Repository Interface

Defines the contract for client persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple
from src.domain.client import Client, ClientStatus


class ClientRepository(ABC):
    """
    Repository interface for Client persistence

    Every lookup is scoped by tenant_id; a client owned by another tenant
    is indistinguishable from a missing one.
    """

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """
        Create a new client

        Args:
            client: Client entity to persist

        Returns:
            Created Client
        """
        pass

    @abstractmethod
    async def get_by_id(self, tenant_id: str, client_id: str) -> Optional[Client]:
        """
        Retrieve a tenant's client by ID

        Args:
            tenant_id: Tenant identifier
            client_id: Client ID

        Returns:
            Client if found and owned by the tenant, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(
        self,
        tenant_id: str,
        email: str,
        exclude_id: Optional[str] = None,
        active_only: bool = False,
    ) -> Optional[Client]:
        """
        Find a tenant's client by (normalized) email

        Args:
            tenant_id: Tenant identifier
            email: Normalized email address
            exclude_id: Ignore the client with this ID (used on update)
            active_only: Only consider clients with status=active

        Returns:
            First matching Client, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        tenant_id: str,
        search: Optional[str] = None,
        status: Optional[ClientStatus] = None,
        sort_by: str = "name",
        sort_order: str = "asc",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Client], int]:
        """
        List a tenant's clients

        Returns:
            Tuple of (page of clients, total matching count)
        """
        pass

    @abstractmethod
    async def update(self, client: Client) -> Client:
        pass

    @abstractmethod
    async def delete(self, client: Client) -> None:
        pass
