"""SQLAlchemy Client Repository Implementation

Implements client persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from sqlalchemy import or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.client_repository import ClientRepository
from src.domain.base import utcnow
from src.domain.client import Client, ClientStatus

SORTABLE_COLUMNS = {
    "name": Client.name,
    "email": Client.email,
    "hourly_rate": Client.hourly_rate,
    "created_at": Client.created_at,
}


class SqlAlchemyClientRepository(ClientRepository):
    """
    SQLAlchemy implementation of ClientRepository

    Every query is scoped by tenant_id.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, client: Client) -> Client:
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def get_by_id(self, tenant_id: str, client_id: str) -> Optional[Client]:
        statement = (
            select(Client)
            .where(Client.tenant_id == tenant_id)
            .where(Client.id == client_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def find_by_email(
        self,
        tenant_id: str,
        email: str,
        exclude_id: Optional[str] = None,
        active_only: bool = False,
    ) -> Optional[Client]:
        statement = (
            select(Client)
            .where(Client.tenant_id == tenant_id)
            .where(func.lower(Client.email) == email.lower())
        )

        if exclude_id:
            statement = statement.where(Client.id != exclude_id)

        if active_only:
            statement = statement.where(Client.status == ClientStatus.ACTIVE)

        result = await self.session.execute(statement.limit(1))
        return result.scalars().first()

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
        List clients with search, filter, sort and pagination

        search matches name or email, case-insensitively.
        """
        filters = [Client.tenant_id == tenant_id]

        if search:
            pattern = f"%{search.lower()}%"
            filters.append(
                or_(func.lower(Client.name).like(pattern), func.lower(Client.email).like(pattern))
            )

        if status:
            filters.append(Client.status == status)

        count_statement = select(func.count()).select_from(Client).where(*filters)
        total = (await self.session.execute(count_statement)).scalar_one()

        column = SORTABLE_COLUMNS.get(sort_by, Client.name)
        order = column.desc() if sort_order == "desc" else column.asc()

        statement = (
            select(Client)
            .where(*filters)
            .order_by(order, Client.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, client: Client) -> Client:
        client.updated_at = utcnow()
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def delete(self, client: Client) -> None:
        await self.session.delete(client)
        await self.session.flush()
