"""SQLAlchemy Unit of Work

Wraps the request's AsyncSession; repositories only flush, the use case
decides when the transaction ends.
"""

from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        # no-op when nothing was started, e.g. validation failed before any query
        if self.session.in_transaction():
            await self.session.rollback()
