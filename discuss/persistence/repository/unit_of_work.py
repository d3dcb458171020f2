"""PostgreSQL unit of work."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Unit of work over the request-scoped session.

    All repositories of a request share the session, so one ``begin()``
    covers every write they make. The transaction commits when the block
    exits and rolls back if it raises.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        # Reads made earlier in the request autobegin a transaction; close it
        # so the write transaction starts from a fresh snapshot
        if self.session.in_transaction():
            await self.session.commit()
        try:
            async with self.session.begin():
                yield
        except Exception as e:
            logfire.warn("Transaction rolled back", error=str(e))
            raise
