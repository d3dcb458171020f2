"""In-memory unit of work for testing."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from discuss.domain.repository.unit_of_work import UnitOfWork

from .comment import InMemoryCommentRepository
from .like import InMemoryLikeRepository
from .relation import InMemoryRelationRepository


class InMemoryUnitOfWork(UnitOfWork):
    """Serialized transactions over the in-memory repositories.

    Each transaction snapshots every repository and restores the snapshots
    if the block raises, so a failed operation leaves no partial writes.
    """

    def __init__(
        self,
        comment_repository: InMemoryCommentRepository,
        relation_repository: InMemoryRelationRepository,
        like_repository: InMemoryLikeRepository,
    ) -> None:
        self.repositories = (comment_repository, relation_repository, like_repository)
        self._lock = asyncio.Lock()
        self.commits = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self._lock:
            snapshots = [repo.snapshot() for repo in self.repositories]
            try:
                yield
            except Exception:
                for repo, state in zip(self.repositories, snapshots):
                    repo.restore(state)
                self.rollbacks += 1
                raise
            self.commits += 1
