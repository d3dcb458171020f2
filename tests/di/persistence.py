"""Mock persistence providers for testing."""

from dishka import Scope, provide

from discuss.domain.repository import (
    CommentRepository,
    LikeRepository,
    RelationRepository,
    UnitOfWork,
)
from discuss.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryLikeRepository,
    InMemoryRelationRepository,
    InMemoryUnitOfWork,
)
from discuss.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across requests of one container; each
    test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    scope = Scope.APP

    @provide
    def get_inmemory_comment_repository(self) -> InMemoryCommentRepository:
        return InMemoryCommentRepository()

    @provide
    def get_inmemory_relation_repository(self) -> InMemoryRelationRepository:
        return InMemoryRelationRepository()

    @provide
    def get_inmemory_like_repository(self) -> InMemoryLikeRepository:
        return InMemoryLikeRepository()

    @provide
    def get_comment_repository(
        self, repo: InMemoryCommentRepository
    ) -> CommentRepository:
        """Provide in-memory comment repository."""
        return repo

    @provide
    def get_relation_repository(
        self, repo: InMemoryRelationRepository
    ) -> RelationRepository:
        """Provide in-memory closure table repository."""
        return repo

    @provide
    def get_like_repository(self, repo: InMemoryLikeRepository) -> LikeRepository:
        """Provide in-memory like repository."""
        return repo

    @provide
    def get_inmemory_unit_of_work(
        self,
        comment_repository: InMemoryCommentRepository,
        relation_repository: InMemoryRelationRepository,
        like_repository: InMemoryLikeRepository,
    ) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(
            comment_repository, relation_repository, like_repository
        )

    @provide
    def get_unit_of_work(self, unit_of_work: InMemoryUnitOfWork) -> UnitOfWork:
        """Provide snapshot/restore unit of work."""
        return unit_of_work
