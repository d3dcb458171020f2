"""PostgreSQL repository implementations."""

from discuss.persistence.repository.comment import PostgresCommentRepository
from discuss.persistence.repository.like import PostgresLikeRepository
from discuss.persistence.repository.relation import PostgresRelationRepository
from discuss.persistence.repository.unit_of_work import PostgresUnitOfWork

__all__ = [
    "PostgresCommentRepository",
    "PostgresLikeRepository",
    "PostgresRelationRepository",
    "PostgresUnitOfWork",
]
