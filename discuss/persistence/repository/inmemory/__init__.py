"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .like import InMemoryLikeRepository
from .relation import InMemoryRelationRepository
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryLikeRepository",
    "InMemoryRelationRepository",
    "InMemoryUnitOfWork",
]
