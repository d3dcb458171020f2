"""Like ledger repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from discuss.domain.model import CommentLike
from discuss.domain.value import CommentId, UserId


class LikeRepository(ABC):
    """Repository for the like ledger."""

    @abstractmethod
    async def find(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentLike]:
        """Find a user's like on a comment."""
        pass

    @abstractmethod
    async def save(self, like: CommentLike) -> CommentLike:
        """Insert a like.

        Must not leave the surrounding transaction unusable when the insert
        fails.

        Raises:
            IntegrityError: If the user already likes the comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like.

        Returns:
            True if a row was deleted, False if there was none
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        pass

    @abstractmethod
    async def find_liked_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Which of ``comment_ids`` the user likes (batch query)."""
        pass
