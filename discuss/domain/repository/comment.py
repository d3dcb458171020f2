"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from discuss.domain.model import Comment, CommentDraft
from discuss.domain.value import (
    CommentId,
    CommentStatus,
    CounterField,
    TargetId,
    TargetType,
    ThreadCursor,
)


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    "Visible" below always means status published and not soft-deleted.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, tombstones included.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(
        self, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment and lock its row until the transaction ends.

        Concurrent counter changes on the same comment wait for the lock.
        Must be called inside a unit of work transaction.
        """
        pass

    @abstractmethod
    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find several comments by ID (any status, order unspecified)."""
        pass

    @abstractmethod
    async def create(self, draft: CommentDraft) -> Comment:
        """Insert a new comment and return it with its assigned id.

        Args:
            draft: Validated comment input

        Returns:
            The stored comment with zeroed counters
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        target_type: TargetType,
        target_id: TargetId,
        after: Optional[ThreadCursor],
        limit: int,
    ) -> list[Comment]:
        """Find visible top-level comments of a target, newest first.

        Ordered by ``(created_at desc, id desc)`` and starting strictly after
        ``after`` when given.

        Args:
            target_type: Commented-on content type
            target_id: Commented-on content ID
            after: Position of the last comment already served
            limit: Maximum number of comments to return

        Returns:
            Up to ``limit`` comments
        """
        pass

    @abstractmethod
    async def find_top_level_by_hot(
        self,
        target_type: TargetType,
        target_id: TargetId,
        offset: int,
        limit: int,
    ) -> list[Comment]:
        """Find visible top-level comments of a target, hottest first.

        Ordered by ``(hot_score desc, id desc)``.

        Args:
            target_type: Commented-on content type
            target_id: Commented-on content ID
            offset: Roots to skip
            limit: Maximum number of comments to return

        Returns:
            Up to ``limit`` comments
        """
        pass

    @abstractmethod
    async def find_replies(
        self,
        parent_id: CommentId,
        after_id: Optional[CommentId],
        limit: int,
    ) -> list[Comment]:
        """Find visible direct replies of one parent in ascending id order.

        Args:
            parent_id: Parent comment ID
            after_id: Only replies with a greater ID are returned
            limit: Maximum number of replies to return

        Returns:
            Up to ``limit`` replies
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        status: Optional[CommentStatus] = None,
        target_type: Optional[TargetType] = None,
        target_id: Optional[TargetId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments of any status for moderation, newest first."""
        pass

    @abstractmethod
    async def count(
        self,
        status: Optional[CommentStatus] = None,
        target_type: Optional[TargetType] = None,
        target_id: Optional[TargetId] = None,
    ) -> int:
        """Count comments matching the same filters as ``find_all``."""
        pass

    @abstractmethod
    async def count_visible_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> int:
        """Count visible comments (any depth) of a target."""
        pass

    @abstractmethod
    async def count_by_status(self) -> dict[CommentStatus, int]:
        """Count comments per status."""
        pass

    @abstractmethod
    async def count_visible_children(self, parent_id: CommentId) -> int:
        """Count visible direct replies of a comment."""
        pass

    @abstractmethod
    async def find_ids_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> list[CommentId]:
        """All comment IDs of a target, tombstones included, ascending."""
        pass

    @abstractmethod
    async def update_status(
        self,
        comment_id: CommentId,
        expected: CommentStatus,
        status: CommentStatus,
        published_at: Optional[datetime] = None,
        moderated_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
    ) -> Optional[Comment]:
        """Move a comment to a new status if it is still in ``expected``.

        The status guard makes concurrent transitions (two deletes, a delete
        racing a block) resolve to exactly one winner.

        Timestamps left as None keep their stored value.

        Returns:
            The updated comment, or None if the guard did not match
        """
        pass

    @abstractmethod
    async def adjust_counter(
        self, comment_id: CommentId, field: CounterField, delta: int
    ) -> Optional[Comment]:
        """Atomically add ``delta`` to a counter (floored at 0).

        The hot score is recomputed in the same statement.

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def overwrite_counters(
        self, comment_id: CommentId, like_count: int, reply_count: int
    ) -> Optional[Comment]:
        """Replace both counters (and the hot score) with recomputed values."""
        pass
