"""In-memory comment repository for testing."""

from collections import defaultdict
from datetime import datetime
from typing import Optional, Sequence

from discuss.domain.model import Comment, CommentDraft, compute_hot_score, utcnow
from discuss.domain.repository.comment import CommentRepository
from discuss.domain.value import (
    CommentId,
    CommentStatus,
    CounterField,
    TargetId,
    TargetType,
    ThreadCursor,
)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._next_id = 1

    def snapshot(self) -> tuple[dict[CommentId, Comment], int]:
        return dict(self._comments), self._next_id

    def restore(self, state: tuple[dict[CommentId, Comment], int]) -> None:
        self._comments, self._next_id = dict(state[0]), state[1]

    def _matching(
        self,
        status: Optional[CommentStatus],
        target_type: Optional[TargetType],
        target_id: Optional[TargetId],
    ) -> list[Comment]:
        return [
            c
            for c in self._comments.values()
            if (status is None or c.status == status)
            and (target_type is None or c.target_type == target_type)
            and (target_id is None or c.target_id == target_id)
        ]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_id_for_update(
        self, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment; the unit of work lock already serializes writers."""
        return self._comments.get(comment_id)

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find several comments by ID."""
        return [self._comments[cid] for cid in comment_ids if cid in self._comments]

    async def create(self, draft: CommentDraft) -> Comment:
        """Insert a comment with the next id."""
        comment = Comment(
            id=CommentId(self._next_id),
            updated_at=draft.created_at,
            **draft.model_dump(),
        )
        self._comments[comment.id] = comment
        self._next_id += 1
        return comment

    async def find_top_level(
        self,
        target_type: TargetType,
        target_id: TargetId,
        after: Optional[ThreadCursor],
        limit: int,
    ) -> list[Comment]:
        """Find visible roots, newest first, after a cursor."""
        roots = [
            c
            for c in self._comments.values()
            if c.target_type == target_type
            and c.target_id == target_id
            and c.parent_id is None
            and c.is_visible
        ]
        roots.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        if after is not None:
            roots = [c for c in roots if (c.created_at, c.id) < (after.created_at, after.id)]
        return roots[:limit]

    async def find_top_level_by_hot(
        self,
        target_type: TargetType,
        target_id: TargetId,
        offset: int,
        limit: int,
    ) -> list[Comment]:
        """Find visible roots, hottest first."""
        roots = [
            c
            for c in self._comments.values()
            if c.target_type == target_type
            and c.target_id == target_id
            and c.parent_id is None
            and c.is_visible
        ]
        roots.sort(key=lambda c: (c.hot_score, c.id), reverse=True)
        return roots[offset : offset + limit]

    async def find_replies(
        self,
        parent_id: CommentId,
        after_id: Optional[CommentId],
        limit: int,
    ) -> list[Comment]:
        """Visible direct replies in ascending id order."""
        replies = sorted(
            (
                c
                for c in self._comments.values()
                if c.parent_id == parent_id
                and c.is_visible
                and (after_id is None or c.id > after_id)
            ),
            key=lambda c: c.id,
        )
        return replies[:limit]

    async def find_all(
        self,
        status: Optional[CommentStatus] = None,
        target_type: Optional[TargetType] = None,
        target_id: Optional[TargetId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Comments of any status, newest first."""
        comments = self._matching(status, target_type, target_id)
        comments.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return comments[offset : offset + limit]

    async def count(
        self,
        status: Optional[CommentStatus] = None,
        target_type: Optional[TargetType] = None,
        target_id: Optional[TargetId] = None,
    ) -> int:
        """Count comments matching the filters."""
        return len(self._matching(status, target_type, target_id))

    async def count_visible_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> int:
        """Count visible comments of a target."""
        return sum(
            1
            for c in self._matching(None, target_type, target_id)
            if c.is_visible
        )

    async def count_by_status(self) -> dict[CommentStatus, int]:
        """Count comments per status."""
        counts: dict[CommentStatus, int] = defaultdict(int)
        for comment in self._comments.values():
            counts[comment.status] += 1
        return dict(counts)

    async def count_visible_children(self, parent_id: CommentId) -> int:
        """Count visible direct replies."""
        return sum(
            1
            for c in self._comments.values()
            if c.parent_id == parent_id and c.is_visible
        )

    async def find_ids_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> list[CommentId]:
        """All comment IDs of a target, ascending."""
        return sorted(c.id for c in self._matching(None, target_type, target_id))

    async def update_status(
        self,
        comment_id: CommentId,
        expected: CommentStatus,
        status: CommentStatus,
        published_at: Optional[datetime] = None,
        moderated_at: Optional[datetime] = None,
        deleted_at: Optional[datetime] = None,
    ) -> Optional[Comment]:
        """Compare-and-set the status of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.status != expected:
            return None

        changes = {"status": status, "updated_at": utcnow()}
        if published_at is not None:
            changes["published_at"] = published_at
        if moderated_at is not None:
            changes["moderated_at"] = moderated_at
        if deleted_at is not None:
            changes["deleted_at"] = deleted_at

        updated = comment.model_copy(update=changes)
        self._comments[comment_id] = updated
        return updated

    async def adjust_counter(
        self, comment_id: CommentId, field: CounterField, delta: int
    ) -> Optional[Comment]:
        """Move a counter (floored at 0) and recompute the hot score."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        like_count = comment.like_count
        reply_count = comment.reply_count
        if field == CounterField.LIKE_COUNT:
            like_count = max(like_count + delta, 0)
        else:
            reply_count = max(reply_count + delta, 0)
        return await self.overwrite_counters(comment_id, like_count, reply_count)

    async def overwrite_counters(
        self, comment_id: CommentId, like_count: int, reply_count: int
    ) -> Optional[Comment]:
        """Replace counters with the given values."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(
            update={
                "like_count": like_count,
                "reply_count": reply_count,
                "hot_score": compute_hot_score(like_count, reply_count),
                "updated_at": utcnow(),
            }
        )
        self._comments[comment_id] = updated
        return updated
