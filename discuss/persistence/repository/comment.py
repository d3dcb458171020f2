"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import and_, func, insert, select, tuple_, update
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import Comment, CommentDraft, compute_hot_score, utcnow
from discuss.domain.repository import CommentRepository
from discuss.domain.value import (
    CommentId,
    CommentStatus,
    CounterField,
    TargetId,
    TargetType,
    ThreadCursor,
)
from discuss.persistence.mappers import draft_to_dict, row_to_comment
from discuss.persistence.tables import comments_table

_c = comments_table.c

# Visible: published and not tombstoned
_visible = and_(
    _c.status == CommentStatus.PUBLISHED.value,
    _c.deleted_at.is_(None),
)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_all(self, stmt: Any) -> list[Comment]:
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def _fetch_one(self, stmt: Any) -> Optional[Comment]:
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @staticmethod
    def _filtered(
        stmt: Any,
        status: Optional[CommentStatus],
        target_type: Optional[TargetType],
        target_id: Optional[TargetId],
    ) -> Any:
        if status is not None:
            stmt = stmt.where(_c.status == status.value)
        if target_type is not None:
            stmt = stmt.where(_c.target_type == target_type.value)
        if target_id is not None:
            stmt = stmt.where(_c.target_id == target_id)
        return stmt

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return await self._fetch_one(select(comments_table).where(_c.id == comment_id))

    async def find_by_id_for_update(
        self, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment and hold its row lock (SELECT ... FOR UPDATE)."""
        return await self._fetch_one(
            select(comments_table).where(_c.id == comment_id).with_for_update()
        )

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find several comments by ID."""
        if not comment_ids:
            return []
        return await self._fetch_all(
            select(comments_table).where(_c.id.in_(list(comment_ids)))
        )

    async def create(self, draft: CommentDraft) -> Comment:
        """Insert a comment; the database assigns its id."""
        stmt = insert(comments_table).values(**draft_to_dict(draft)).returning(
            comments_table
        )
        comment = await self._fetch_one(stmt)
        await self.session.flush()
        assert comment is not None
        return comment

    async def find_top_level(
        self,
        target_type: TargetType,
        target_id: TargetId,
        after: Optional[ThreadCursor],
        limit: int,
    ) -> list[Comment]:
        """Find visible roots of a target, newest first, after a cursor."""
        stmt = (
            select(comments_table)
            .where(_c.target_type == target_type.value)
            .where(_c.target_id == target_id)
            .where(_c.parent_id.is_(None))
            .where(_visible)
        )
        if after is not None:
            # Row-value comparison matches the (created_at desc, id desc) order
            stmt = stmt.where(
                tuple_(_c.created_at, _c.id) < tuple_(after.created_at, after.id)
            )
        stmt = stmt.order_by(_c.created_at.desc(), _c.id.desc()).limit(limit)
        return await self._fetch_all(stmt)

    async def find_top_level_by_hot(
        self,
        target_type: TargetType,
        target_id: TargetId,
        offset: int,
        limit: int,
    ) -> list[Comment]:
        """Find visible roots of a target, hottest first."""
        stmt = (
            select(comments_table)
            .where(_c.target_type == target_type.value)
            .where(_c.target_id == target_id)
            .where(_c.parent_id.is_(None))
            .where(_visible)
            .order_by(_c.hot_score.desc(), _c.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return await self._fetch_all(stmt)

    async def find_replies(
        self,
        parent_id: CommentId,
        after_id: Optional[CommentId],
        limit: int,
    ) -> list[Comment]:
        """Find visible direct replies in ascending id order."""
        stmt = select(comments_table).where(_c.parent_id == parent_id).where(_visible)
        if after_id is not None:
            stmt = stmt.where(_c.id > after_id)
        stmt = stmt.order_by(_c.id).limit(limit)
        return await self._fetch_all(stmt)

    async def find_all(
        self,
        status: Optional[CommentStatus] = None,
        target_type: Optional[TargetType] = None,
        target_id: Optional[TargetId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments of any status, newest first."""
        stmt = self._filtered(select(comments_table), status, target_type, target_id)
        stmt = stmt.order_by(_c.created_at.desc(), _c.id.desc()).limit(limit)
        return await self._fetch_all(stmt.offset(offset))

    async def count(
        self,
        status: Optional[CommentStatus] = None,
        target_type: Optional[TargetType] = None,
        target_id: Optional[TargetId] = None,
    ) -> int:
        """Count comments matching the moderation filters."""
        stmt = self._filtered(
            select(func.count()).select_from(comments_table),
            status,
            target_type,
            target_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_visible_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> int:
        """Count visible comments of a target."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(_c.target_type == target_type.value)
            .where(_c.target_id == target_id)
            .where(_visible)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_status(self) -> dict[CommentStatus, int]:
        """Count comments per status."""
        stmt = select(_c.status, func.count()).group_by(_c.status)
        result = await self.session.execute(stmt)
        return {CommentStatus(status): total for status, total in result.all()}

    async def count_visible_children(self, parent_id: CommentId) -> int:
        """Count visible direct replies."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(_c.parent_id == parent_id)
            .where(_visible)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_ids_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> list[CommentId]:
        """All comment IDs of a target in ascending order."""
        stmt = (
            select(_c.id)
            .where(_c.target_type == target_type.value)
            .where(_c.target_id == target_id)
            .order_by(_c.id)
        )
        result = await self.session.execute(stmt)
        return [CommentId(row) for row in result.scalars().all()]

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
        values: dict[str, Any] = {"status": status.value, "updated_at": utcnow()}
        if published_at is not None:
            values["published_at"] = published_at
        if moderated_at is not None:
            values["moderated_at"] = moderated_at
        if deleted_at is not None:
            values["deleted_at"] = deleted_at

        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .where(_c.status == expected.value)
            .values(**values)
            .returning(comments_table)
        )
        comment = await self._fetch_one(stmt)
        await self.session.flush()
        return comment

    async def adjust_counter(
        self, comment_id: CommentId, field: CounterField, delta: int
    ) -> Optional[Comment]:
        """Atomically move a counter and recompute the hot score.

        Both expressions read the pre-update row, so the hot score is
        computed from the new counter value explicitly.
        """
        if field == CounterField.LIKE_COUNT:
            like_count = func.greatest(_c.like_count + delta, 0)
            reply_count = _c.reply_count
        else:
            like_count = _c.like_count
            reply_count = func.greatest(_c.reply_count + delta, 0)

        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .values(
                like_count=like_count,
                reply_count=reply_count,
                hot_score=like_count * 2 + reply_count,
                updated_at=utcnow(),
            )
            .returning(comments_table)
        )
        comment = await self._fetch_one(stmt)
        await self.session.flush()
        return comment

    async def overwrite_counters(
        self, comment_id: CommentId, like_count: int, reply_count: int
    ) -> Optional[Comment]:
        """Replace counters with recomputed values."""
        stmt = (
            update(comments_table)
            .where(_c.id == comment_id)
            .values(
                like_count=like_count,
                reply_count=reply_count,
                hot_score=compute_hot_score(like_count, reply_count),
                updated_at=utcnow(),
            )
            .returning(comments_table)
        )
        comment = await self._fetch_one(stmt)
        await self.session.flush()
        return comment
