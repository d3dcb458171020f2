"""PostgreSQL implementation of the like ledger repository."""

from typing import Optional, Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import CommentLike
from discuss.domain.repository import LikeRepository
from discuss.domain.value import CommentId, UserId
from discuss.persistence.mappers import like_to_dict, row_to_like
from discuss.persistence.tables import comment_likes_table

_l = comment_likes_table.c


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentLike]:
        """Find a user's like on a comment."""
        stmt = (
            select(comment_likes_table)
            .where(_l.comment_id == comment_id)
            .where(_l.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict()) if row else None

    async def save(self, like: CommentLike) -> CommentLike:
        """Insert a like inside a savepoint.

        A duplicate raises IntegrityError after the savepoint rolls back, so
        the outer transaction stays usable.
        """
        async with self.session.begin_nested():
            result = await self.session.execute(
                insert(comment_likes_table)
                .values(**like_to_dict(like))
                .returning(comment_likes_table)
            )
            row = result.fetchone()
        return row_to_like(row._asdict()) if row else like

    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like; False if there was none."""
        stmt = (
            delete(comment_likes_table)
            .where(_l.comment_id == comment_id)
            .where(_l.user_id == user_id)
            .returning(_l.id)
        )
        result = await self.session.execute(stmt)
        deleted = result.fetchone() is not None
        await self.session.flush()
        return deleted

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_likes_table)
            .where(_l.comment_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_liked_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Batch check which comments the user likes."""
        if not comment_ids:
            return set()
        stmt = (
            select(_l.comment_id)
            .where(_l.user_id == user_id)
            .where(_l.comment_id.in_(list(comment_ids)))
        )
        result = await self.session.execute(stmt)
        return {CommentId(comment_id) for comment_id in result.scalars().all()}
