"""PostgreSQL implementation of the closure table repository."""

from typing import Optional, Sequence

from sqlalchemy import BigInteger, cast, func, insert, select
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.model import CommentRelation
from discuss.domain.repository import RelationRepository
from discuss.domain.value import CommentId
from discuss.persistence.mappers import relation_to_dict, row_to_relation
from discuss.persistence.tables import comment_relations_table

_r = comment_relations_table.c

# Paths compare segment by segment as numbers ("1,10" sorts after "1,9")
_path_order = cast(func.string_to_array(_r.path, ","), ARRAY(BigInteger))


class PostgresRelationRepository(RelationRepository):
    """PostgreSQL implementation of RelationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_descendant(
        self, descendant_id: CommentId
    ) -> list[CommentRelation]:
        """Ancestor chain of a comment, root first."""
        stmt = (
            select(comment_relations_table)
            .where(_r.descendant_id == descendant_id)
            .order_by(_r.depth.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_relation(row._asdict()) for row in result.fetchall()]

    async def find_by_ancestor(
        self,
        ancestor_id: CommentId,
        max_depth: Optional[int] = None,
    ) -> list[CommentRelation]:
        """Strict descendants in path order."""
        stmt = (
            select(comment_relations_table)
            .where(_r.ancestor_id == ancestor_id)
            .where(_r.depth > 0)
        )
        if max_depth is not None:
            stmt = stmt.where(_r.depth <= max_depth)
        stmt = stmt.order_by(_path_order)
        result = await self.session.execute(stmt)
        return [row_to_relation(row._asdict()) for row in result.fetchall()]

    async def find_children(
        self, ancestor_ids: Sequence[CommentId]
    ) -> list[CommentRelation]:
        """Depth-1 rows of several ancestors."""
        if not ancestor_ids:
            return []
        stmt = (
            select(comment_relations_table)
            .where(_r.ancestor_id.in_(list(ancestor_ids)))
            .where(_r.depth == 1)
            .order_by(_r.ancestor_id, _r.descendant_id)
        )
        result = await self.session.execute(stmt)
        return [row_to_relation(row._asdict()) for row in result.fetchall()]

    async def save_all(self, relations: Sequence[CommentRelation]) -> None:
        """Insert closure rows in one statement."""
        if not relations:
            return
        await self.session.execute(
            insert(comment_relations_table),
            [relation_to_dict(relation) for relation in relations],
        )
        await self.session.flush()
