"""Relation index: closure table maintenance and queries."""

from typing import Optional, Sequence

import logfire

from discuss.domain.error import InvalidParentError, ParentNotFoundError
from discuss.domain.model import Comment, CommentRelation
from discuss.domain.repository import CommentRepository, RelationRepository
from discuss.domain.value import CommentId, CommentStatus, TargetId, TargetType

from .base import Service


class RelationIndex(Service):
    """Domain service keeping the comment closure table complete.

    For every comment ``c`` the table holds ``(c, c, 0)`` plus one row
    ``(a, c, distance)`` per ancestor ``a``. Inserting a comment costs one
    read of the parent's ancestor chain and ``depth + 1`` writes; existing
    rows are never modified.
    """

    def __init__(
        self,
        relation_repository: RelationRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize relation index.

        Args:
            relation_repository: Closure table repository
            comment_repository: Comment repository (for ancestor status checks)
        """
        self.relation_repository = relation_repository
        self.comment_repository = comment_repository

    async def insert(
        self, comment_id: CommentId, parent_id: Optional[CommentId]
    ) -> list[CommentRelation]:
        """Write the closure rows of a newly inserted comment.

        Must run in the same transaction as the comment insert.

        Args:
            comment_id: The new comment
            parent_id: Its parent, None for a top-level comment

        Returns:
            Rows written, root ancestor first and self pair last

        Raises:
            ParentNotFoundError: If the parent has no closure rows
        """
        with logfire.span(
            "relation_index.insert",
            comment_id=comment_id,
            parent_id=parent_id,
        ):
            self_pair = CommentRelation(
                ancestor_id=comment_id,
                descendant_id=comment_id,
                depth=0,
                path=str(comment_id),
            )

            if parent_id is None:
                await self.relation_repository.save_all([self_pair])
                return [self_pair]

            chain = await self.relation_repository.find_by_descendant(parent_id)
            if not chain:
                logfire.error(
                    "Parent comment has no closure rows",
                    comment_id=comment_id,
                    parent_id=parent_id,
                )
                raise ParentNotFoundError(parent_id)

            rows = [
                CommentRelation(
                    ancestor_id=row.ancestor_id,
                    descendant_id=comment_id,
                    depth=row.depth + 1,
                    path=f"{row.path},{comment_id}",
                )
                for row in chain
            ]
            rows.append(self_pair)

            await self.relation_repository.save_all(rows)
            logfire.info(
                "Closure rows written",
                comment_id=comment_id,
                parent_id=parent_id,
                rows=len(rows),
            )
            return rows

    async def depth_of(self, comment_id: CommentId) -> int:
        """Distance from a comment to its thread root.

        Raises:
            ParentNotFoundError: If the comment has no closure rows
        """
        chain = await self.relation_repository.find_by_descendant(comment_id)
        if not chain:
            raise ParentNotFoundError(comment_id)
        return max(row.depth for row in chain)

    async def validate_parent(
        self, parent_id: CommentId, target_type: TargetType, target_id: TargetId
    ) -> tuple[Comment, int]:
        """Check a prospective parent and compute the depth a reply would get.

        Args:
            parent_id: Prospective parent
            target_type: Target type of the new reply
            target_id: Target ID of the new reply

        Returns:
            The parent and the depth of the reply

        Raises:
            ParentNotFoundError: Parent missing or not published
            InvalidParentError: Parent belongs to another target
        """
        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is None or parent.is_deleted:
            raise ParentNotFoundError(parent_id)
        # Pending parents are not visible yet; blocked ones never will be
        if parent.status != CommentStatus.PUBLISHED:
            logfire.warn(
                "Reply to unpublished parent refused",
                parent_id=parent_id,
                parent_status=parent.status.value,
            )
            raise ParentNotFoundError(parent_id)
        if (parent.target_type, parent.target_id) != (target_type, target_id):
            logfire.warn(
                "Parent comment belongs to another target",
                parent_id=parent_id,
                parent_target_type=parent.target_type.value,
                parent_target_id=parent.target_id,
            )
            raise InvalidParentError(parent_id)
        return parent, await self.depth_of(parent_id) + 1

    async def descendants_of(
        self, comment_id: CommentId, max_depth: Optional[int] = None
    ) -> list[CommentRelation]:
        """Strict descendants of a comment in depth-first path order.

        Args:
            comment_id: Subtree root
            max_depth: Optional cap on distance from ``comment_id``
        """
        with logfire.span(
            "relation_index.descendants_of",
            comment_id=comment_id,
            max_depth=max_depth,
        ):
            return await self.relation_repository.find_by_ancestor(
                comment_id, max_depth=max_depth
            )

    async def ancestors_of(self, comment_id: CommentId) -> list[CommentRelation]:
        """Every ancestor row of a comment, thread root first.

        The self pair comes last.
        """
        with logfire.span("relation_index.ancestors_of", comment_id=comment_id):
            return await self.relation_repository.find_by_descendant(comment_id)

    async def children_of(
        self, parent_ids: Sequence[CommentId]
    ) -> list[CommentRelation]:
        """Depth-1 rows for several parents."""
        if not parent_ids:
            return []
        return await self.relation_repository.find_children(parent_ids)

    async def has_blocked_ancestor(self, comment_id: CommentId) -> bool:
        """Whether any strict ancestor of the comment has been blocked."""
        chain = await self.ancestors_of(comment_id)
        ancestor_ids = [row.ancestor_id for row in chain if not row.is_self]
        if not ancestor_ids:
            return False
        ancestors = await self.comment_repository.find_by_ids(ancestor_ids)
        return any(a.status == CommentStatus.BLOCKED for a in ancestors)
