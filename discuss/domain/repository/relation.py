"""Comment relation (closure table) repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from discuss.domain.model import CommentRelation
from discuss.domain.value import CommentId


class RelationRepository(ABC):
    """Repository for closure table rows.

    Rows are append-only: there is no update or delete.
    """

    @abstractmethod
    async def find_by_descendant(
        self, descendant_id: CommentId
    ) -> list[CommentRelation]:
        """Find every row whose descendant is ``descendant_id``.

        Returns:
            Rows ordered by depth descending (thread root first, self pair last)
        """
        pass

    @abstractmethod
    async def find_by_ancestor(
        self,
        ancestor_id: CommentId,
        max_depth: Optional[int] = None,
    ) -> list[CommentRelation]:
        """Find strict descendants of ``ancestor_id``.

        Args:
            ancestor_id: Subtree root
            max_depth: Only rows with ``depth <= max_depth`` when given

        Returns:
            Rows with depth > 0 in path order (depth-first, oldest sibling first)
        """
        pass

    @abstractmethod
    async def find_children(
        self, ancestor_ids: Sequence[CommentId]
    ) -> list[CommentRelation]:
        """Find depth-1 rows for several ancestors."""
        pass

    @abstractmethod
    async def save_all(self, relations: Sequence[CommentRelation]) -> None:
        """Insert rows.

        Raises:
            IntegrityError: If an (ancestor, descendant) pair already exists
        """
        pass
