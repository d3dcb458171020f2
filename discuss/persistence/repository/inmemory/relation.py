"""In-memory closure table repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from discuss.domain.model import CommentRelation
from discuss.domain.repository.relation import RelationRepository
from discuss.domain.value import CommentId


class InMemoryRelationRepository(RelationRepository):
    """In-memory implementation of RelationRepository for testing."""

    def __init__(self) -> None:
        self._relations: dict[tuple[CommentId, CommentId], CommentRelation] = {}

    def snapshot(self) -> dict[tuple[CommentId, CommentId], CommentRelation]:
        return dict(self._relations)

    def restore(self, state: dict[tuple[CommentId, CommentId], CommentRelation]) -> None:
        self._relations = dict(state)

    async def find_by_descendant(
        self, descendant_id: CommentId
    ) -> list[CommentRelation]:
        """Ancestor chain of a comment, root first."""
        rows = [r for r in self._relations.values() if r.descendant_id == descendant_id]
        return sorted(rows, key=lambda r: r.depth, reverse=True)

    async def find_by_ancestor(
        self,
        ancestor_id: CommentId,
        max_depth: Optional[int] = None,
    ) -> list[CommentRelation]:
        """Strict descendants in path order."""
        rows = [
            r
            for r in self._relations.values()
            if r.ancestor_id == ancestor_id
            and r.depth > 0
            and (max_depth is None or r.depth <= max_depth)
        ]
        return sorted(rows, key=lambda r: r.path_ids())

    async def find_children(
        self, ancestor_ids: Sequence[CommentId]
    ) -> list[CommentRelation]:
        """Depth-1 rows of several ancestors."""
        wanted = set(ancestor_ids)
        rows = [
            r
            for r in self._relations.values()
            if r.ancestor_id in wanted and r.depth == 1
        ]
        return sorted(rows, key=lambda r: (r.ancestor_id, r.descendant_id))

    async def save_all(self, relations: Sequence[CommentRelation]) -> None:
        """Insert rows, all or none.

        Raises:
            IntegrityError: If a pair already exists
        """
        keys = [(r.ancestor_id, r.descendant_id) for r in relations]
        if len(set(keys)) != len(keys) or any(k in self._relations for k in keys):
            raise IntegrityError("Duplicate comment relation", None, Exception())
        for key, relation in zip(keys, relations):
            self._relations[key] = relation
