"""Comment relation (closure table row).

One row exists for every (ancestor, descendant) pair in a comment tree,
including the self pair of every comment at depth 0. ``path`` lists the ids
from ancestor to descendant separated by commas, e.g. ``"1,4,9"``.
"""

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId


class CommentRelation(DomainModel):
    """Closure table row."""

    ancestor_id: CommentId
    descendant_id: CommentId
    depth: int = Field(ge=0)
    path: str

    @property
    def is_self(self) -> bool:
        return self.ancestor_id == self.descendant_id

    def path_ids(self) -> list[CommentId]:
        """Ids along the path, ancestor first."""
        return [CommentId(int(part)) for part in self.path.split(",")]
