"""Domain value objects for the comment engine."""

from discuss.domain.value.cursor import HotCursor, ReplyCursor, ThreadCursor
from discuss.domain.value.identifiers import CommentId, LikeId, TargetId, UserId
from discuss.domain.value.types import (
    BodyKind,
    CommentStatus,
    ContentTarget,
    CounterField,
    TargetType,
    ThreadSort,
)

__all__ = [
    # Identifiers
    "CommentId",
    "LikeId",
    "TargetId",
    "UserId",
    # Types
    "BodyKind",
    "CommentStatus",
    "ContentTarget",
    "CounterField",
    "TargetType",
    "ThreadSort",
    # Cursors
    "HotCursor",
    "ReplyCursor",
    "ThreadCursor",
]
