"""Domain model entities for the comment engine."""

from discuss.domain.model.comment import (
    Comment,
    CommentDraft,
    compute_hot_score,
    utcnow,
)
from discuss.domain.model.event import (
    AnyCommentEvent,
    CommentCreated,
    CommentDeleted,
    CommentEvent,
    CommentLiked,
    CommentModerated,
    CommentUnliked,
)
from discuss.domain.model.like import CommentLike
from discuss.domain.model.relation import CommentRelation

__all__ = [
    "Comment",
    "CommentDraft",
    "CommentLike",
    "CommentRelation",
    "compute_hot_score",
    "utcnow",
    # Events
    "AnyCommentEvent",
    "CommentCreated",
    "CommentDeleted",
    "CommentEvent",
    "CommentLiked",
    "CommentModerated",
    "CommentUnliked",
]
