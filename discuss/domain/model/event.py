"""Outbound comment events.

Events are handed to the event publisher after the transaction that caused
them commits. Notification delivery and the moderation audit trail consume
them; the comment engine never calls into those systems directly.
"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import Field

from discuss.domain.model.comment import utcnow
from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, CommentStatus, TargetId, TargetType, UserId


class CommentEvent(DomainModel):
    """Common event envelope."""

    comment_id: CommentId
    target_type: TargetType
    target_id: TargetId
    occurred_at: datetime = Field(default_factory=utcnow)


class CommentCreated(CommentEvent):
    """A comment was created."""

    name: Literal["comment.created"] = "comment.created"
    parent_id: Optional[CommentId] = None
    author_id: UserId
    status: CommentStatus
    # Who should hear about it: parent author for replies, content owner for
    # top-level comments, nobody when that would be the author themselves
    recipient_id: Optional[UserId] = None


class CommentLiked(CommentEvent):
    """A user liked a comment."""

    name: Literal["comment.liked"] = "comment.liked"
    user_id: UserId
    author_id: UserId
    like_count: int


class CommentUnliked(CommentEvent):
    """A user withdrew a like."""

    name: Literal["comment.unliked"] = "comment.unliked"
    user_id: UserId
    like_count: int


class CommentDeleted(CommentEvent):
    """A comment was turned into a tombstone."""

    name: Literal["comment.deleted"] = "comment.deleted"
    actor_id: UserId
    previous_status: CommentStatus


class CommentModerated(CommentEvent):
    """A review decision changed a comment's status."""

    name: Literal["comment.moderated"] = "comment.moderated"
    previous_status: CommentStatus
    new_status: CommentStatus
    reason: Optional[str] = None
    reviewer_id: Optional[UserId] = None
    hidden_descendants: int = 0  # Replies below a blocked comment


AnyCommentEvent = Union[
    CommentCreated, CommentLiked, CommentUnliked, CommentDeleted, CommentModerated
]
