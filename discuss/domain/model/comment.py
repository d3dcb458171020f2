"""Comment entity.

Comments are threaded discussions attached to a piece of content (a post,
an article, a forum thread) with arbitrarily deep replies. Ancestry is kept
in a closure table (see ``CommentRelation``); ``depth`` on the comment is a
denormalized copy of the distance to its thread root.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import (
    BodyKind,
    CommentId,
    CommentStatus,
    TargetId,
    TargetType,
    UserId,
)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def compute_hot_score(like_count: int, reply_count: int) -> int:
    """Hot score ranks comments by engagement; likes weigh double."""
    return like_count * 2 + reply_count


class CommentDraft(DomainModel):
    """Validated input for a new comment, before storage assigns an id."""

    target_id: TargetId
    target_type: TargetType
    author_id: UserId
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    body: Optional[str] = None
    body_kind: BodyKind = BodyKind.TEXT
    media_urls: list[str] = Field(default_factory=list)
    status: CommentStatus = CommentStatus.PUBLISHED
    published_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)


class Comment(DomainModel):
    """Comment entity.

    Counters (``like_count``, ``reply_count``, ``hot_score``) are only ever
    changed through the counter sync service. ``reply_count`` counts
    published direct children, not the whole subtree.

    A deleted comment keeps its row (``status`` deleted, ``deleted_at`` set)
    so its replies stay reachable.
    """

    id: CommentId
    target_id: TargetId
    target_type: TargetType
    author_id: UserId
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    body: Optional[str] = None
    body_kind: BodyKind = BodyKind.TEXT
    media_urls: list[str] = Field(default_factory=list)
    like_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    hot_score: int = Field(default=0, ge=0)
    status: CommentStatus = CommentStatus.PUBLISHED
    published_at: Optional[datetime] = None
    moderated_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None or self.status == CommentStatus.DELETED

    @property
    def is_visible(self) -> bool:
        """Whether the comment may appear in listings."""
        return self.status == CommentStatus.PUBLISHED and self.deleted_at is None
