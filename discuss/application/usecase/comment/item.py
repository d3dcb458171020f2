"""Comment representation shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.model import Comment
from discuss.domain.value import BodyKind, CommentStatus, TargetType


class CommentItem(BaseModel):
    """Comment item in responses.

    Tombstones keep their place in the tree but not their content.
    """

    comment_id: int
    target_type: TargetType
    target_id: int
    author_id: int
    parent_id: int | None
    depth: int
    body: str | None
    body_kind: BodyKind
    media_urls: list[str]
    like_count: int
    reply_count: int
    hot_score: int
    status: CommentStatus
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None
    liked: bool | None = None  # None when there is no viewer

    @classmethod
    def from_comment(cls, comment: Comment, liked: bool | None = None) -> "CommentItem":
        return cls(
            comment_id=comment.id,
            target_type=comment.target_type,
            target_id=comment.target_id,
            author_id=comment.author_id,
            parent_id=comment.parent_id,
            depth=comment.depth,
            body=None if comment.is_deleted else comment.body,
            body_kind=comment.body_kind,
            media_urls=[] if comment.is_deleted else comment.media_urls,
            like_count=comment.like_count,
            reply_count=comment.reply_count,
            hot_score=comment.hot_score,
            status=comment.status,
            published_at=comment.published_at,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            deleted_at=comment.deleted_at,
            liked=liked,
        )
