"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from discuss.domain.model import Comment, CommentDraft, CommentLike, CommentRelation
from discuss.domain.value import (
    BodyKind,
    CommentId,
    CommentStatus,
    LikeId,
    TargetId,
    TargetType,
    UserId,
)


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        target_id=TargetId(row["target_id"]),
        target_type=TargetType(row["target_type"]),
        author_id=UserId(row["author_id"]),
        parent_id=(
            CommentId(row["parent_id"]) if row.get("parent_id") is not None else None
        ),
        depth=row["depth"],
        body=row.get("body"),
        body_kind=BodyKind(row["body_kind"]),
        media_urls=list(row.get("media_urls") or []),
        like_count=row["like_count"],
        reply_count=row["reply_count"],
        hot_score=row["hot_score"],
        status=CommentStatus(row["status"]),
        published_at=row.get("published_at"),
        moderated_at=row.get("moderated_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def draft_to_dict(draft: CommentDraft) -> Dict[str, Any]:
    """Convert CommentDraft to database dict for insertion.

    Enum members are stored by value; ``updated_at`` starts equal to
    ``created_at``.
    """
    values = draft.model_dump(mode="python")
    values["target_type"] = draft.target_type.value
    values["body_kind"] = draft.body_kind.value
    values["status"] = draft.status.value
    values["updated_at"] = draft.created_at
    return values


def row_to_relation(row: Dict[str, Any]) -> CommentRelation:
    """Convert database row to CommentRelation domain model."""
    return CommentRelation(
        ancestor_id=CommentId(row["ancestor_id"]),
        descendant_id=CommentId(row["descendant_id"]),
        depth=row["depth"],
        path=row["path"],
    )


def relation_to_dict(relation: CommentRelation) -> Dict[str, Any]:
    return relation.model_dump()


def row_to_like(row: Dict[str, Any]) -> CommentLike:
    """Convert database row to CommentLike domain model."""
    return CommentLike(
        id=LikeId(row["id"]),
        comment_id=CommentId(row["comment_id"]),
        user_id=UserId(row["user_id"]),
        created_at=row["created_at"],
    )


def like_to_dict(like: CommentLike) -> Dict[str, Any]:
    """Convert CommentLike to database dict (storage assigns the id)."""
    return like.model_dump(exclude={"id"})
