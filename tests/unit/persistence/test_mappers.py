"""Unit tests for row/domain mappers."""

from datetime import datetime, timezone

from discuss.domain.model import CommentDraft, CommentLike
from discuss.domain.value import BodyKind, CommentStatus, TargetId, TargetType, UserId
from discuss.persistence.mappers import (
    draft_to_dict,
    like_to_dict,
    row_to_comment,
    row_to_relation,
)

NOW = datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc)


class TestCommentMapping:
    """Tests for comment rows."""

    def test_row_to_comment(self):
        row = {
            "id": 7,
            "target_id": 3,
            "target_type": "article",
            "author_id": 11,
            "parent_id": None,
            "depth": 0,
            "body": "hello",
            "body_kind": "text",
            "media_urls": None,
            "like_count": 2,
            "reply_count": 1,
            "hot_score": 5,
            "status": "published",
            "published_at": NOW,
            "moderated_at": None,
            "created_at": NOW,
            "updated_at": NOW,
            "deleted_at": None,
        }

        comment = row_to_comment(row)

        assert comment.id == 7
        assert comment.target_type == TargetType.ARTICLE
        assert comment.status == CommentStatus.PUBLISHED
        assert comment.parent_id is None
        assert comment.media_urls == []
        assert comment.is_visible

    def test_draft_to_dict_stores_enum_values(self):
        draft = CommentDraft(
            target_id=TargetId(3),
            target_type=TargetType.THREAD,
            author_id=UserId(11),
            body_kind=BodyKind.IMAGE,
            media_urls=["https://cdn.example.com/a.png"],
            status=CommentStatus.PENDING,
            created_at=NOW,
        )

        values = draft_to_dict(draft)

        assert values["target_type"] == "thread"
        assert values["body_kind"] == "image"
        assert values["status"] == "pending"
        assert values["updated_at"] == NOW
        assert "id" not in values


class TestRelationAndLikeMapping:
    """Tests for closure and like rows."""

    def test_row_to_relation(self):
        relation = row_to_relation(
            {"ancestor_id": 1, "descendant_id": 9, "depth": 2, "path": "1,4,9"}
        )

        assert relation.path_ids() == [1, 4, 9]
        assert not relation.is_self

    def test_like_to_dict_leaves_id_to_storage(self):
        values = like_to_dict(CommentLike(comment_id=1, user_id=2, created_at=NOW))

        assert values == {"comment_id": 1, "user_id": 2, "created_at": NOW}
