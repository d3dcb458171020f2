"""Unit tests for CreateCommentUseCase."""

import pytest

from discuss.adapter.content import MockContentDirectory
from discuss.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
)
from discuss.domain.error import EmptyContentError
from discuss.domain.value import BodyKind, CommentStatus, TargetType
from tests.conftest import ALICE, BOB, POST, TARGET_ID, register_target
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_comment_increments_target_count(self, unit_env):
        """Creating a top-level comment should bump the target's comment count."""
        # Arrange
        directory = await register_target(unit_env)
        create_comment_use_case = await unit_env.get(CreateCommentUseCase)

        # Act
        response = await create_comment_use_case.execute(
            CreateCommentRequest(
                target_type=TargetType.POST,
                target_id=TARGET_ID,
                author_id=ALICE,
                body="Great post",
            )
        )

        # Assert
        assert response.comment_id == 1
        assert response.body == "Great post"
        assert response.depth == 0
        assert response.status == CommentStatus.PUBLISHED
        assert response.liked is None
        assert directory.comment_counts[(POST, TARGET_ID)] == 1

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        await register_target(unit_env)
        create_comment_use_case = await unit_env.get(CreateCommentUseCase)
        parent = await create_comment_use_case.execute(
            CreateCommentRequest(
                target_type=POST, target_id=TARGET_ID, author_id=ALICE, body="parent"
            )
        )

        reply = await create_comment_use_case.execute(
            CreateCommentRequest(
                target_type=POST,
                target_id=TARGET_ID,
                author_id=BOB,
                body="reply",
                parent_id=parent.comment_id,
            )
        )

        assert reply.parent_id == parent.comment_id
        assert reply.depth == 1

    @pytest.mark.asyncio
    async def test_create_video_comment(self, unit_env):
        await register_target(unit_env, target_type=TargetType.THREAD)
        create_comment_use_case = await unit_env.get(CreateCommentUseCase)

        response = await create_comment_use_case.execute(
            CreateCommentRequest(
                target_type=TargetType.THREAD,
                target_id=TARGET_ID,
                author_id=ALICE,
                body_kind=BodyKind.VIDEO,
                media_urls=["https://cdn.example.com/clip.mp4"],
            )
        )

        assert response.body is None
        assert response.body_kind == BodyKind.VIDEO
        assert response.target_type == TargetType.THREAD

    @pytest.mark.asyncio
    async def test_empty_comment(self, unit_env):
        await register_target(unit_env)
        create_comment_use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(EmptyContentError):
            await create_comment_use_case.execute(
                CreateCommentRequest(
                    target_type=POST, target_id=TARGET_ID, author_id=ALICE, body=" "
                )
            )

        directory = await unit_env.get(MockContentDirectory)
        assert directory.comment_counts[(POST, TARGET_ID)] == 0


class TestGetAndDeleteComment:
    """Tests for GetCommentUseCase and DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_tombstone_hides_content(self, unit_env):
        """A deleted comment keeps its place but loses its body."""
        await register_target(unit_env)
        create_comment_use_case = await unit_env.get(CreateCommentUseCase)
        delete_comment_use_case = await unit_env.get(DeleteCommentUseCase)
        get_comment_use_case = await unit_env.get(GetCommentUseCase)

        created = await create_comment_use_case.execute(
            CreateCommentRequest(
                target_type=POST, target_id=TARGET_ID, author_id=ALICE, body="oops"
            )
        )
        deleted = await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=created.comment_id, actor_id=ALICE)
        )
        fetched = await get_comment_use_case.execute(
            GetCommentRequest(comment_id=created.comment_id)
        )

        assert deleted.status == CommentStatus.DELETED
        assert deleted.deleted_at is not None
        assert fetched.status == CommentStatus.DELETED
        assert fetched.body is None
        assert fetched.media_urls == []

    @pytest.mark.asyncio
    async def test_viewer_like_flag(self, unit_env):
        await register_target(unit_env)
        create_comment_use_case = await unit_env.get(CreateCommentUseCase)
        get_comment_use_case = await unit_env.get(GetCommentUseCase)
        created = await create_comment_use_case.execute(
            CreateCommentRequest(
                target_type=POST, target_id=TARGET_ID, author_id=ALICE, body="hi"
            )
        )

        as_bob = await get_comment_use_case.execute(
            GetCommentRequest(comment_id=created.comment_id, viewer_id=BOB)
        )
        anonymous = await get_comment_use_case.execute(
            GetCommentRequest(comment_id=created.comment_id)
        )

        assert as_bob.liked is False
        assert anonymous.liked is None
