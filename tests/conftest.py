"""Test configuration and fixtures."""

import os

# Test defaults, set before any Settings() is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("MODERATION__ADMIN_USER_IDS", "[900]")

from dishka import AsyncContainer  # noqa: E402

from discuss.adapter.content import MockContentDirectory  # noqa: E402
from discuss.config import CommentSettings  # noqa: E402
from discuss.domain.repository import (  # noqa: E402
    CommentRepository,
    LikeRepository,
    UnitOfWork,
)
from discuss.domain.service import (  # noqa: E402
    CommentEventPublisher,
    CommentPolicy,
    CommentService,
    ContentDirectory,
    CounterSync,
    ModerationGate,
    RelationIndex,
    SettingsModerationPolicy,
)
from discuss.domain.value import TargetId, TargetType, UserId  # noqa: E402

ADMIN_ID = UserId(900)
OWNER_ID = UserId(500)
ALICE = UserId(1)
BOB = UserId(2)
CAROL = UserId(3)

POST = TargetType.POST
TARGET_ID = TargetId(10)


async def register_target(
    env: AsyncContainer,
    target_type: TargetType = POST,
    target_id: TargetId = TARGET_ID,
    owner_id: UserId | None = OWNER_ID,
) -> MockContentDirectory:
    """Make a target exist in the mock content service."""
    directory = await env.get(MockContentDirectory)
    directory.register(target_type, target_id, owner_id=owner_id)
    return directory


async def build_comment_service(
    env: AsyncContainer,
    settings: CommentSettings,
    content_directory: ContentDirectory | None = None,
) -> CommentService:
    """Build a CommentService over the container's repositories with custom settings.

    Used for pre-moderation and limit tests that need settings other than
    the environment's.
    """
    return CommentService(
        comment_repository=await env.get(CommentRepository),
        like_repository=await env.get(LikeRepository),
        unit_of_work=await env.get(UnitOfWork),
        relation_index=await env.get(RelationIndex),
        counter_sync=await env.get(CounterSync),
        moderation_gate=ModerationGate(SettingsModerationPolicy(settings)),
        content_directory=content_directory or await env.get(ContentDirectory),
        comment_policy=await env.get(CommentPolicy),
        event_publisher=await env.get(CommentEventPublisher),
        comment_settings=settings,
    )
