"""Domain services."""

from .base import Service
from .comment_service import (
    CommentService,
    CommentStatistics,
    LikeState,
    ModerationBatchResult,
)
from .content import ContentDirectory
from .counter_sync import CounterSnapshot, CounterSync
from .events import CommentEventPublisher
from .moderation_gate import ModerationGate
from .policy import (
    CommentPolicy,
    DefaultCommentPolicy,
    ModerationPolicy,
    SettingsModerationPolicy,
)
from .relation_index import RelationIndex
from .tree_assembler import ReplyNode, ReplyPage, ThreadNode, ThreadPage, TreeAssembler

__all__ = [
    "CommentEventPublisher",
    "CommentPolicy",
    "CommentService",
    "CommentStatistics",
    "ContentDirectory",
    "CounterSnapshot",
    "CounterSync",
    "DefaultCommentPolicy",
    "LikeState",
    "ModerationBatchResult",
    "ModerationGate",
    "ModerationPolicy",
    "RelationIndex",
    "ReplyNode",
    "ReplyPage",
    "Service",
    "SettingsModerationPolicy",
    "ThreadNode",
    "ThreadPage",
    "TreeAssembler",
]
