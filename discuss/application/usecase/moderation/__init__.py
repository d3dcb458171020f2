"""Moderation use cases."""

from .get_statistics import (
    GetStatisticsRequest,
    GetStatisticsResponse,
    GetStatisticsUseCase,
)
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .moderate_comment import ModerateCommentRequest, ModerateCommentUseCase
from .moderate_comments import (
    ModerateCommentsRequest,
    ModerateCommentsResponse,
    ModerateCommentsUseCase,
)
from .resync_counters import (
    ResyncCommentRequest,
    ResyncCommentResponse,
    ResyncCommentUseCase,
    ResyncTargetRequest,
    ResyncTargetResponse,
    ResyncTargetUseCase,
)

__all__ = [
    "GetStatisticsRequest",
    "GetStatisticsResponse",
    "GetStatisticsUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "ModerateCommentRequest",
    "ModerateCommentUseCase",
    "ModerateCommentsRequest",
    "ModerateCommentsResponse",
    "ModerateCommentsUseCase",
    "ResyncCommentRequest",
    "ResyncCommentResponse",
    "ResyncCommentUseCase",
    "ResyncTargetRequest",
    "ResyncTargetResponse",
    "ResyncTargetUseCase",
]
