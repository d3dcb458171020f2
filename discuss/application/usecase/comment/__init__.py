"""Comment use cases."""

from .count_comments import (
    CountCommentsRequest,
    CountCommentsResponse,
    CountCommentsUseCase,
)
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment import GetCommentRequest, GetCommentUseCase
from .get_replies import GetRepliesRequest, GetRepliesResponse, GetRepliesUseCase
from .get_thread import GetThreadRequest, GetThreadResponse, GetThreadUseCase, ThreadItem
from .item import CommentItem
from .like_comment import (
    LikeAction,
    LikeCommentRequest,
    LikeCommentResponse,
    LikeCommentUseCase,
)

__all__ = [
    "CommentItem",
    "CountCommentsRequest",
    "CountCommentsResponse",
    "CountCommentsUseCase",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentRequest",
    "GetCommentUseCase",
    "GetRepliesRequest",
    "GetRepliesResponse",
    "GetRepliesUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "LikeAction",
    "LikeCommentRequest",
    "LikeCommentResponse",
    "LikeCommentUseCase",
    "ThreadItem",
]
