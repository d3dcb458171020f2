"""Like comment use case."""

from enum import Enum

from pydantic import BaseModel

from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId


class LikeAction(str, Enum):
    """What a like request asks for."""

    TOGGLE = "toggle"
    LIKE = "like"
    UNLIKE = "unlike"


class LikeCommentRequest(BaseModel):
    """Like comment request."""

    comment_id: int
    user_id: int  # Acting user from the gateway
    action: LikeAction = LikeAction.TOGGLE


class LikeCommentResponse(BaseModel):
    """Like comment response."""

    comment_id: int
    liked: bool
    like_count: int


class LikeCommentUseCase:
    """Use case for liking, unliking or toggling a like on a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize like comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: LikeCommentRequest) -> LikeCommentResponse:
        """Execute like flow.

        Repeating a like or an unlike returns the current state.

        Raises:
            CommentNotFoundError: If the comment does not exist
            NotAuthorizedError: If the user likes their own comment
        """
        comment_id = CommentId(request.comment_id)
        user_id = UserId(request.user_id)

        if request.action == LikeAction.LIKE:
            state = await self.comment_service.like(comment_id, user_id)
        elif request.action == LikeAction.UNLIKE:
            state = await self.comment_service.unlike(comment_id, user_id)
        else:
            state = await self.comment_service.toggle_like(comment_id, user_id)

        return LikeCommentResponse(
            comment_id=comment_id,
            liked=state.liked,
            like_count=state.like_count,
        )
