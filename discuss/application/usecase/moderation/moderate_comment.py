"""Moderate comment use case."""

from pydantic import BaseModel, Field

from discuss.application.usecase.comment.item import CommentItem
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, CommentStatus, UserId


class ModerateCommentRequest(BaseModel):
    """Moderate comment request."""

    comment_id: int
    decision: CommentStatus  # published, blocked or deleted
    reviewer_id: int  # Acting admin from the gateway
    reason: str | None = Field(default=None, max_length=500)


class ModerateCommentUseCase:
    """Use case for applying a review decision to one comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize moderate comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ModerateCommentRequest) -> CommentItem:
        """Execute moderation flow.

        Raises:
            NotAuthorizedError: If the reviewer is not a moderator
            CommentNotFoundError: If the comment does not exist
            InvalidTransitionError: If the comment cannot take the decision
        """
        comment = await self.comment_service.apply_decision(
            CommentId(request.comment_id),
            request.decision,
            reviewer_id=UserId(request.reviewer_id),
            reason=request.reason,
        )
        return CommentItem.from_comment(comment)
