"""Delete comment use case."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, CommentStatus, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int
    actor_id: int  # Acting user from the gateway


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: int
    status: CommentStatus
    deleted_at: datetime | None


class DeleteCommentUseCase:
    """Use case for deleting a comment.

    The comment becomes a tombstone; its replies stay in place.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            CommentNotFoundError: If the comment does not exist
            AlreadyDeletedError: If it was already deleted
            NotAuthorizedError: If the actor is neither author nor admin
        """
        comment = await self.comment_service.delete(
            CommentId(request.comment_id), UserId(request.actor_id)
        )
        return DeleteCommentResponse(
            comment_id=comment.id,
            status=comment.status,
            deleted_at=comment.deleted_at,
        )
