"""Batch moderation use case."""

from pydantic import BaseModel, Field

from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, CommentStatus, UserId


class ModerateCommentsRequest(BaseModel):
    """Batch moderation request."""

    comment_ids: list[int] = Field(min_length=1, max_length=100)
    decision: CommentStatus
    reviewer_id: int
    reason: str | None = Field(default=None, max_length=500)


class ModerationFailure(BaseModel):
    """One comment the decision could not be applied to."""

    comment_id: int
    code: str


class ModerateCommentsResponse(BaseModel):
    """Batch moderation response."""

    success_count: int
    failed_count: int
    failures: list[ModerationFailure]


class ModerateCommentsUseCase:
    """Use case for applying one review decision to many comments."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ModerateCommentsRequest) -> ModerateCommentsResponse:
        """Execute batch moderation.

        Each comment is decided on its own; failures are reported per comment
        instead of aborting the batch.

        Raises:
            NotAuthorizedError: If the reviewer is not a moderator
        """
        result = await self.comment_service.apply_decisions(
            [CommentId(comment_id) for comment_id in request.comment_ids],
            request.decision,
            reviewer_id=UserId(request.reviewer_id),
            reason=request.reason,
        )
        return ModerateCommentsResponse(
            success_count=result.success_count,
            failed_count=result.failed_count,
            failures=[
                ModerationFailure(comment_id=comment_id, code=code)
                for comment_id, code in result.failures.items()
            ],
        )
