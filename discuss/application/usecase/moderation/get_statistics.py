"""Comment statistics use case."""

from pydantic import BaseModel

from discuss.domain.service import CommentPolicy, CommentService

from .authorize import require_reviewer


class GetStatisticsRequest(BaseModel):
    """Statistics request."""

    reviewer_id: int


class GetStatisticsResponse(BaseModel):
    """Comment counts per status."""

    pending: int
    published: int
    deleted: int
    blocked: int
    total: int


class GetStatisticsUseCase:
    """Use case for the moderation dashboard counters."""

    def __init__(
        self, comment_service: CommentService, comment_policy: CommentPolicy
    ) -> None:
        self.comment_service = comment_service
        self.comment_policy = comment_policy

    async def execute(self, request: GetStatisticsRequest) -> GetStatisticsResponse:
        require_reviewer(self.comment_policy, request.reviewer_id, "view statistics of")
        stats = await self.comment_service.statistics()
        return GetStatisticsResponse(**stats.model_dump())
