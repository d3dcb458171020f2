"""Count comments use case."""

from pydantic import BaseModel

from discuss.domain.service import CommentService
from discuss.domain.value import TargetId, TargetType


class CountCommentsRequest(BaseModel):
    """Count comments request."""

    target_type: TargetType
    target_id: int


class CountCommentsResponse(BaseModel):
    """Count comments response."""

    target_type: TargetType
    target_id: int
    count: int


class CountCommentsUseCase:
    """Use case for counting the visible comments of a target."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: CountCommentsRequest) -> CountCommentsResponse:
        count = await self.comment_service.count_for_target(
            request.target_type, TargetId(request.target_id)
        )
        return CountCommentsResponse(
            target_type=request.target_type,
            target_id=request.target_id,
            count=count,
        )
