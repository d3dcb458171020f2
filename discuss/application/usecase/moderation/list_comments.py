"""List comments use case (moderation queue)."""

from pydantic import BaseModel, Field

from discuss.application.usecase.comment.item import CommentItem
from discuss.domain.service import CommentPolicy, CommentService
from discuss.domain.value import CommentStatus, TargetId, TargetType

from .authorize import require_reviewer


class ListCommentsRequest(BaseModel):
    """List comments request."""

    reviewer_id: int
    status: CommentStatus | None = None
    target_type: TargetType | None = None
    target_id: int | None = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListCommentsResponse(BaseModel):
    """List comments response."""

    items: list[CommentItem]
    total: int
    limit: int
    offset: int


class ListCommentsUseCase:
    """Use case for browsing comments of any status, newest first."""

    def __init__(
        self, comment_service: CommentService, comment_policy: CommentPolicy
    ) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
            comment_policy: Policy deciding who may moderate
        """
        self.comment_service = comment_service
        self.comment_policy = comment_policy

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Raises:
            NotAuthorizedError: If the reviewer is not a moderator
        """
        require_reviewer(self.comment_policy, request.reviewer_id, "list")

        comments, total = await self.comment_service.list_comments(
            status=request.status,
            target_type=request.target_type,
            target_id=TargetId(request.target_id)
            if request.target_id is not None
            else None,
            limit=request.limit,
            offset=request.offset,
        )
        return ListCommentsResponse(
            # Moderators see the stored body, tombstones included
            items=[
                CommentItem.from_comment(c).model_copy(
                    update={"body": c.body, "media_urls": c.media_urls}
                )
                for c in comments
            ],
            total=total,
            limit=request.limit,
            offset=request.offset,
        )
