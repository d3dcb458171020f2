"""Create comment use case."""

from pydantic import BaseModel, Field

from discuss.domain.service import CommentService
from discuss.domain.value import BodyKind, CommentId, TargetId, TargetType, UserId

from .item import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    target_type: TargetType
    target_id: int
    author_id: int  # Acting user from the gateway
    body: str | None = None
    body_kind: BodyKind = BodyKind.TEXT
    media_urls: list[str] = Field(default_factory=list)
    parent_id: int | None = None  # Parent comment ID for replies


class CreateCommentResponse(CommentItem):
    """Create comment response."""

    pass


class CreateCommentUseCase:
    """Use case for commenting on content or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        The comment service checks the payload, the target and the parent,
        writes the comment with its closure rows and updates counters in a
        single transaction.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            EmptyContentError: If there is nothing to post
            TargetNotFoundError: If the content does not exist
            ParentNotFoundError: If the parent cannot be replied to
            MaxDepthExceededError: If the reply would nest too deep
        """
        comment = await self.comment_service.create(
            target_type=request.target_type,
            target_id=TargetId(request.target_id),
            author_id=UserId(request.author_id),
            body=request.body,
            body_kind=request.body_kind,
            media_urls=request.media_urls,
            parent_id=CommentId(request.parent_id)
            if request.parent_id is not None
            else None,
        )
        return CreateCommentResponse(**CommentItem.from_comment(comment).model_dump())
