"""Get comment use case."""

from pydantic import BaseModel

from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId

from .item import CommentItem


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: int
    viewer_id: int | None = None


class GetCommentUseCase:
    """Use case for reading a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> CommentItem:
        """Fetch a comment, tombstones included.

        Raises:
            CommentNotFoundError: If the comment does not exist
        """
        comment_id = CommentId(request.comment_id)
        comment = await self.comment_service.get(comment_id)

        liked = None
        if request.viewer_id is not None:
            liked_ids = await self.comment_service.liked_ids(
                UserId(request.viewer_id), [comment_id]
            )
            liked = comment_id in liked_ids

        return CommentItem.from_comment(comment, liked=liked)
