"""Get replies use case."""

from pydantic import BaseModel

from discuss.domain.service import TreeAssembler
from discuss.domain.value import CommentId, UserId

from .item import CommentItem


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    comment_id: int
    cursor: str | None = None
    limit: int | None = None
    viewer_id: int | None = None


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    parent_id: int
    items: list[CommentItem]
    next_cursor: str | None


class GetRepliesUseCase:
    """Use case for paging through the direct replies of a comment."""

    def __init__(self, tree_assembler: TreeAssembler) -> None:
        self.tree_assembler = tree_assembler

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Raises:
            CommentNotFoundError: If the parent does not exist
            InvalidCursorError: If the cursor is malformed or foreign
        """
        viewer_id = (
            UserId(request.viewer_id) if request.viewer_id is not None else None
        )
        page = await self.tree_assembler.fetch_replies(
            parent_id=CommentId(request.comment_id),
            cursor=request.cursor,
            limit=request.limit,
            viewer_id=viewer_id,
        )
        return GetRepliesResponse(
            parent_id=page.parent_id,
            items=[
                CommentItem.from_comment(
                    reply.comment, reply.liked if viewer_id is not None else None
                )
                for reply in page.items
            ],
            next_cursor=page.next_cursor,
        )
