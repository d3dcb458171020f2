"""Get thread use case."""

from pydantic import BaseModel

from discuss.domain.service import TreeAssembler
from discuss.domain.value import TargetId, TargetType, ThreadSort, UserId

from .item import CommentItem


class ThreadItem(BaseModel):
    """Top-level comment with its first replies."""

    comment: CommentItem
    replies: list[CommentItem]
    replies_cursor: str | None  # Continue with GET /comments/{id}/replies


class GetThreadRequest(BaseModel):
    """Get thread request."""

    target_type: TargetType
    target_id: int
    cursor: str | None = None
    limit: int | None = None
    sort: ThreadSort = ThreadSort.LATEST
    viewer_id: int | None = None  # Adds like flags when set


class GetThreadResponse(BaseModel):
    """Get thread response."""

    items: list[ThreadItem]
    next_cursor: str | None


class GetThreadUseCase:
    """Use case for reading a page of a comment thread."""

    def __init__(self, tree_assembler: TreeAssembler) -> None:
        """Initialize get thread use case.

        Args:
            tree_assembler: Thread view domain service
        """
        self.tree_assembler = tree_assembler

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Raises:
            InvalidCursorError: If the cursor is malformed or foreign
        """
        viewer_id = (
            UserId(request.viewer_id) if request.viewer_id is not None else None
        )
        page = await self.tree_assembler.fetch_thread(
            target_type=request.target_type,
            target_id=TargetId(request.target_id),
            cursor=request.cursor,
            limit=request.limit,
            viewer_id=viewer_id,
            sort=request.sort,
        )

        def flag(liked: bool) -> bool | None:
            return liked if viewer_id is not None else None

        items = [
            ThreadItem(
                comment=CommentItem.from_comment(node.comment, flag(node.liked)),
                replies=[
                    CommentItem.from_comment(reply.comment, flag(reply.liked))
                    for reply in node.replies
                ],
                replies_cursor=node.replies_cursor,
            )
            for node in page.items
        ]
        return GetThreadResponse(items=items, next_cursor=page.next_cursor)
