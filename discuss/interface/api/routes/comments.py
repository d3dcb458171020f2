"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from discuss.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
    LikeAction,
    LikeCommentRequest,
    LikeCommentResponse,
    LikeCommentUseCase,
)
from discuss.domain.value import BodyKind, TargetType
from discuss.interface.api.actor import ActorId, ViewerId

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    target_type: TargetType
    target_id: int
    body: str | None = None
    body_kind: BodyKind = BodyKind.TEXT
    media_urls: list[str] = Field(default_factory=list)
    parent_id: int | None = None


class LikeCommentAPIRequest(BaseModel):
    """API request for liking a comment."""

    action: LikeAction = LikeAction.TOGGLE


@router.post(
    "", response_model=CreateCommentResponse, status_code=status.HTTP_201_CREATED
)
async def create_comment(
    request: CreateCommentAPIRequest,
    author_id: ActorId,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CreateCommentResponse:
    """Create a top-level comment or a reply.

    Args:
        request: Comment data
        author_id: Acting user from the gateway
        create_comment_use_case: Create comment use case from DI

    Returns:
        Created comment
    """
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            target_type=request.target_type,
            target_id=request.target_id,
            author_id=author_id,
            body=request.body,
            body_kind=request.body_kind,
            media_urls=request.media_urls,
            parent_id=request.parent_id,
        )
    )


@router.get("/{comment_id}", response_model=CommentItem)
async def get_comment(
    comment_id: int,
    viewer_id: ViewerId,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> CommentItem:
    """Get a single comment. Tombstones are returned without their content."""
    return await get_comment_use_case.execute(
        GetCommentRequest(comment_id=comment_id, viewer_id=viewer_id)
    )


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    actor_id: ActorId,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> None:
    """Soft delete a comment.

    Only the author or a moderator can delete. Replies stay visible.
    """
    await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, actor_id=actor_id)
    )


@router.get("/{comment_id}/replies", response_model=GetRepliesResponse)
async def get_replies(
    comment_id: int,
    viewer_id: ViewerId,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    cursor: str | None = Query(default=None),
    limit: int | None = Query(default=None),
) -> GetRepliesResponse:
    """List direct replies of a comment, oldest first.

    Args:
        comment_id: Parent comment ID
        viewer_id: Optional viewer for like flags
        get_replies_use_case: Get replies use case from DI
        cursor: ``next_cursor`` or ``replies_cursor`` from an earlier page
        limit: Page size

    Returns:
        Page of replies
    """
    return await get_replies_use_case.execute(
        GetRepliesRequest(
            comment_id=comment_id,
            cursor=cursor,
            limit=limit,
            viewer_id=viewer_id,
        )
    )


@router.post("/{comment_id}/like", response_model=LikeCommentResponse)
async def like_comment(
    comment_id: int,
    user_id: ActorId,
    like_comment_use_case: FromDishka[LikeCommentUseCase],
    request: LikeCommentAPIRequest | None = None,
) -> LikeCommentResponse:
    """Like, unlike or toggle a like on a comment."""
    action = request.action if request else LikeAction.TOGGLE
    return await like_comment_use_case.execute(
        LikeCommentRequest(comment_id=comment_id, user_id=user_id, action=action)
    )
