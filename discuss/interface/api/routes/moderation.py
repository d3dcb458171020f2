"""Moderation routes. All of them require a moderator."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from discuss.application.usecase.comment import CommentItem
from discuss.application.usecase.moderation import (
    GetStatisticsRequest,
    GetStatisticsResponse,
    GetStatisticsUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ModerateCommentRequest,
    ModerateCommentsRequest,
    ModerateCommentsResponse,
    ModerateCommentsUseCase,
    ModerateCommentUseCase,
    ResyncCommentRequest,
    ResyncCommentResponse,
    ResyncCommentUseCase,
    ResyncTargetRequest,
    ResyncTargetResponse,
    ResyncTargetUseCase,
)
from discuss.domain.value import CommentStatus, TargetType
from discuss.interface.api.actor import ActorId

router = APIRouter(prefix="/moderation", tags=["moderation"], route_class=DishkaRoute)


class DecisionAPIRequest(BaseModel):
    """API request for a single moderation decision."""

    decision: CommentStatus
    reason: str | None = Field(default=None, max_length=500)


class BatchDecisionAPIRequest(BaseModel):
    """API request for a batch moderation decision."""

    comment_ids: list[int] = Field(min_length=1, max_length=100)
    decision: CommentStatus
    reason: str | None = Field(default=None, max_length=500)


@router.get("/comments", response_model=ListCommentsResponse)
async def list_comments(
    reviewer_id: ActorId,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    status: CommentStatus | None = Query(default=None),
    target_type: TargetType | None = Query(default=None),
    target_id: int | None = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListCommentsResponse:
    """List comments of any status for review.

    Args:
        reviewer_id: Acting moderator
        list_comments_use_case: List comments use case from DI
        status: Only comments in this status
        target_type: Only comments on this content type
        target_id: Only comments on this content ID
        limit: Page size
        offset: Rows to skip

    Returns:
        Comments and the total matching the filters
    """
    return await list_comments_use_case.execute(
        ListCommentsRequest(
            reviewer_id=reviewer_id,
            status=status,
            target_type=target_type,
            target_id=target_id,
            limit=limit,
            offset=offset,
        )
    )


@router.get("/comments/statistics", response_model=GetStatisticsResponse)
async def get_statistics(
    reviewer_id: ActorId,
    get_statistics_use_case: FromDishka[GetStatisticsUseCase],
) -> GetStatisticsResponse:
    """Count comments per status."""
    return await get_statistics_use_case.execute(
        GetStatisticsRequest(reviewer_id=reviewer_id)
    )


@router.post("/comments/decisions", response_model=ModerateCommentsResponse)
async def moderate_comments(
    request: BatchDecisionAPIRequest,
    reviewer_id: ActorId,
    moderate_comments_use_case: FromDishka[ModerateCommentsUseCase],
) -> ModerateCommentsResponse:
    """Apply one decision to many comments.

    Each comment is decided on its own; failures are reported per ID.
    """
    return await moderate_comments_use_case.execute(
        ModerateCommentsRequest(
            comment_ids=request.comment_ids,
            decision=request.decision,
            reviewer_id=reviewer_id,
            reason=request.reason,
        )
    )


@router.post("/comments/{comment_id}/decision", response_model=CommentItem)
async def moderate_comment(
    comment_id: int,
    request: DecisionAPIRequest,
    reviewer_id: ActorId,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
) -> CommentItem:
    """Publish, block or delete a comment."""
    return await moderate_comment_use_case.execute(
        ModerateCommentRequest(
            comment_id=comment_id,
            decision=request.decision,
            reviewer_id=reviewer_id,
            reason=request.reason,
        )
    )


@router.post("/comments/{comment_id}/resync", response_model=ResyncCommentResponse)
async def resync_comment(
    comment_id: int,
    reviewer_id: ActorId,
    resync_comment_use_case: FromDishka[ResyncCommentUseCase],
) -> ResyncCommentResponse:
    """Recompute a comment's counters from source rows."""
    return await resync_comment_use_case.execute(
        ResyncCommentRequest(comment_id=comment_id, reviewer_id=reviewer_id)
    )


@router.post(
    "/targets/{target_type}/{target_id}/resync", response_model=ResyncTargetResponse
)
async def resync_target(
    target_type: TargetType,
    target_id: int,
    reviewer_id: ActorId,
    resync_target_use_case: FromDishka[ResyncTargetUseCase],
) -> ResyncTargetResponse:
    """Recompute counters of every comment on a target."""
    return await resync_target_use_case.execute(
        ResyncTargetRequest(
            target_type=target_type, target_id=target_id, reviewer_id=reviewer_id
        )
    )
