"""Target routes: threads and counts per commented-on content."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from discuss.application.usecase.comment import (
    CountCommentsRequest,
    CountCommentsResponse,
    CountCommentsUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
)
from discuss.domain.value import TargetType, ThreadSort
from discuss.interface.api.actor import ViewerId

router = APIRouter(prefix="/targets", tags=["targets"], route_class=DishkaRoute)


@router.get(
    "/{target_type}/{target_id}/comments", response_model=GetThreadResponse
)
async def get_thread(
    target_type: TargetType,
    target_id: int,
    viewer_id: ViewerId,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    cursor: str | None = Query(default=None),
    limit: int | None = Query(default=None),
    sort: ThreadSort = Query(default=ThreadSort.LATEST),
) -> GetThreadResponse:
    """Get a page of a target's comment thread.

    Top-level comments come newest first (or hottest first with
    ``sort=hot``), each with its first replies.

    Args:
        target_type: Commented-on content type
        target_id: Commented-on content ID
        viewer_id: Optional viewer for like flags
        get_thread_use_case: Get thread use case from DI
        cursor: ``next_cursor`` of the previous page
        limit: Top-level comments per page
        sort: ``latest`` or ``hot``; a cursor only continues its own order

    Returns:
        Thread page
    """
    return await get_thread_use_case.execute(
        GetThreadRequest(
            target_type=target_type,
            target_id=target_id,
            cursor=cursor,
            limit=limit,
            sort=sort,
            viewer_id=viewer_id,
        )
    )


@router.get(
    "/{target_type}/{target_id}/comments/count",
    response_model=CountCommentsResponse,
)
async def count_comments(
    target_type: TargetType,
    target_id: int,
    count_comments_use_case: FromDishka[CountCommentsUseCase],
) -> CountCommentsResponse:
    """Count a target's visible comments."""
    return await count_comments_use_case.execute(
        CountCommentsRequest(target_type=target_type, target_id=target_id)
    )
