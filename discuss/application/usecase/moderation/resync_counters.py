"""Counter resync use cases."""

from pydantic import BaseModel

from discuss.domain.error import CommentNotFoundError
from discuss.domain.service import CommentPolicy, CounterSync
from discuss.domain.value import CommentId, TargetId, TargetType

from .authorize import require_reviewer


class ResyncCommentRequest(BaseModel):
    """Resync one comment's counters."""

    comment_id: int
    reviewer_id: int


class ResyncCommentResponse(BaseModel):
    """Counters after a resync."""

    comment_id: int
    like_count: int
    reply_count: int
    hot_score: int
    changed: bool


class ResyncTargetRequest(BaseModel):
    """Resync every comment of a target."""

    target_type: TargetType
    target_id: int
    reviewer_id: int


class ResyncTargetResponse(BaseModel):
    """Outcome of a target sweep."""

    target_type: TargetType
    target_id: int
    drifted: int


class ResyncCommentUseCase:
    """Use case for rebuilding one comment's counters from source rows."""

    def __init__(self, counter_sync: CounterSync, comment_policy: CommentPolicy) -> None:
        """Initialize resync use case.

        Args:
            counter_sync: Counter maintenance domain service
            comment_policy: Policy deciding who may moderate
        """
        self.counter_sync = counter_sync
        self.comment_policy = comment_policy

    async def execute(self, request: ResyncCommentRequest) -> ResyncCommentResponse:
        """Execute resync.

        Raises:
            NotAuthorizedError: If the reviewer is not a moderator
            CommentNotFoundError: If the comment does not exist
        """
        require_reviewer(self.comment_policy, request.reviewer_id, "resync")
        snapshot = await self.counter_sync.resync(CommentId(request.comment_id))
        if snapshot is None:
            raise CommentNotFoundError(request.comment_id)
        return ResyncCommentResponse(**snapshot.model_dump())


class ResyncTargetUseCase:
    """Use case for the maintenance sweep over a whole target."""

    def __init__(self, counter_sync: CounterSync, comment_policy: CommentPolicy) -> None:
        self.counter_sync = counter_sync
        self.comment_policy = comment_policy

    async def execute(self, request: ResyncTargetRequest) -> ResyncTargetResponse:
        require_reviewer(self.comment_policy, request.reviewer_id, "resync")
        drifted = await self.counter_sync.resync_target(
            request.target_type, TargetId(request.target_id)
        )
        return ResyncTargetResponse(
            target_type=request.target_type,
            target_id=request.target_id,
            drifted=drifted,
        )
