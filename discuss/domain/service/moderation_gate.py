"""Moderation gate: the comment status state machine."""

from types import MappingProxyType

import logfire

from discuss.domain.error import InvalidTransitionError
from discuss.domain.model import Comment
from discuss.domain.value import CommentStatus, TargetType

from .base import Service
from .policy import ModerationPolicy

# pending   -> published | blocked | deleted
# published -> deleted | blocked
# deleted, blocked: terminal
TRANSITIONS = MappingProxyType(
    {
        CommentStatus.PENDING: frozenset(
            {CommentStatus.PUBLISHED, CommentStatus.BLOCKED, CommentStatus.DELETED}
        ),
        CommentStatus.PUBLISHED: frozenset(
            {CommentStatus.DELETED, CommentStatus.BLOCKED}
        ),
        CommentStatus.DELETED: frozenset(),
        CommentStatus.BLOCKED: frozenset(),
    }
)

# Statuses a review decision may set
DECISIONS = frozenset(
    {CommentStatus.PUBLISHED, CommentStatus.BLOCKED, CommentStatus.DELETED}
)


class ModerationGate(Service):
    """Domain service deciding comment visibility.

    Only published comments are ever listed. The gate never persists
    anything; callers store the status it returns.
    """

    def __init__(self, moderation_policy: ModerationPolicy) -> None:
        """Initialize moderation gate.

        Args:
            moderation_policy: Decides whether new comments need review
        """
        self.moderation_policy = moderation_policy

    def initial_status(self, target_type: TargetType) -> CommentStatus:
        """Status a new comment on ``target_type`` starts in."""
        if self.moderation_policy.requires_review(target_type):
            return CommentStatus.PENDING
        return CommentStatus.PUBLISHED

    @staticmethod
    def can_transition(current: CommentStatus, new: CommentStatus) -> bool:
        return new in TRANSITIONS[current]

    def transition(self, comment: Comment, new: CommentStatus) -> CommentStatus:
        """Validate a status change.

        Args:
            comment: Comment in its current state
            new: Requested status

        Returns:
            The requested status

        Raises:
            InvalidTransitionError: If the state machine forbids the move
        """
        if not self.can_transition(comment.status, new):
            logfire.warn(
                "Invalid comment status transition",
                comment_id=comment.id,
                current=comment.status.value,
                requested=new.value,
            )
            raise InvalidTransitionError(comment.id, comment.status.value, new.value)
        return new

    @staticmethod
    def is_listable(status: CommentStatus) -> bool:
        return status == CommentStatus.PUBLISHED
