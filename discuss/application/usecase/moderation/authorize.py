"""Reviewer check shared by the moderation use cases."""

import logfire

from discuss.domain.error import NotAuthorizedError
from discuss.domain.service import CommentPolicy
from discuss.domain.value import UserId


def require_reviewer(comment_policy: CommentPolicy, reviewer_id: int, action: str) -> UserId:
    """Return the reviewer ID if the policy lets them moderate.

    Raises:
        NotAuthorizedError: If the user is not a moderator
    """
    user_id = UserId(reviewer_id)
    if not comment_policy.can_moderate(user_id):
        logfire.warn("Unauthorized moderation request", user_id=user_id, action=action)
        raise NotAuthorizedError(action, None, user_id)
    return user_id
