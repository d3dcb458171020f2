"""Like ledger entry.

One row per (user, comment). The pair is unique in storage; that constraint,
not application code, serializes concurrent likes from the same user.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.comment import utcnow
from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, LikeId, UserId


class CommentLike(DomainModel):
    """Like entity."""

    id: Optional[LikeId] = None  # Assigned by storage
    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=utcnow)
