"""Domain value types for the comment engine."""

from enum import Enum

from discuss.domain.value.common import ValueObject
from discuss.domain.value.identifiers import TargetId, UserId


class TargetType(str, Enum):
    """Kind of content a comment can be attached to.

    Closed set: adding a content type means adding a member here and teaching
    the content service about it.
    """

    POST = "post"
    ARTICLE = "article"
    THREAD = "thread"


class BodyKind(str, Enum):
    """Kind of payload a comment carries."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class CommentStatus(str, Enum):
    """Moderation state of a comment."""

    PENDING = "pending"
    PUBLISHED = "published"
    DELETED = "deleted"
    BLOCKED = "blocked"


class CounterField(str, Enum):
    """Denormalized counters maintained on a comment."""

    LIKE_COUNT = "like_count"
    REPLY_COUNT = "reply_count"


class ThreadSort(str, Enum):
    """Order of top-level comments in a thread view."""

    LATEST = "latest"  # created_at desc, cursor-paginated
    HOT = "hot"  # hot_score desc, offset-paginated


class ContentTarget(ValueObject):
    """Commented-on content as reported by the content service."""

    target_type: TargetType
    target_id: TargetId
    owner_id: UserId | None = None
