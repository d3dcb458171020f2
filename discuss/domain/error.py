"""Domain layer errors.

Every error carries a stable ``code`` that the interface layer maps to an
HTTP status and returns to clients verbatim.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ContentValidationError(DomainError):
    """Comment payload failed validation (too long, too many media URLs)."""

    code = "INVALID_CONTENT"


class EmptyContentError(ContentValidationError):
    """Comment has neither a body nor any media."""

    code = "EMPTY_CONTENT"

    def __init__(self) -> None:
        super().__init__("Comment must have a body or at least one media URL")


class InvalidCursorError(DomainError):
    """Pagination cursor could not be decoded or does not apply here."""

    code = "INVALID_CURSOR"

    def __init__(self, reason: str = "malformed cursor") -> None:
        super().__init__(f"Invalid cursor: {reason}")


class TargetNotFoundError(DomainError):
    """Commented-on content does not exist."""

    code = "TARGET_NOT_FOUND"

    def __init__(self, target_type: str, target_id: int) -> None:
        self.target_type = target_type
        self.target_id = target_id
        super().__init__(f"{target_type} not found: {target_id}")


class ParentNotFoundError(DomainError):
    """Parent comment does not exist or can no longer be replied to."""

    code = "PARENT_NOT_FOUND"

    def __init__(self, parent_id: int, message: str | None = None) -> None:
        self.parent_id = parent_id
        super().__init__(message or f"Parent comment not found: {parent_id}")


class InvalidParentError(ParentNotFoundError):
    """Parent comment belongs to a different target."""

    def __init__(self, parent_id: int) -> None:
        super().__init__(
            parent_id, f"Parent comment {parent_id} does not belong to this target"
        )


class MaxDepthExceededError(ContentValidationError):
    """Reply would nest deeper than the configured maximum."""

    code = "MAX_DEPTH_EXCEEDED"

    def __init__(self, depth: int, max_depth: int) -> None:
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"Reply depth {depth} exceeds maximum of {max_depth}")


class CommentNotFoundError(DomainError):
    """Requested comment does not exist."""

    code = "NOT_FOUND"

    def __init__(self, comment_id: int) -> None:
        self.comment_id = comment_id
        super().__init__(f"Comment not found: {comment_id}")


class AlreadyDeletedError(DomainError):
    """Comment is already a tombstone."""

    code = "ALREADY_DELETED"

    def __init__(self, comment_id: int) -> None:
        self.comment_id = comment_id
        super().__init__(f"Comment already deleted: {comment_id}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an action the comment policy refuses."""

    code = "UNAUTHORIZED"

    def __init__(self, action: str, comment_id: int | None, user_id: int) -> None:
        target = f"comment {comment_id}" if comment_id is not None else "comments"
        super().__init__(f"User {user_id} is not authorized to {action} {target}")


class InvalidTransitionError(DomainError):
    """Moderation state machine refused a transition."""

    code = "INVALID_TRANSITION"

    def __init__(self, comment_id: int, current: str, requested: str) -> None:
        self.comment_id = comment_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Comment {comment_id} cannot move from {current} to {requested}"
        )
