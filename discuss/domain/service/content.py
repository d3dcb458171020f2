"""Content directory interface.

The comment engine does not own posts, articles or threads. Whatever does
is reached through this interface.
"""

from discuss.domain.value import ContentTarget, TargetId, TargetType


class ContentDirectory:
    """Generic content lookup interface for all content types."""

    async def lookup(
        self, target_type: TargetType, target_id: TargetId
    ) -> ContentTarget | None:
        """Resolve a target.

        Args:
            target_type: Content type
            target_id: Content ID

        Returns:
            Target with its owner, or None if it does not exist
        """
        raise NotImplementedError

    async def adjust_comment_count(
        self, target_type: TargetType, target_id: TargetId, delta: int
    ) -> None:
        """Tell the content owner its visible top-level comment count changed.

        Args:
            target_type: Content type
            target_id: Content ID
            delta: +1 or -1
        """
        raise NotImplementedError
