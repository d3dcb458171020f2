"""Authorization and moderation policies.

Both are collaborators: the comment engine asks them questions and acts on
the answer, but who is an admin or which content needs review is decided
elsewhere. The default implementations read from settings.
"""

from discuss.config import CommentSettings, ModerationSettings
from discuss.domain.model import Comment
from discuss.domain.value import TargetType, UserId


class CommentPolicy:
    """Authorization questions about comments."""

    def can_delete(self, actor_id: UserId, comment: Comment) -> bool:
        raise NotImplementedError

    def can_like(self, user_id: UserId, comment: Comment) -> bool:
        raise NotImplementedError

    def can_moderate(self, reviewer_id: UserId | None) -> bool:
        raise NotImplementedError


class ModerationPolicy:
    """Decides whether new comments wait for review."""

    def requires_review(self, target_type: TargetType) -> bool:
        raise NotImplementedError


class DefaultCommentPolicy(CommentPolicy):
    """Authors manage their own comments, admins manage everything."""

    def __init__(self, moderation_settings: ModerationSettings) -> None:
        """Initialize comment policy.

        Args:
            moderation_settings: Moderation settings with the admin list
        """
        self.admin_user_ids = set(moderation_settings.admin_user_ids)

    def is_admin(self, user_id: UserId | None) -> bool:
        return user_id is not None and user_id in self.admin_user_ids

    def can_delete(self, actor_id: UserId, comment: Comment) -> bool:
        return actor_id == comment.author_id or self.is_admin(actor_id)

    def can_like(self, user_id: UserId, comment: Comment) -> bool:
        # Authors cannot like their own comments
        return user_id != comment.author_id

    def can_moderate(self, reviewer_id: UserId | None) -> bool:
        # Automated reviewers act without a user id
        return reviewer_id is None or self.is_admin(reviewer_id)


class SettingsModerationPolicy(ModerationPolicy):
    """Pre-moderation switched on globally or per target type."""

    def __init__(self, comment_settings: CommentSettings) -> None:
        self.auto_publish = comment_settings.auto_publish
        self.review_target_types = set(comment_settings.review_target_types)

    def requires_review(self, target_type: TargetType) -> bool:
        if not self.auto_publish:
            return True
        return target_type.value in self.review_target_types
