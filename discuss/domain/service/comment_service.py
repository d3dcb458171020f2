"""Comment domain service."""

from typing import Optional, Sequence

import logfire
from sqlalchemy.exc import IntegrityError

from discuss.config import CommentSettings
from discuss.domain.error import (
    AlreadyDeletedError,
    CommentNotFoundError,
    ContentValidationError,
    DomainError,
    EmptyContentError,
    InvalidTransitionError,
    MaxDepthExceededError,
    NotAuthorizedError,
    TargetNotFoundError,
)
from discuss.domain.model import (
    AnyCommentEvent,
    Comment,
    CommentCreated,
    CommentDeleted,
    CommentDraft,
    CommentLike,
    CommentLiked,
    CommentModerated,
    CommentUnliked,
    utcnow,
)
from discuss.domain.repository import CommentRepository, LikeRepository, UnitOfWork
from discuss.domain.value import (
    BodyKind,
    CommentId,
    CommentStatus,
    CounterField,
    TargetId,
    TargetType,
    UserId,
)
from discuss.domain.value.common import ValueObject

from .base import Service
from .content import ContentDirectory
from .counter_sync import CounterSync
from .events import CommentEventPublisher
from .moderation_gate import DECISIONS, ModerationGate
from .policy import CommentPolicy
from .relation_index import RelationIndex


class LikeState(ValueObject):
    """A user's like on a comment after a like/unlike call."""

    liked: bool
    like_count: int


class ModerationBatchResult(ValueObject):
    """Outcome of a batch of review decisions."""

    success_count: int
    failed_count: int
    failures: dict[CommentId, str]  # comment id -> error code


class CommentStatistics(ValueObject):
    """Comment counts per status."""

    pending: int
    published: int
    deleted: int
    blocked: int
    total: int


class CommentService(Service):
    """Domain service for comment operations.

    Every mutation runs inside one unit-of-work transaction so the comment
    row, its closure rows and the counters it touches commit together.
    Events are published only after the transaction commits.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        unit_of_work: UnitOfWork,
        relation_index: RelationIndex,
        counter_sync: CounterSync,
        moderation_gate: ModerationGate,
        content_directory: ContentDirectory,
        comment_policy: CommentPolicy,
        event_publisher: CommentEventPublisher,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            like_repository: Like ledger repository
            unit_of_work: Transaction boundary
            relation_index: Closure table service
            counter_sync: Counter maintenance service
            moderation_gate: Status state machine
            content_directory: Commented-on content lookup
            comment_policy: Authorization policy
            event_publisher: Outbound event sink
            comment_settings: Comment limits
        """
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.unit_of_work = unit_of_work
        self.relation_index = relation_index
        self.counter_sync = counter_sync
        self.moderation_gate = moderation_gate
        self.content_directory = content_directory
        self.comment_policy = comment_policy
        self.event_publisher = event_publisher
        self.settings = comment_settings

    def validate_content(
        self, body: Optional[str], media_urls: Sequence[str]
    ) -> Optional[str]:
        """Check a comment payload and return the normalized body.

        Raises:
            EmptyContentError: Neither body text nor media
            ContentValidationError: Body too long or too many media URLs
        """
        text = body.strip() if body else None
        if not text and not media_urls:
            raise EmptyContentError()
        if text and len(text) > self.settings.max_body_length:
            raise ContentValidationError(
                f"Comment body exceeds {self.settings.max_body_length} characters"
            )
        if len(media_urls) > self.settings.max_media_urls:
            raise ContentValidationError(
                f"Comment has more than {self.settings.max_media_urls} media URLs"
            )
        return text or None

    async def create(
        self,
        target_type: TargetType,
        target_id: TargetId,
        author_id: UserId,
        body: Optional[str] = None,
        body_kind: BodyKind = BodyKind.TEXT,
        media_urls: Sequence[str] = (),
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a top-level comment or a reply.

        Args:
            target_type: Commented-on content type
            target_id: Commented-on content ID
            author_id: Comment author
            body: Comment text
            body_kind: Payload kind
            media_urls: Attached media
            parent_id: Comment being replied to, None for top-level

        Returns:
            Created comment

        Raises:
            EmptyContentError: If there is nothing to post
            ContentValidationError: If the payload exceeds limits
            TargetNotFoundError: If the content does not exist
            ParentNotFoundError: If the parent is missing, gone or foreign
            MaxDepthExceededError: If the reply would nest too deep
        """
        with logfire.span(
            "comment_service.create",
            target_type=target_type.value,
            target_id=target_id,
            author_id=author_id,
            parent_id=parent_id,
        ):
            text = self.validate_content(body, media_urls)

            target = await self.content_directory.lookup(target_type, target_id)
            if target is None:
                logfire.warn(
                    "Comment on non-existent target",
                    target_type=target_type.value,
                    target_id=target_id,
                )
                raise TargetNotFoundError(target_type.value, target_id)

            async with self.unit_of_work.transaction():
                parent = None
                depth = 0
                if parent_id is not None:
                    parent, depth = await self.relation_index.validate_parent(
                        parent_id, target_type, target_id
                    )
                    if depth > self.settings.max_depth:
                        raise MaxDepthExceededError(depth, self.settings.max_depth)

                status = self.moderation_gate.initial_status(target_type)
                now = utcnow()
                comment = await self.comment_repository.create(
                    CommentDraft(
                        target_id=target_id,
                        target_type=target_type,
                        author_id=author_id,
                        parent_id=parent_id,
                        depth=depth,
                        body=text,
                        body_kind=body_kind,
                        media_urls=list(media_urls),
                        status=status,
                        published_at=now if status == CommentStatus.PUBLISHED else None,
                        created_at=now,
                    )
                )
                await self.relation_index.insert(comment.id, parent_id)

                if self.moderation_gate.is_listable(comment.status):
                    await self._enter_published(comment)

            recipient_id = parent.author_id if parent else target.owner_id
            if recipient_id == author_id:
                recipient_id = None

            logfire.info(
                "Comment created",
                comment_id=comment.id,
                status=comment.status.value,
                depth=comment.depth,
            )
            await self._publish(
                CommentCreated(
                    comment_id=comment.id,
                    target_type=comment.target_type,
                    target_id=comment.target_id,
                    parent_id=comment.parent_id,
                    author_id=author_id,
                    status=comment.status,
                    recipient_id=recipient_id,
                )
            )
            return comment

    async def get(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID, tombstones included.

        Raises:
            CommentNotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        return comment

    async def delete(self, comment_id: CommentId, actor_id: UserId) -> Comment:
        """Turn a comment into a tombstone.

        Replies are left untouched and stay reachable.

        Args:
            comment_id: Comment ID
            actor_id: User asking for the delete

        Returns:
            The tombstoned comment

        Raises:
            CommentNotFoundError: If the comment does not exist
            AlreadyDeletedError: If it is already deleted
            NotAuthorizedError: If the actor may not delete it
            InvalidTransitionError: If it was blocked by moderation
        """
        with logfire.span(
            "comment_service.delete", comment_id=comment_id, actor_id=actor_id
        ):
            async with self.unit_of_work.transaction():
                comment = await self.get(comment_id)
                if comment.is_deleted:
                    raise AlreadyDeletedError(comment_id)
                if not self.comment_policy.can_delete(actor_id, comment):
                    logfire.warn(
                        "Unauthorized comment delete",
                        comment_id=comment_id,
                        actor_id=actor_id,
                    )
                    raise NotAuthorizedError("delete", comment_id, actor_id)

                new_status = self.moderation_gate.transition(
                    comment, CommentStatus.DELETED
                )
                deleted = await self.comment_repository.update_status(
                    comment_id,
                    expected=comment.status,
                    status=new_status,
                    deleted_at=utcnow(),
                )
                if deleted is None:
                    # Lost a race with another delete
                    raise AlreadyDeletedError(comment_id)

                if self.moderation_gate.is_listable(comment.status):
                    await self._leave_published(comment)

            logfire.info("Comment deleted", comment_id=comment_id, actor_id=actor_id)
            await self._publish(
                CommentDeleted(
                    comment_id=comment_id,
                    target_type=comment.target_type,
                    target_id=comment.target_id,
                    actor_id=actor_id,
                    previous_status=comment.status,
                )
            )
            return deleted

    async def like(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Like a comment.

        Liking twice is not an error; the counter moves once.

        Raises:
            CommentNotFoundError: If the comment does not exist or is not published
            NotAuthorizedError: If the user may not like it
        """
        with logfire.span("comment_service.like", comment_id=comment_id, user_id=user_id):
            async with self.unit_of_work.transaction():
                comment = await self.get(comment_id)
                if not self.moderation_gate.is_listable(comment.status):
                    raise CommentNotFoundError(comment_id)
                if not self.comment_policy.can_like(user_id, comment):
                    raise NotAuthorizedError("like", comment_id, user_id)

                try:
                    await self.like_repository.save(
                        CommentLike(comment_id=comment_id, user_id=user_id)
                    )
                except IntegrityError:
                    logfire.info(
                        "Comment already liked", comment_id=comment_id, user_id=user_id
                    )
                    return LikeState(liked=True, like_count=comment.like_count)

                updated = await self.counter_sync.increment(
                    comment_id, CounterField.LIKE_COUNT
                )
                like_count = updated.like_count if updated else comment.like_count + 1

            await self._publish(
                CommentLiked(
                    comment_id=comment_id,
                    target_type=comment.target_type,
                    target_id=comment.target_id,
                    user_id=user_id,
                    author_id=comment.author_id,
                    like_count=like_count,
                )
            )
            return LikeState(liked=True, like_count=like_count)

    async def unlike(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Withdraw a like.

        Unliking a comment the user does not like is not an error.

        Raises:
            CommentNotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.unlike", comment_id=comment_id, user_id=user_id
        ):
            async with self.unit_of_work.transaction():
                comment = await self.get(comment_id)
                removed = await self.like_repository.delete(comment_id, user_id)
                if not removed:
                    logfire.info(
                        "No like to remove", comment_id=comment_id, user_id=user_id
                    )
                    return LikeState(liked=False, like_count=comment.like_count)

                updated = await self.counter_sync.decrement(
                    comment_id, CounterField.LIKE_COUNT
                )
                like_count = (
                    updated.like_count if updated else max(comment.like_count - 1, 0)
                )

            await self._publish(
                CommentUnliked(
                    comment_id=comment_id,
                    target_type=comment.target_type,
                    target_id=comment.target_id,
                    user_id=user_id,
                    like_count=like_count,
                )
            )
            return LikeState(liked=False, like_count=like_count)

    async def toggle_like(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Like the comment if the user does not like it yet, otherwise unlike."""
        existing = await self.like_repository.find(comment_id, user_id)
        if existing is None:
            return await self.like(comment_id, user_id)
        return await self.unlike(comment_id, user_id)

    async def liked_ids(
        self, user_id: Optional[UserId], comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Which of ``comment_ids`` the user likes (empty for anonymous viewers)."""
        if user_id is None or not comment_ids:
            return set()
        return await self.like_repository.find_liked_ids(user_id, comment_ids)

    async def count_for_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> int:
        """Number of visible comments (any depth) on a target."""
        return await self.comment_repository.count_visible_by_target(
            target_type, target_id
        )

    async def apply_decision(
        self,
        comment_id: CommentId,
        decision: CommentStatus,
        reviewer_id: Optional[UserId] = None,
        reason: Optional[str] = None,
    ) -> Comment:
        """Apply a review decision.

        Counter effects follow visibility: a comment entering ``published``
        counts towards its parent (or target), one leaving it stops counting.
        Closure rows are never touched.
        Blocking hides the whole subtree; the event reports how many
        replies went with it.

        Args:
            comment_id: Comment ID
            decision: New status (published, blocked or deleted)
            reviewer_id: Reviewing admin, None for automated review
            reason: Optional reason recorded on the event

        Returns:
            Updated comment

        Raises:
            NotAuthorizedError: If the reviewer may not moderate
            CommentNotFoundError: If the comment does not exist
            InvalidTransitionError: If the state machine refuses the decision
        """
        with logfire.span(
            "comment_service.apply_decision",
            comment_id=comment_id,
            decision=decision.value,
            reviewer_id=reviewer_id,
        ):
            if not self.comment_policy.can_moderate(reviewer_id):
                logfire.warn(
                    "Unauthorized moderation attempt",
                    comment_id=comment_id,
                    reviewer_id=reviewer_id,
                )
                raise NotAuthorizedError("moderate", comment_id, reviewer_id or 0)

            async with self.unit_of_work.transaction():
                comment = await self.get(comment_id)
                if decision not in DECISIONS:
                    raise InvalidTransitionError(
                        comment_id, comment.status.value, decision.value
                    )
                new_status = self.moderation_gate.transition(comment, decision)

                now = utcnow()
                updated = await self.comment_repository.update_status(
                    comment_id,
                    expected=comment.status,
                    status=new_status,
                    published_at=now if new_status == CommentStatus.PUBLISHED else None,
                    moderated_at=now,
                    deleted_at=now if new_status == CommentStatus.DELETED else None,
                )
                if updated is None:
                    raise InvalidTransitionError(
                        comment_id, comment.status.value, decision.value
                    )

                was_listed = self.moderation_gate.is_listable(comment.status)
                is_listed = self.moderation_gate.is_listable(new_status)
                if is_listed and not was_listed:
                    await self._enter_published(comment)
                elif was_listed and not is_listed:
                    await self._leave_published(comment)

                hidden_descendants = 0
                if new_status == CommentStatus.BLOCKED:
                    subtree = await self.relation_index.descendants_of(comment_id)
                    hidden_descendants = len(subtree)

            logfire.info(
                "Comment moderated",
                comment_id=comment_id,
                previous_status=comment.status.value,
                new_status=new_status.value,
                hidden_descendants=hidden_descendants,
            )
            await self._publish(
                CommentModerated(
                    comment_id=comment_id,
                    target_type=comment.target_type,
                    target_id=comment.target_id,
                    previous_status=comment.status,
                    new_status=new_status,
                    reason=reason,
                    reviewer_id=reviewer_id,
                    hidden_descendants=hidden_descendants,
                )
            )
            return updated

    async def apply_decisions(
        self,
        comment_ids: Sequence[CommentId],
        decision: CommentStatus,
        reviewer_id: Optional[UserId] = None,
        reason: Optional[str] = None,
    ) -> ModerationBatchResult:
        """Apply one decision to several comments.

        Each comment is decided in its own transaction; a failure on one does
        not undo the others.

        Raises:
            NotAuthorizedError: If the reviewer may not moderate
        """
        if not self.comment_policy.can_moderate(reviewer_id):
            raise NotAuthorizedError("moderate", None, reviewer_id or 0)

        failures: dict[CommentId, str] = {}
        success_count = 0
        for comment_id in dict.fromkeys(comment_ids):
            try:
                await self.apply_decision(comment_id, decision, reviewer_id, reason)
            except DomainError as e:
                failures[comment_id] = e.code
            else:
                success_count += 1

        logfire.info(
            "Batch moderation applied",
            decision=decision.value,
            success_count=success_count,
            failed_count=len(failures),
        )
        return ModerationBatchResult(
            success_count=success_count,
            failed_count=len(failures),
            failures=failures,
        )

    async def list_comments(
        self,
        status: Optional[CommentStatus] = None,
        target_type: Optional[TargetType] = None,
        target_id: Optional[TargetId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Comment], int]:
        """List comments of any status for moderation.

        Returns:
            Page of comments (newest first) and the total matching count
        """
        comments = await self.comment_repository.find_all(
            status=status,
            target_type=target_type,
            target_id=target_id,
            limit=limit,
            offset=offset,
        )
        total = await self.comment_repository.count(
            status=status, target_type=target_type, target_id=target_id
        )
        return comments, total

    async def statistics(self) -> CommentStatistics:
        """Comment counts per status."""
        counts = await self.comment_repository.count_by_status()
        return CommentStatistics(
            pending=counts.get(CommentStatus.PENDING, 0),
            published=counts.get(CommentStatus.PUBLISHED, 0),
            deleted=counts.get(CommentStatus.DELETED, 0),
            blocked=counts.get(CommentStatus.BLOCKED, 0),
            total=sum(counts.values()),
        )

    async def _enter_published(self, comment: Comment) -> None:
        if comment.parent_id is not None:
            await self.counter_sync.increment(
                comment.parent_id, CounterField.REPLY_COUNT
            )
        else:
            await self.content_directory.adjust_comment_count(
                comment.target_type, comment.target_id, 1
            )

    async def _leave_published(self, comment: Comment) -> None:
        if comment.parent_id is not None:
            await self.counter_sync.decrement(
                comment.parent_id, CounterField.REPLY_COUNT
            )
        else:
            await self.content_directory.adjust_comment_count(
                comment.target_type, comment.target_id, -1
            )

    async def _publish(self, event: AnyCommentEvent) -> None:
        await self.event_publisher.publish(event)
