"""Counter sync: denormalized counter maintenance."""

import logfire

from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository, LikeRepository, UnitOfWork
from discuss.domain.value import CommentId, CounterField, TargetId, TargetType
from discuss.domain.value.common import ValueObject

from .base import Service


class CounterSnapshot(ValueObject):
    """Counters of one comment after a resync."""

    comment_id: CommentId
    like_count: int
    reply_count: int
    hot_score: int
    changed: bool


class CounterSync(Service):
    """Domain service owning ``like_count``, ``reply_count`` and ``hot_score``.

    Incremental changes are single SQL-level updates. ``resync`` rebuilds the
    counters from source rows and is safe to repeat. It opens its own
    transaction, so it is never called from inside another one.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize counter sync.

        Args:
            comment_repository: Comment repository
            like_repository: Like ledger repository
            unit_of_work: Transaction boundary for resyncs
        """
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.unit_of_work = unit_of_work

    async def increment(
        self, comment_id: CommentId, field: CounterField, delta: int = 1
    ) -> Comment | None:
        """Atomically increase a counter.

        Args:
            comment_id: Comment ID
            field: Counter to change
            delta: Positive amount

        Returns:
            Updated comment, None if it does not exist
        """
        with logfire.span(
            "counter_sync.increment",
            comment_id=comment_id,
            field=field.value,
            delta=delta,
        ):
            return await self.comment_repository.adjust_counter(
                comment_id, field, abs(delta)
            )

    async def decrement(
        self, comment_id: CommentId, field: CounterField, delta: int = 1
    ) -> Comment | None:
        """Atomically decrease a counter (never below 0).

        Args:
            comment_id: Comment ID
            field: Counter to change
            delta: Positive amount to subtract

        Returns:
            Updated comment, None if it does not exist
        """
        with logfire.span(
            "counter_sync.decrement",
            comment_id=comment_id,
            field=field.value,
            delta=delta,
        ):
            return await self.comment_repository.adjust_counter(
                comment_id, field, -abs(delta)
            )

    async def resync(self, comment_id: CommentId) -> CounterSnapshot | None:
        """Recompute a comment's counters from source rows.

        ``reply_count`` becomes the number of visible direct replies and
        ``like_count`` the number of like ledger rows. The comment row stays
        locked from the first count to the overwrite, so a like or reply
        committed meanwhile waits and is counted afterwards.

        Args:
            comment_id: Comment ID

        Returns:
            Counters after the resync, None if the comment does not exist
        """
        with logfire.span("counter_sync.resync", comment_id=comment_id):
            async with self.unit_of_work.transaction():
                before = await self.comment_repository.find_by_id_for_update(
                    comment_id
                )
                if before is None:
                    logfire.warn(
                        "Resync of non-existent comment", comment_id=comment_id
                    )
                    return None

                reply_count = await self.comment_repository.count_visible_children(
                    comment_id
                )
                like_count = await self.like_repository.count_by_comment(comment_id)

                after = await self.comment_repository.overwrite_counters(
                    comment_id, like_count=like_count, reply_count=reply_count
                )
                if after is None:
                    return None

            changed = (before.like_count, before.reply_count, before.hot_score) != (
                after.like_count,
                after.reply_count,
                after.hot_score,
            )
            if changed:
                logfire.warn(
                    "Comment counters drifted",
                    comment_id=comment_id,
                    like_count_before=before.like_count,
                    like_count_after=after.like_count,
                    reply_count_before=before.reply_count,
                    reply_count_after=after.reply_count,
                )

            return CounterSnapshot(
                comment_id=comment_id,
                like_count=after.like_count,
                reply_count=after.reply_count,
                hot_score=after.hot_score,
                changed=changed,
            )

    async def resync_target(self, target_type: TargetType, target_id: TargetId) -> int:
        """Resync every comment of a target.

        Maintenance sweep, never called on the read path. Each comment is
        resynced in its own transaction so locks are held briefly.

        Returns:
            Number of comments whose counters had drifted
        """
        with logfire.span(
            "counter_sync.resync_target",
            target_type=target_type.value,
            target_id=target_id,
        ):
            comment_ids = await self.comment_repository.find_ids_by_target(
                target_type, target_id
            )
            drifted = 0
            for comment_id in comment_ids:
                snapshot = await self.resync(comment_id)
                if snapshot and snapshot.changed:
                    drifted += 1

            logfire.info(
                "Target counters resynced",
                target_type=target_type.value,
                target_id=target_id,
                comments=len(comment_ids),
                drifted=drifted,
            )
            return drifted
