"""Tree assembler: paginated two-level thread views."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional, Sequence

import logfire

from discuss.config import CommentSettings
from discuss.domain.error import CommentNotFoundError, ContentValidationError
from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository, LikeRepository
from discuss.domain.value import (
    CommentId,
    CommentStatus,
    HotCursor,
    ReplyCursor,
    TargetId,
    TargetType,
    ThreadCursor,
    ThreadSort,
    UserId,
)

from .base import Service
from .relation_index import RelationIndex


@dataclass
class ReplyNode:
    """Reply shown under a top-level comment or in a replies page."""

    comment: Comment
    liked: bool = False


@dataclass
class ThreadNode:
    """Top-level comment with its first few replies inlined.

    ``replies_cursor`` is set when the comment has more replies than were
    inlined; it continues the listing through ``fetch_replies``.
    """

    comment: Comment
    liked: bool = False
    replies: list[ReplyNode] = field(default_factory=list)
    replies_cursor: Optional[str] = None


@dataclass
class ThreadPage:
    """One page of a thread; ``next_cursor`` is None on the last page."""

    items: list[ThreadNode]
    next_cursor: Optional[str] = None


@dataclass
class ReplyPage:
    """One page of direct replies."""

    parent_id: CommentId
    items: list[ReplyNode]
    next_cursor: Optional[str] = None


class TreeAssembler(Service):
    """Domain service building thread views from published comments.

    A thread page costs a fixed number of queries regardless of its size:
    one for the roots, two for their direct children (closure rows, then
    the comments), and one for the viewer's likes.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        relation_index: RelationIndex,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize tree assembler.

        Args:
            comment_repository: Comment repository
            like_repository: Like ledger repository (viewer like flags)
            relation_index: Closure table service (children, blocked ancestors)
            comment_settings: Page size and inline reply settings
        """
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.relation_index = relation_index
        self.settings = comment_settings

    def _check_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.settings.default_page_size
        if not 1 <= limit <= self.settings.max_page_size:
            raise ContentValidationError(
                f"limit must be between 1 and {self.settings.max_page_size}"
            )
        return limit

    async def _liked(
        self, viewer_id: Optional[UserId], comments: list[Comment]
    ) -> set[CommentId]:
        if viewer_id is None or not comments:
            return set()
        return await self.like_repository.find_liked_ids(
            viewer_id, [c.id for c in comments]
        )

    async def _visible_children(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, list[Comment]]:
        """Visible direct replies per parent, oldest first."""
        rows = await self.relation_index.children_of(parent_ids)
        if not rows:
            return {}
        children = await self.comment_repository.find_by_ids(
            [row.descendant_id for row in rows]
        )
        grouped: dict[CommentId, list[Comment]] = defaultdict(list)
        for child in sorted(children, key=lambda c: (c.created_at, c.id)):
            if child.is_visible:
                grouped[child.parent_id].append(child)
        return grouped

    async def _roots(
        self,
        target_type: TargetType,
        target_id: TargetId,
        cursor: Optional[str],
        limit: int,
        sort: ThreadSort,
    ) -> tuple[list[Comment], Optional[str]]:
        # One extra row tells us whether another page exists
        if sort == ThreadSort.HOT:
            offset = HotCursor.decode(cursor).offset if cursor else 0
            roots = await self.comment_repository.find_top_level_by_hot(
                target_type, target_id, offset=offset, limit=limit + 1
            )
            if len(roots) <= limit:
                return roots, None
            return roots[:limit], HotCursor(offset=offset + limit).encode()

        after = ThreadCursor.decode(cursor) if cursor else None
        roots = await self.comment_repository.find_top_level(
            target_type, target_id, after=after, limit=limit + 1
        )
        if len(roots) <= limit:
            return roots, None
        roots = roots[:limit]
        last = roots[-1]
        return roots, ThreadCursor(created_at=last.created_at, id=last.id).encode()

    async def fetch_thread(
        self,
        target_type: TargetType,
        target_id: TargetId,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        viewer_id: Optional[UserId] = None,
        sort: ThreadSort = ThreadSort.LATEST,
    ) -> ThreadPage:
        """Fetch a page of top-level comments with inline replies.

        Roots are ordered newest first by ``(created_at, id)``, or by
        ``(hot_score, id)`` descending with ``sort=hot``; inline replies
        oldest first.

        Args:
            target_type: Commented-on content type
            target_id: Commented-on content ID
            cursor: ``next_cursor`` of the previous page, None for the first
            limit: Roots per page
            viewer_id: User whose like flags to include
            sort: Root order; the cursor must come from the same order

        Returns:
            Thread page

        Raises:
            InvalidCursorError: If the cursor cannot be used
            ContentValidationError: If the limit is out of range
        """
        limit = self._check_limit(limit)

        with logfire.span(
            "tree_assembler.fetch_thread",
            target_type=target_type.value,
            target_id=target_id,
            limit=limit,
            sort=sort.value,
            paged=cursor is not None,
        ):
            roots, next_cursor = await self._roots(
                target_type, target_id, cursor, limit, sort
            )

            inline_limit = self.settings.inline_reply_limit
            children: dict[CommentId, list[Comment]] = {}
            if roots and inline_limit > 0:
                children = await self._visible_children([root.id for root in roots])

            liked = await self._liked(
                viewer_id,
                roots
                + [c for group in children.values() for c in group[:inline_limit]],
            )

            items = []
            for root in roots:
                replies = children.get(root.id, [])
                shown = replies[:inline_limit]
                replies_cursor = None
                if len(replies) > inline_limit or (
                    inline_limit == 0 and root.reply_count > 0
                ):
                    replies_cursor = ReplyCursor(
                        parent_id=root.id, id=shown[-1].id if shown else 0
                    ).encode()
                items.append(
                    ThreadNode(
                        comment=root,
                        liked=root.id in liked,
                        replies=[ReplyNode(c, liked=c.id in liked) for c in shown],
                        replies_cursor=replies_cursor,
                    )
                )

            logfire.info(
                "Thread page assembled",
                target_type=target_type.value,
                target_id=target_id,
                sort=sort.value,
                roots=len(items),
                has_more=next_cursor is not None,
            )
            return ThreadPage(items=items, next_cursor=next_cursor)

    async def _replies_hidden(self, parent: Comment) -> bool:
        """Whether replies under ``parent`` belong to a hidden thread.

        A deleted parent still shows its replies; a pending or blocked one,
        or any blocked ancestor, hides them.
        """
        if parent.status in (CommentStatus.PENDING, CommentStatus.BLOCKED):
            return True
        return await self.relation_index.has_blocked_ancestor(parent.id)

    async def fetch_replies(
        self,
        parent_id: CommentId,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        viewer_id: Optional[UserId] = None,
    ) -> ReplyPage:
        """Fetch a page of direct replies of one comment, oldest first.

        A deleted parent still lists its replies. Under a blocked comment
        (the parent or any of its ancestors) the page is empty.

        Raises:
            CommentNotFoundError: If the parent does not exist
            InvalidCursorError: If the cursor belongs elsewhere or is malformed
            ContentValidationError: If the limit is out of range
        """
        limit = self._check_limit(limit)
        after = ReplyCursor.decode(cursor, parent_id) if cursor else None

        with logfire.span(
            "tree_assembler.fetch_replies", parent_id=parent_id, limit=limit
        ):
            parent = await self.comment_repository.find_by_id(parent_id)
            if parent is None:
                raise CommentNotFoundError(parent_id)

            if await self._replies_hidden(parent):
                logfire.info(
                    "Replies hidden under blocked thread",
                    parent_id=parent_id,
                    parent_status=parent.status.value,
                )
                return ReplyPage(parent_id=parent_id, items=[])

            replies = await self.comment_repository.find_replies(
                parent_id, after_id=after.id if after else None, limit=limit + 1
            )
            has_more = len(replies) > limit
            replies = replies[:limit]

            liked = await self._liked(viewer_id, replies)
            next_cursor = None
            if has_more and replies:
                next_cursor = ReplyCursor(parent_id=parent_id, id=replies[-1].id).encode()

            return ReplyPage(
                parent_id=parent_id,
                items=[ReplyNode(c, liked=c.id in liked) for c in replies],
                next_cursor=next_cursor,
            )
