"""Unit tests for TreeAssembler."""

import pytest
import pytest_asyncio

from discuss.config import CommentSettings
from discuss.domain.error import (
    CommentNotFoundError,
    ContentValidationError,
    InvalidCursorError,
)
from discuss.domain.repository import CommentRepository, LikeRepository
from discuss.domain.service import CommentService, RelationIndex, TreeAssembler
from discuss.domain.value import (
    CommentId,
    CommentStatus,
    HotCursor,
    ReplyCursor,
    ThreadSort,
)
from tests.conftest import ADMIN_ID, ALICE, BOB, CAROL, POST, TARGET_ID, register_target
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


@pytest_asyncio.fixture
async def comment_service(unit_env) -> CommentService:
    await register_target(unit_env)
    return await unit_env.get(CommentService)


@pytest_asyncio.fixture
async def tree_assembler(unit_env) -> TreeAssembler:
    return await unit_env.get(TreeAssembler)


async def assembler_with(unit_env, **settings) -> TreeAssembler:
    return TreeAssembler(
        comment_repository=await unit_env.get(CommentRepository),
        like_repository=await unit_env.get(LikeRepository),
        relation_index=await unit_env.get(RelationIndex),
        comment_settings=CommentSettings(**settings),
    )


class TestFetchThread:
    """Tests for thread pages."""

    @pytest.mark.asyncio
    async def test_empty_thread(self, tree_assembler):
        page = await tree_assembler.fetch_thread(POST, TARGET_ID)

        assert page.items == []
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_chain_scenario(self, comment_service, tree_assembler):
        """A -> B -> C shows A with B inline, and C under B's replies."""
        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await comment_service.create(
            POST, TARGET_ID, BOB, body="B", parent_id=a.id
        )
        c = await comment_service.create(
            POST, TARGET_ID, CAROL, body="C", parent_id=b.id
        )

        page = await tree_assembler.fetch_thread(POST, TARGET_ID)

        assert [node.comment.id for node in page.items] == [a.id]
        root = page.items[0]
        assert root.comment.reply_count == 1
        assert [r.comment.id for r in root.replies] == [b.id]
        assert root.replies_cursor is None

        replies = await tree_assembler.fetch_replies(b.id)
        assert [r.comment.id for r in replies.items] == [c.id]
        assert replies.next_cursor is None

    @pytest.mark.asyncio
    async def test_roots_newest_first_and_replies_oldest_first(
        self, comment_service, tree_assembler
    ):
        first = await comment_service.create(POST, TARGET_ID, ALICE, body="1")
        second = await comment_service.create(POST, TARGET_ID, ALICE, body="2")
        r1 = await comment_service.create(
            POST, TARGET_ID, BOB, body="r1", parent_id=first.id
        )
        r2 = await comment_service.create(
            POST, TARGET_ID, CAROL, body="r2", parent_id=first.id
        )

        page = await tree_assembler.fetch_thread(POST, TARGET_ID)

        assert [n.comment.id for n in page.items] == [second.id, first.id]
        assert [r.comment.id for r in page.items[1].replies] == [r1.id, r2.id]

    @pytest.mark.asyncio
    async def test_pages_are_gap_and_duplicate_free(
        self, comment_service, tree_assembler
    ):
        """Walking every page yields every root exactly once, even with inserts."""
        created = [
            await comment_service.create(POST, TARGET_ID, ALICE, body=f"c{i}")
            for i in range(7)
        ]

        seen = []
        cursor = None
        pages = 0
        while True:
            page = await tree_assembler.fetch_thread(
                POST, TARGET_ID, cursor=cursor, limit=3
            )
            seen.extend(n.comment.id for n in page.items)
            pages += 1
            if pages == 1:
                # Newer roots arriving mid-walk belong before the first page
                await comment_service.create(POST, TARGET_ID, BOB, body="late")
            cursor = page.next_cursor
            if cursor is None:
                break

        assert pages == 3
        assert len(seen) == len(set(seen))
        assert seen == [c.id for c in reversed(created)]

    @pytest.mark.asyncio
    async def test_exact_page_has_no_next_cursor(self, comment_service, tree_assembler):
        for i in range(3):
            await comment_service.create(POST, TARGET_ID, ALICE, body=f"c{i}")

        page = await tree_assembler.fetch_thread(POST, TARGET_ID, limit=3)

        assert len(page.items) == 3
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_inline_reply_overflow_gives_replies_cursor(
        self, comment_service, tree_assembler
    ):
        root = await comment_service.create(POST, TARGET_ID, ALICE, body="root")
        replies = [
            await comment_service.create(
                POST, TARGET_ID, BOB, body=f"r{i}", parent_id=root.id
            )
            for i in range(5)
        ]

        page = await tree_assembler.fetch_thread(POST, TARGET_ID)
        node = page.items[0]

        assert [r.comment.id for r in node.replies] == [r.id for r in replies[:3]]
        assert node.replies_cursor is not None

        rest = await tree_assembler.fetch_replies(root.id, cursor=node.replies_cursor)
        assert [r.comment.id for r in rest.items] == [r.id for r in replies[3:]]

    @pytest.mark.asyncio
    async def test_no_inline_replies(self, unit_env, comment_service):
        tree_assembler = await assembler_with(unit_env, inline_reply_limit=0)
        root = await comment_service.create(POST, TARGET_ID, ALICE, body="root")
        reply = await comment_service.create(
            POST, TARGET_ID, BOB, body="reply", parent_id=root.id
        )

        page = await tree_assembler.fetch_thread(POST, TARGET_ID)
        node = page.items[0]

        assert node.replies == []
        assert ReplyCursor.decode(node.replies_cursor, root.id).id == 0
        rest = await tree_assembler.fetch_replies(root.id, cursor=node.replies_cursor)
        assert [r.comment.id for r in rest.items] == [reply.id]

    @pytest.mark.asyncio
    async def test_hidden_comments_are_not_listed(self, comment_service, tree_assembler):
        """Deleted and blocked comments disappear; their replies stay reachable."""
        kept = await comment_service.create(POST, TARGET_ID, ALICE, body="kept")
        deleted = await comment_service.create(POST, TARGET_ID, ALICE, body="deleted")
        blocked = await comment_service.create(POST, TARGET_ID, BOB, body="blocked")
        orphan = await comment_service.create(
            POST, TARGET_ID, CAROL, body="orphan", parent_id=deleted.id
        )
        await comment_service.delete(deleted.id, ALICE)
        await comment_service.apply_decision(blocked.id, CommentStatus.BLOCKED, ADMIN_ID)

        page = await tree_assembler.fetch_thread(POST, TARGET_ID)
        replies = await tree_assembler.fetch_replies(deleted.id)

        assert [n.comment.id for n in page.items] == [kept.id]
        assert [r.comment.id for r in replies.items] == [orphan.id]

    @pytest.mark.asyncio
    async def test_viewer_like_flags(self, comment_service, tree_assembler):
        root = await comment_service.create(POST, TARGET_ID, ALICE, body="root")
        reply = await comment_service.create(
            POST, TARGET_ID, BOB, body="reply", parent_id=root.id
        )
        await comment_service.like(reply.id, CAROL)

        page = await tree_assembler.fetch_thread(POST, TARGET_ID, viewer_id=CAROL)
        node = page.items[0]

        assert node.liked is False
        assert node.replies[0].liked is True
        assert node.replies[0].comment.like_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -1, 101])
    async def test_limit_out_of_range(self, tree_assembler, limit):
        with pytest.raises(ContentValidationError):
            await tree_assembler.fetch_thread(POST, TARGET_ID, limit=limit)

    @pytest.mark.asyncio
    async def test_invalid_cursor(self, tree_assembler):
        with pytest.raises(InvalidCursorError):
            await tree_assembler.fetch_thread(POST, TARGET_ID, cursor="garbage!")


class TestHotThread:
    """Tests for thread pages ordered by hot score."""

    @pytest.mark.asyncio
    async def test_liked_and_discussed_roots_rank_first(
        self, comment_service, tree_assembler
    ):
        quiet = await comment_service.create(POST, TARGET_ID, ALICE, body="quiet")
        liked = await comment_service.create(POST, TARGET_ID, ALICE, body="liked")
        discussed = await comment_service.create(POST, TARGET_ID, BOB, body="talk")
        await comment_service.like(liked.id, BOB)
        await comment_service.create(
            POST, TARGET_ID, CAROL, body="reply", parent_id=discussed.id
        )

        page = await tree_assembler.fetch_thread(
            POST, TARGET_ID, sort=ThreadSort.HOT
        )

        # liked: 2 * 1 + 0, discussed: 2 * 0 + 1, quiet: 0
        assert [n.comment.id for n in page.items] == [liked.id, discussed.id, quiet.id]
        assert [r.comment.body for r in page.items[1].replies] == ["reply"]

    @pytest.mark.asyncio
    async def test_equal_scores_fall_back_to_newest(
        self, comment_service, tree_assembler
    ):
        older = await comment_service.create(POST, TARGET_ID, ALICE, body="old")
        newer = await comment_service.create(POST, TARGET_ID, ALICE, body="new")

        page = await tree_assembler.fetch_thread(
            POST, TARGET_ID, sort=ThreadSort.HOT
        )

        assert [n.comment.id for n in page.items] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_hot_pages_walk_every_root(self, comment_service, tree_assembler):
        created = [
            await comment_service.create(POST, TARGET_ID, ALICE, body=f"c{i}")
            for i in range(5)
        ]
        await comment_service.like(created[0].id, BOB)

        first = await tree_assembler.fetch_thread(
            POST, TARGET_ID, limit=2, sort=ThreadSort.HOT
        )
        second = await tree_assembler.fetch_thread(
            POST, TARGET_ID, cursor=first.next_cursor, limit=2, sort=ThreadSort.HOT
        )
        third = await tree_assembler.fetch_thread(
            POST, TARGET_ID, cursor=second.next_cursor, limit=2, sort=ThreadSort.HOT
        )

        assert HotCursor.decode(first.next_cursor).offset == 2
        ids = [n.comment.id for p in (first, second, third) for n in p.items]
        assert ids == [created[0].id] + [c.id for c in reversed(created[1:])]
        assert third.next_cursor is None

    @pytest.mark.asyncio
    async def test_cursor_of_the_other_order_is_rejected(
        self, comment_service, tree_assembler
    ):
        for i in range(3):
            await comment_service.create(POST, TARGET_ID, ALICE, body=f"c{i}")

        latest = await tree_assembler.fetch_thread(POST, TARGET_ID, limit=1)
        hot = await tree_assembler.fetch_thread(
            POST, TARGET_ID, limit=1, sort=ThreadSort.HOT
        )

        with pytest.raises(InvalidCursorError):
            await tree_assembler.fetch_thread(
                POST, TARGET_ID, cursor=latest.next_cursor, sort=ThreadSort.HOT
            )
        with pytest.raises(InvalidCursorError):
            await tree_assembler.fetch_thread(
                POST, TARGET_ID, cursor=hot.next_cursor
            )


class TestFetchReplies:
    """Tests for reply pages."""

    @pytest.mark.asyncio
    async def test_paging_replies(self, comment_service, tree_assembler):
        root = await comment_service.create(POST, TARGET_ID, ALICE, body="root")
        replies = [
            await comment_service.create(
                POST, TARGET_ID, BOB, body=f"r{i}", parent_id=root.id
            )
            for i in range(5)
        ]

        first = await tree_assembler.fetch_replies(root.id, limit=2)
        second = await tree_assembler.fetch_replies(
            root.id, cursor=first.next_cursor, limit=2
        )
        third = await tree_assembler.fetch_replies(
            root.id, cursor=second.next_cursor, limit=2
        )

        ids = [r.comment.id for page in (first, second, third) for r in page.items]
        assert ids == [r.id for r in replies]
        assert third.next_cursor is None

    @pytest.mark.asyncio
    async def test_cursor_of_another_parent(self, comment_service, tree_assembler):
        a = await comment_service.create(POST, TARGET_ID, ALICE, body="a")
        b = await comment_service.create(POST, TARGET_ID, ALICE, body="b")
        for i in range(3):
            await comment_service.create(
                POST, TARGET_ID, BOB, body=f"r{i}", parent_id=a.id
            )

        page = await tree_assembler.fetch_replies(a.id, limit=1)

        with pytest.raises(InvalidCursorError):
            await tree_assembler.fetch_replies(b.id, cursor=page.next_cursor)

    @pytest.mark.asyncio
    async def test_missing_parent(self, tree_assembler):
        with pytest.raises(CommentNotFoundError):
            await tree_assembler.fetch_replies(CommentId(404))

    @pytest.mark.asyncio
    async def test_blocked_ancestor_hides_every_level(
        self, comment_service, tree_assembler
    ):
        """A -> B -> C with A blocked: neither A nor B lists replies."""
        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await comment_service.create(
            POST, TARGET_ID, BOB, body="B", parent_id=a.id
        )
        await comment_service.create(
            POST, TARGET_ID, CAROL, body="C", parent_id=b.id
        )
        await comment_service.apply_decision(a.id, CommentStatus.BLOCKED, ADMIN_ID)

        under_a = await tree_assembler.fetch_replies(a.id)
        under_b = await tree_assembler.fetch_replies(b.id)

        assert under_a.items == []
        assert under_a.next_cursor is None
        assert under_b.items == []
        assert under_b.next_cursor is None

    @pytest.mark.asyncio
    async def test_deleted_ancestor_keeps_replies(self, comment_service, tree_assembler):
        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await comment_service.create(
            POST, TARGET_ID, BOB, body="B", parent_id=a.id
        )
        c = await comment_service.create(
            POST, TARGET_ID, CAROL, body="C", parent_id=b.id
        )
        await comment_service.delete(a.id, ALICE)

        under_b = await tree_assembler.fetch_replies(b.id)

        assert [r.comment.id for r in under_b.items] == [c.id]
