"""Unit tests for RelationIndex."""

import pytest
import pytest_asyncio

from discuss.domain.error import InvalidParentError, ParentNotFoundError
from discuss.config import CommentSettings
from discuss.domain.repository import RelationRepository
from discuss.domain.service import CommentService, RelationIndex
from discuss.domain.value import CommentId, CommentStatus, TargetId
from tests.conftest import (
    ALICE,
    BOB,
    CAROL,
    POST,
    TARGET_ID,
    build_comment_service,
    register_target,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


@pytest_asyncio.fixture
async def comment_service(unit_env):
    await register_target(unit_env)
    return await unit_env.get(CommentService)


async def reply(service: CommentService, parent_id, author_id=BOB, body="reply"):
    return await service.create(
        POST, TARGET_ID, author_id, body=body, parent_id=parent_id
    )


class TestInsert:
    """Tests for closure rows written on insert."""

    @pytest.mark.asyncio
    async def test_top_level_comment_has_only_self_pair(self, unit_env, comment_service):
        """A root comment is its own only ancestor."""
        relation_index = await unit_env.get(RelationIndex)

        comment = await comment_service.create(POST, TARGET_ID, ALICE, body="root")

        rows = await relation_index.ancestors_of(comment.id)
        assert len(rows) == 1
        assert rows[0].ancestor_id == comment.id
        assert rows[0].descendant_id == comment.id
        assert rows[0].depth == 0
        assert rows[0].path == str(comment.id)

    @pytest.mark.asyncio
    async def test_chain_of_three(self, unit_env, comment_service):
        """A -> B -> C gives C the ancestors A at 2 and B at 1."""
        relation_index = await unit_env.get(RelationIndex)

        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await reply(comment_service, a.id)
        c = await reply(comment_service, b.id, author_id=CAROL)

        rows = await relation_index.ancestors_of(c.id)

        assert [(r.ancestor_id, r.depth) for r in rows] == [
            (a.id, 2),
            (b.id, 1),
            (c.id, 0),
        ]
        assert rows[0].path == f"{a.id},{b.id},{c.id}"
        assert rows[1].path == f"{b.id},{c.id}"
        assert c.depth == 2

    @pytest.mark.asyncio
    async def test_every_comment_has_exactly_one_self_pair(
        self, unit_env, comment_service
    ):
        relation_index = await unit_env.get(RelationIndex)

        root = await comment_service.create(POST, TARGET_ID, ALICE, body="root")
        ids = [root.id]
        for i in range(5):
            child = await reply(comment_service, ids[i // 2], body=f"r{i}")
            ids.append(child.id)

        for comment_id in ids:
            rows = await relation_index.ancestors_of(comment_id)
            self_pairs = [r for r in rows if r.is_self]
            assert len(self_pairs) == 1
            assert self_pairs[0].depth == 0

    @pytest.mark.asyncio
    async def test_ancestors_extend_parent_ancestors(self, unit_env, comment_service):
        """ancestors(child) is ancestors(parent) plus the parent, one level deeper."""
        relation_index = await unit_env.get(RelationIndex)

        root = await comment_service.create(POST, TARGET_ID, ALICE, body="root")
        parent = root
        for depth in range(1, 6):
            child = await reply(comment_service, parent.id, body=f"level {depth}")

            parent_rows = await relation_index.ancestors_of(parent.id)
            child_rows = await relation_index.ancestors_of(child.id)

            expected = {(r.ancestor_id, r.depth + 1) for r in parent_rows}
            expected.add((child.id, 0))
            assert {(r.ancestor_id, r.depth) for r in child_rows} == expected
            assert child.depth == depth
            parent = child

    @pytest.mark.asyncio
    async def test_insert_without_parent_rows_fails(self, unit_env):
        """A parent with no closure rows cannot be extended."""
        relation_index = await unit_env.get(RelationIndex)

        with pytest.raises(ParentNotFoundError):
            await relation_index.insert(CommentId(99), CommentId(98))

    @pytest.mark.asyncio
    async def test_insert_never_rewrites_existing_rows(self, unit_env, comment_service):
        relation_repo = await unit_env.get(RelationRepository)

        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        before = await relation_repo.find_by_descendant(a.id)
        await reply(comment_service, a.id)
        after = await relation_repo.find_by_descendant(a.id)

        assert before == after


class TestQueries:
    """Tests for subtree and ancestor queries."""

    @pytest.mark.asyncio
    async def test_descendants_in_depth_first_order(self, unit_env, comment_service):
        relation_index = await unit_env.get(RelationIndex)

        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await reply(comment_service, a.id, body="B")
        c = await reply(comment_service, a.id, body="C")
        d = await reply(comment_service, b.id, author_id=CAROL, body="D")

        rows = await relation_index.descendants_of(a.id)

        assert [r.descendant_id for r in rows] == [b.id, d.id, c.id]

    @pytest.mark.asyncio
    async def test_descendants_with_max_depth(self, unit_env, comment_service):
        relation_index = await unit_env.get(RelationIndex)

        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await reply(comment_service, a.id)
        await reply(comment_service, b.id, author_id=CAROL)

        rows = await relation_index.descendants_of(a.id, max_depth=1)

        assert [r.descendant_id for r in rows] == [b.id]

    @pytest.mark.asyncio
    async def test_paths_sort_numerically(self, unit_env, comment_service):
        """Id 10 comes after id 9 even though "10" < "9" as text."""
        relation_index = await unit_env.get(RelationIndex)

        root = await comment_service.create(POST, TARGET_ID, ALICE, body="root")
        children = [
            await reply(comment_service, root.id, body=f"c{i}") for i in range(10)
        ]

        rows = await relation_index.descendants_of(root.id)

        assert [r.descendant_id for r in rows] == [c.id for c in children]

    @pytest.mark.asyncio
    async def test_children_of_several_parents(self, unit_env, comment_service):
        relation_index = await unit_env.get(RelationIndex)

        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await comment_service.create(POST, TARGET_ID, ALICE, body="B")
        a1 = await reply(comment_service, a.id)
        b1 = await reply(comment_service, b.id)
        await reply(comment_service, a1.id, author_id=CAROL)

        rows = await relation_index.children_of([a.id, b.id])

        assert {(r.ancestor_id, r.descendant_id) for r in rows} == {
            (a.id, a1.id),
            (b.id, b1.id),
        }
        assert await relation_index.children_of([]) == []

    @pytest.mark.asyncio
    async def test_has_blocked_ancestor(self, unit_env, comment_service):
        relation_index = await unit_env.get(RelationIndex)

        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await reply(comment_service, a.id)
        c = await reply(comment_service, b.id, author_id=CAROL)
        assert await relation_index.has_blocked_ancestor(c.id) is False

        await comment_service.apply_decision(b.id, CommentStatus.BLOCKED)

        assert await relation_index.has_blocked_ancestor(c.id) is True
        assert await relation_index.has_blocked_ancestor(a.id) is False


class TestValidateParent:
    """Tests for parent validation."""

    @pytest.mark.asyncio
    async def test_missing_parent(self, unit_env, comment_service):
        relation_index = await unit_env.get(RelationIndex)

        with pytest.raises(ParentNotFoundError):
            await relation_index.validate_parent(CommentId(404), POST, TARGET_ID)

    @pytest.mark.asyncio
    async def test_parent_on_other_target(self, unit_env, comment_service):
        relation_index = await unit_env.get(RelationIndex)
        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")

        with pytest.raises(InvalidParentError):
            await relation_index.validate_parent(a.id, POST, TargetId(11))

    @pytest.mark.asyncio
    async def test_returns_parent_and_reply_depth(self, unit_env, comment_service):
        relation_index = await unit_env.get(RelationIndex)
        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        b = await reply(comment_service, a.id)

        parent, depth = await relation_index.validate_parent(b.id, POST, TARGET_ID)

        assert parent.id == b.id
        assert depth == 2

    @pytest.mark.asyncio
    async def test_pending_parent_is_refused(self, unit_env, comment_service):
        relation_index = await unit_env.get(RelationIndex)
        review_service = await build_comment_service(
            unit_env, CommentSettings(auto_publish=False)
        )
        pending = await review_service.create(POST, TARGET_ID, ALICE, body="wait")

        with pytest.raises(ParentNotFoundError):
            await relation_index.validate_parent(pending.id, POST, TARGET_ID)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [CommentStatus.BLOCKED, CommentStatus.DELETED])
    async def test_hidden_parent_is_refused(self, unit_env, comment_service, status):
        relation_index = await unit_env.get(RelationIndex)
        a = await comment_service.create(POST, TARGET_ID, ALICE, body="A")
        if status == CommentStatus.DELETED:
            await comment_service.delete(a.id, ALICE)
        else:
            await comment_service.apply_decision(a.id, status)

        with pytest.raises(ParentNotFoundError):
            await relation_index.validate_parent(a.id, POST, TARGET_ID)
