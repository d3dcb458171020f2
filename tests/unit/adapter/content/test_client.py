"""Unit tests for the content service HTTP client."""

import json

import httpx
import pytest

from discuss.adapter.content import HttpContentDirectory
from discuss.adapter.error import ContentServiceError
from discuss.domain.value import TargetId, TargetType

BASE_URL = "http://content.test"


def directory_with(handler) -> HttpContentDirectory:
    return HttpContentDirectory(
        base_url=BASE_URL + "/", transport=httpx.MockTransport(handler)
    )


class TestLookup:
    """Tests for target lookup."""

    @pytest.mark.asyncio
    async def test_existing_target(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"owner_id": 42})

        target = await directory_with(handler).lookup(TargetType.POST, TargetId(5))

        assert target.owner_id == 42
        assert target.target_type == TargetType.POST
        assert str(requests[0].url) == f"{BASE_URL}/targets/post/5"

    @pytest.mark.asyncio
    async def test_target_without_owner(self):
        target = await directory_with(
            lambda request: httpx.Response(200, json={})
        ).lookup(TargetType.THREAD, TargetId(1))

        assert target.owner_id is None

    @pytest.mark.asyncio
    async def test_missing_target(self):
        target = await directory_with(lambda request: httpx.Response(404)).lookup(
            TargetType.ARTICLE, TargetId(5)
        )

        assert target is None

    @pytest.mark.asyncio
    async def test_server_error(self):
        directory = directory_with(lambda request: httpx.Response(503, text="down"))

        with pytest.raises(ContentServiceError, match="503"):
            await directory.lookup(TargetType.POST, TargetId(5))

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ContentServiceError, match="HTTP error"):
            await directory_with(handler).lookup(TargetType.POST, TargetId(5))


class TestAdjustCommentCount:
    """Tests for comment count updates."""

    @pytest.mark.asyncio
    async def test_posts_delta(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        await directory_with(handler).adjust_comment_count(
            TargetType.POST, TargetId(5), -1
        )

        assert requests[0].method == "POST"
        assert str(requests[0].url) == f"{BASE_URL}/targets/post/5/comment-count"
        assert json.loads(requests[0].content) == {"delta": -1}

    @pytest.mark.asyncio
    async def test_rejected_update(self):
        directory = directory_with(lambda request: httpx.Response(400))

        with pytest.raises(ContentServiceError):
            await directory.adjust_comment_count(TargetType.POST, TargetId(5), 1)
