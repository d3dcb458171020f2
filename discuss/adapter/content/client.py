"""Content service client.

Resolves commented-on content (posts, articles, forum threads) over HTTP and
reports comment count changes back to the service that owns it.

Endpoints used:
    GET  {base_url}/targets/{target_type}/{target_id}
         -> 200 {"owner_id": int | null}, 404 if the target does not exist
    POST {base_url}/targets/{target_type}/{target_id}/comment-count
         {"delta": int} -> 2xx
"""

from collections import defaultdict

import httpx
import logfire

from discuss.adapter.error import ContentServiceError
from discuss.domain.service.content import ContentDirectory
from discuss.domain.value import ContentTarget, TargetId, TargetType, UserId


class ContentServiceDirectory(ContentDirectory):
    """Base class for content directory adapters.

    Provides type distinction for dependency injection.
    """

    pass


class HttpContentDirectory(ContentServiceDirectory):
    """Content directory backed by the content service's HTTP API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize content service client.

        Args:
            base_url: Content service root URL
            timeout: Request timeout in seconds
            transport: Alternative httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    def _target_url(self, target_type: TargetType, target_id: TargetId) -> str:
        return f"{self.base_url}/targets/{target_type.value}/{target_id}"

    async def lookup(
        self, target_type: TargetType, target_id: TargetId
    ) -> ContentTarget | None:
        """Resolve a target through the content service.

        Raises:
            ContentServiceError: If the service fails or cannot be reached
        """
        url = self._target_url(target_type, target_id)
        try:
            async with self._client() as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logfire.error("Content service lookup HTTP error", url=url, error=str(e))
            raise ContentServiceError(f"HTTP error during target lookup: {e}")

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logfire.error(
                "Content service lookup failed",
                url=url,
                status_code=response.status_code,
                error=response.text,
            )
            raise ContentServiceError(f"Target lookup failed: {response.status_code}")

        data = response.json()
        owner_id = data.get("owner_id")
        return ContentTarget(
            target_type=target_type,
            target_id=target_id,
            owner_id=UserId(owner_id) if owner_id is not None else None,
        )

    async def adjust_comment_count(
        self, target_type: TargetType, target_id: TargetId, delta: int
    ) -> None:
        """Report a change in the target's visible comment count.

        Raises:
            ContentServiceError: If the service rejects the update
        """
        url = f"{self._target_url(target_type, target_id)}/comment-count"
        try:
            async with self._client() as client:
                response = await client.post(url, json={"delta": delta})
        except httpx.HTTPError as e:
            logfire.error("Content service count HTTP error", url=url, error=str(e))
            raise ContentServiceError(f"HTTP error during count update: {e}")

        if response.is_error:
            logfire.error(
                "Content service count update failed",
                url=url,
                status_code=response.status_code,
                error=response.text,
            )
            raise ContentServiceError(
                f"Comment count update failed: {response.status_code}"
            )


class MockContentDirectory(ContentServiceDirectory):
    """Mock content directory for testing.

    Only registered targets exist. Comment count changes are recorded per
    target instead of being sent anywhere.
    """

    def __init__(self) -> None:
        """Initialize mock directory without a content service."""
        self.targets: dict[tuple[TargetType, TargetId], ContentTarget] = {}
        self.comment_counts: dict[tuple[TargetType, TargetId], int] = defaultdict(int)

    def register(
        self,
        target_type: TargetType,
        target_id: TargetId,
        owner_id: UserId | None = None,
    ) -> ContentTarget:
        """Make a target exist."""
        target = ContentTarget(
            target_type=target_type, target_id=target_id, owner_id=owner_id
        )
        self.targets[(target_type, target_id)] = target
        return target

    async def lookup(
        self, target_type: TargetType, target_id: TargetId
    ) -> ContentTarget | None:
        return self.targets.get((target_type, target_id))

    async def adjust_comment_count(
        self, target_type: TargetType, target_id: TargetId, delta: int
    ) -> None:
        key = (target_type, target_id)
        self.comment_counts[key] = max(self.comment_counts[key] + delta, 0)
