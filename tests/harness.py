"""Test harness for unit, integration and E2E tests.

Integration tests assume docker-compose services are already running.
Settings are loaded from environment variables (configure via .env or export).
"""

import pytest
import pytest_asyncio
from dishka import AsyncContainer
from fastapi.testclient import TestClient

from discuss.adapter.content import MockContentDirectory
from discuss.domain.value import TargetId, TargetType
from discuss.interface.api.app import create_app
from discuss.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_comment(unit_env):
            service = await unit_env.get(CommentService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


class ApiEnv:
    """Test client for the HTTP API over a mocked container."""

    def __init__(self, client: TestClient, container: AsyncContainer) -> None:
        self.client = client
        self.container = container

    def get(self, dependency_type):
        """Resolve an APP-scoped dependency on the client's event loop."""
        return self.client.portal.call(self.container.get, dependency_type)

    def register_target(
        self,
        target_type: str = "post",
        target_id: int = 10,
        owner_id: int | None = None,
    ) -> MockContentDirectory:
        """Make a target exist in the mock content service."""
        directory = self.get(MockContentDirectory)
        directory.register(
            TargetType(target_type), TargetId(target_id), owner_id=owner_id
        )
        return directory


def create_api_fixture(unmock: set[Component] | None = None):
    """Factory for fixtures yielding an ``ApiEnv``.

    The app is built around a fresh test container, so every test starts
    with empty storage.

    Usage:
        api = create_api_fixture()

        def test_health(api):
            assert api.client.get("/health").status_code == 200
    """

    @pytest.fixture
    def _api():
        container = build_test_container(unmock=unmock or set())
        app = create_app(container)

        with TestClient(app) as client:
            yield ApiEnv(client, container)
            client.portal.call(container.close)

    return _api
