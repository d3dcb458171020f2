"""Mock content service providers for testing."""

from dishka import Scope, provide

from discuss.adapter.content import MockContentDirectory
from discuss.domain.service import ContentDirectory
from discuss.util.di.infrastructure.content import ContentProvider


class MockContentProvider(ContentProvider):
    """Mock content provider using a registry of known targets."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mock_content_directory(self) -> MockContentDirectory:
        return MockContentDirectory()

    @provide(scope=Scope.APP)
    def get_content_directory(self, directory: MockContentDirectory) -> ContentDirectory:
        """Provide mock content directory."""
        return directory
