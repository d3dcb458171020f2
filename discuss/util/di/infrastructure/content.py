"""Content service infrastructure providers."""

from dishka import Scope, provide

from discuss.adapter.content import HttpContentDirectory
from discuss.config import Settings
from discuss.domain.service import ContentDirectory
from discuss.util.di.base import ProviderBase


class ContentProvider(ProviderBase):
    """Content service component base."""

    __mock_component__ = "content"


class ProdContentProvider(ContentProvider):
    """Production content provider talking to the content service."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_content_directory(self, settings: Settings) -> ContentDirectory:
        """Provide HTTP content directory."""
        return HttpContentDirectory(
            base_url=settings.content_service.base_url,
            timeout=settings.content_service.timeout,
        )
