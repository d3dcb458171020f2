"""Comment event infrastructure providers."""

from dishka import Scope, provide

from discuss.adapter.events import LogfireEventPublisher
from discuss.domain.service import CommentEventPublisher
from discuss.util.di.base import ProviderBase


class EventsProvider(ProviderBase):
    """Event publishing component base."""

    __mock_component__ = "events"


class ProdEventsProvider(EventsProvider):
    """Production provider publishing events as logfire records."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_event_publisher(self) -> CommentEventPublisher:
        """Provide event publisher."""
        return LogfireEventPublisher()
