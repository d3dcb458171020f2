"""Comment event publishers.

The production publisher emits each event as a structured logfire record;
downstream notification and audit consumers read them from there.
"""

import logfire

from discuss.domain.model import AnyCommentEvent
from discuss.domain.service.events import CommentEventPublisher


class LogfireEventPublisher(CommentEventPublisher):
    """Publishes comment events as structured log records."""

    async def publish(self, event: AnyCommentEvent) -> None:
        logfire.info(
            "Comment event {event_name}",
            event_name=event.name,
            comment_id=event.comment_id,
            payload=event.model_dump(mode="json"),
        )


class InMemoryEventPublisher(CommentEventPublisher):
    """Collects published events for testing."""

    def __init__(self) -> None:
        self.events: list[AnyCommentEvent] = []

    async def publish(self, event: AnyCommentEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[AnyCommentEvent]:
        """Published events of one class, in order."""
        return [e for e in self.events if isinstance(e, event_type)]
