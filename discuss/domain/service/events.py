"""Comment event publisher interface."""

from discuss.domain.model import AnyCommentEvent


class CommentEventPublisher:
    """Outbound channel for comment events.

    Implementations must not raise for delivery problems: by the time an
    event is published the change it describes is already committed.
    """

    async def publish(self, event: AnyCommentEvent) -> None:
        """Publish one event.

        Args:
            event: Event to deliver
        """
        raise NotImplementedError
