"""Comment event publishers."""

from .publisher import InMemoryEventPublisher, LogfireEventPublisher

__all__ = ["InMemoryEventPublisher", "LogfireEventPublisher"]
