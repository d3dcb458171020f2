"""Mock providers for testing."""

from .content import MockContentProvider
from .events import MockEventsProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockContentProvider",
    "MockEventsProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
