"""Infrastructure providers."""

# Import bases
from .content import ContentProvider
from .events import EventsProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .content import ProdContentProvider  # noqa: F401
from .events import ProdEventsProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "ContentProvider",
    "EventsProvider",
    "PersistenceProvider",
    "ProdContentProvider",
    "ProdEventsProvider",
    "ProdPersistenceProvider",
]
