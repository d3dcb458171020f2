"""Content service adapters."""

from .client import ContentServiceDirectory, HttpContentDirectory, MockContentDirectory

__all__ = ["ContentServiceDirectory", "HttpContentDirectory", "MockContentDirectory"]
