"""Opaque pagination cursors.

Three cursor shapes exist:

- ``ThreadCursor`` walks top-level comments newest first and remembers the
  ``(created_at, id)`` of the last root served.
- ``ReplyCursor`` walks the direct replies of one parent oldest first and
  remembers the last reply id. It is bound to that parent.
- ``HotCursor`` walks top-level comments by hot score and remembers an
  offset.

On the wire a cursor is URL-safe base64 of a compact JSON document with a
kind tag, so a reply cursor can never be replayed as a thread cursor.
Creation time and id never change once assigned, which keeps the thread and
reply cursors stable when new comments arrive between page requests. Hot
pages may shift when scores change.
"""

import binascii
from base64 import urlsafe_b64decode, urlsafe_b64encode
from datetime import datetime
from typing import Literal

from pydantic import Field, ValidationError

from discuss.domain.error import InvalidCursorError
from discuss.domain.value.common import ValueObject
from discuss.domain.value.identifiers import CommentId


def _encode(payload: str) -> str:
    return urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def _decode(token: str) -> bytes:
    if not token or len(token) > 512:
        raise InvalidCursorError()
    padded = token + "=" * (-len(token) % 4)
    try:
        return urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError, ValueError) as e:
        raise InvalidCursorError() from e


class ThreadCursor(ValueObject):
    """Position after the last top-level comment of a thread page."""

    kind: Literal["thread"] = "thread"
    created_at: datetime
    id: CommentId

    def encode(self) -> str:
        """Encode to an opaque, URL-safe token."""
        return _encode(self.model_dump_json())

    @classmethod
    def decode(cls, token: str) -> "ThreadCursor":
        """Decode a token produced by ``encode``.

        Raises:
            InvalidCursorError: If the token is malformed or of another kind
        """
        raw = _decode(token)
        try:
            cursor = cls.model_validate_json(raw)
        except ValidationError as e:
            raise InvalidCursorError() from e
        if cursor.created_at.tzinfo is None:
            raise InvalidCursorError("timestamp without timezone")
        return cursor


class ReplyCursor(ValueObject):
    """Position after the last reply served for one parent."""

    kind: Literal["reply"] = "reply"
    parent_id: CommentId
    id: CommentId

    def encode(self) -> str:
        """Encode to an opaque, URL-safe token."""
        return _encode(self.model_dump_json())

    @classmethod
    def decode(cls, token: str, parent_id: CommentId) -> "ReplyCursor":
        """Decode a token and check it was issued for ``parent_id``.

        Raises:
            InvalidCursorError: If the token is malformed, of another kind,
                or scoped to a different parent
        """
        raw = _decode(token)
        try:
            cursor = cls.model_validate_json(raw)
        except ValidationError as e:
            raise InvalidCursorError() from e
        if cursor.parent_id != parent_id:
            raise InvalidCursorError("cursor belongs to another comment")
        return cursor


class HotCursor(ValueObject):
    """Offset into a thread ordered by hot score.

    Hot scores move as comments gain likes and replies, so there is no
    stable key to resume after; the cursor carries the number of roots
    already served instead.
    """

    kind: Literal["hot"] = "hot"
    offset: int = Field(ge=0)

    def encode(self) -> str:
        """Encode to an opaque, URL-safe token."""
        return _encode(self.model_dump_json())

    @classmethod
    def decode(cls, token: str) -> "HotCursor":
        """Decode a token produced by ``encode``.

        Raises:
            InvalidCursorError: If the token is malformed or of another kind
        """
        raw = _decode(token)
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise InvalidCursorError() from e
