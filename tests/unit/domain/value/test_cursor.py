"""Unit tests for pagination cursors."""

from base64 import urlsafe_b64encode
from datetime import datetime, timezone

import pytest

from discuss.domain.error import InvalidCursorError
from discuss.domain.value import CommentId, HotCursor, ReplyCursor, ThreadCursor


class TestThreadCursor:
    """Tests for ThreadCursor."""

    def test_decode_returns_encoded_position(self):
        """A token decodes back to the position it was made from."""
        created_at = datetime(2026, 3, 1, 12, 30, 15, 123456, tzinfo=timezone.utc)
        token = ThreadCursor(created_at=created_at, id=CommentId(42)).encode()

        cursor = ThreadCursor.decode(token)

        assert cursor.created_at == created_at
        assert cursor.id == 42

    def test_token_is_url_safe(self):
        """Tokens can be passed in a query string without escaping."""
        token = ThreadCursor(
            created_at=datetime.now(timezone.utc), id=CommentId(7)
        ).encode()

        assert "=" not in token
        assert "+" not in token
        assert "/" not in token

    @pytest.mark.parametrize("token", ["", "not base64 !!", "AAAA", "e30"])
    def test_malformed_token_is_rejected(self, token):
        """Garbage and empty JSON objects are invalid cursors."""
        with pytest.raises(InvalidCursorError):
            ThreadCursor.decode(token)

    def test_reply_cursor_is_not_a_thread_cursor(self):
        """A reply cursor cannot be replayed against a thread."""
        token = ReplyCursor(parent_id=CommentId(1), id=CommentId(5)).encode()

        with pytest.raises(InvalidCursorError):
            ThreadCursor.decode(token)

    def test_naive_timestamp_is_rejected(self):
        """Cursors always carry a timezone."""
        raw = b'{"kind":"thread","created_at":"2026-01-01T00:00:00","id":3}'
        token = urlsafe_b64encode(raw).decode("ascii").rstrip("=")

        with pytest.raises(InvalidCursorError):
            ThreadCursor.decode(token)

    def test_oversized_token_is_rejected(self):
        with pytest.raises(InvalidCursorError):
            ThreadCursor.decode("A" * 1000)


class TestReplyCursor:
    """Tests for ReplyCursor."""

    def test_decode_for_same_parent(self):
        token = ReplyCursor(parent_id=CommentId(3), id=CommentId(9)).encode()

        cursor = ReplyCursor.decode(token, CommentId(3))

        assert cursor.id == 9
        assert cursor.parent_id == 3

    def test_cursor_of_another_parent_is_rejected(self):
        """Reply cursors are bound to the parent they were issued for."""
        token = ReplyCursor(parent_id=CommentId(3), id=CommentId(9)).encode()

        with pytest.raises(InvalidCursorError, match="another comment"):
            ReplyCursor.decode(token, CommentId(4))

    def test_thread_cursor_is_not_a_reply_cursor(self):
        token = ThreadCursor(
            created_at=datetime.now(timezone.utc), id=CommentId(1)
        ).encode()

        with pytest.raises(InvalidCursorError):
            ReplyCursor.decode(token, CommentId(1))


class TestHotCursor:
    """Tests for HotCursor."""

    def test_decode_returns_offset(self):
        assert HotCursor.decode(HotCursor(offset=40).encode()).offset == 40

    def test_negative_offset_is_rejected(self):
        raw = b'{"kind":"hot","offset":-5}'
        token = urlsafe_b64encode(raw).decode("ascii").rstrip("=")

        with pytest.raises(InvalidCursorError):
            HotCursor.decode(token)

    def test_cursors_do_not_cross_orders(self):
        """Hot and latest pagination each refuse the other's tokens."""
        thread_token = ThreadCursor(
            created_at=datetime.now(timezone.utc), id=CommentId(1)
        ).encode()
        hot_token = HotCursor(offset=20).encode()

        with pytest.raises(InvalidCursorError):
            HotCursor.decode(thread_token)
        with pytest.raises(InvalidCursorError):
            ThreadCursor.decode(hot_token)
