"""In-memory like ledger repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from discuss.domain.model import CommentLike
from discuss.domain.repository.like import LikeRepository
from discuss.domain.value import CommentId, LikeId, UserId


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: dict[tuple[UserId, CommentId], CommentLike] = {}
        self._next_id = 1

    def snapshot(self) -> tuple[dict[tuple[UserId, CommentId], CommentLike], int]:
        return dict(self._likes), self._next_id

    def restore(
        self, state: tuple[dict[tuple[UserId, CommentId], CommentLike], int]
    ) -> None:
        self._likes, self._next_id = dict(state[0]), state[1]

    async def find(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentLike]:
        """Find a user's like on a comment."""
        return self._likes.get((user_id, comment_id))

    async def save(self, like: CommentLike) -> CommentLike:
        """Save a like.

        Raises:
            IntegrityError: If the user already likes the comment
        """
        key = (like.user_id, like.comment_id)
        if key in self._likes:
            raise IntegrityError("Duplicate like", None, Exception())

        saved = like.model_copy(update={"id": LikeId(self._next_id)})
        self._likes[key] = saved
        self._next_id += 1
        return saved

    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like."""
        return self._likes.pop((user_id, comment_id), None) is not None

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        return sum(1 for like in self._likes.values() if like.comment_id == comment_id)

    async def find_liked_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Which of the comments the user likes."""
        return {cid for cid in comment_ids if (user_id, cid) in self._likes}
