"""Store-backed implementation of Like repository."""

from typing import Any

from remark.domain.model import ArticleLike, CommentLike
from remark.domain.repository import LikeRepository
from remark.domain.value import CommentId, PostId, Username
from remark.persistence import paths
from remark.persistence.mappers import article_like_to_record, comment_like_to_record
from remark.persistence.store import DELETE, Store


def _create_if_absent(record: dict[str, Any]):
    return lambda current: None if current else record


def _delete_if_present(current: Any) -> Any:
    return DELETE if current else None


class StoreLikeRepository(LikeRepository):
    """LikeRepository over the document store.

    Flags live under articleLikes/{username}_{postId} and
    commentLikes/{username}_{postId}_{commentId}; article counters under
    articles/{postId}/likes. Reads here bypass the cache: callers use them
    to report counts right after changing them.
    """

    def __init__(self, store: Store) -> None:
        """Initialize repository with the store adapter.

        Args:
            store: Store adapter
        """
        self.store = store

    async def add_article_like(self, like: ArticleLike) -> bool:
        result = await self.store.transact(
            paths.article_like(like.username, like.post_id),
            _create_if_absent(article_like_to_record(like)),
        )
        return result.committed

    async def remove_article_like(self, username: Username, post_id: PostId) -> bool:
        result = await self.store.transact(
            paths.article_like(username, post_id), _delete_if_present
        )
        return result.committed

    async def has_article_like(self, username: Username, post_id: PostId) -> bool:
        record = await self.store.read(
            paths.article_like(username, post_id), use_cache=False
        )
        return record is not None

    async def add_comment_like(self, like: CommentLike) -> bool:
        result = await self.store.transact(
            paths.comment_like(like.username, like.post_id, like.comment_id),
            _create_if_absent(comment_like_to_record(like)),
        )
        return result.committed

    async def remove_comment_like(
        self, username: Username, post_id: PostId, comment_id: CommentId
    ) -> bool:
        result = await self.store.transact(
            paths.comment_like(username, post_id, comment_id), _delete_if_present
        )
        return result.committed

    async def has_comment_like(
        self, username: Username, post_id: PostId, comment_id: CommentId
    ) -> bool:
        record = await self.store.read(
            paths.comment_like(username, post_id, comment_id), use_cache=False
        )
        return record is not None

    async def increment_article_likes(self, post_id: PostId, delta: int) -> int:
        """Add delta to the counter; a missing counter counts as 0."""
        result = await self.store.transact(
            paths.article_likes_count(post_id),
            lambda current: max(0, int(current or 0) + delta),
        )
        return int(result.value or 0)

    async def count_article_likes(self, post_id: PostId) -> int:
        value = await self.store.read(
            paths.article_likes_count(post_id), use_cache=False
        )
        return max(0, int(value or 0))
