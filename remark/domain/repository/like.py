"""Like repository interface."""

from abc import ABC, abstractmethod

from remark.domain.model.like import ArticleLike, CommentLike
from remark.domain.value import CommentId, PostId, Username


class LikeRepository(ABC):
    """Repository for like records and article like counters.

    Like records are flags: one exists exactly while the like is in effect.
    Adding and removing are transactions on the flag, so repeated or
    racing requests from the same user change it at most once.
    """

    @abstractmethod
    async def add_article_like(self, like: ArticleLike) -> bool:
        """Create an article like record if absent.

        Returns:
            True if created, False if the user already liked the article
        """
        pass

    @abstractmethod
    async def remove_article_like(self, username: Username, post_id: PostId) -> bool:
        """Delete an article like record if present.

        Returns:
            True if deleted, False if there was nothing to delete
        """
        pass

    @abstractmethod
    async def has_article_like(self, username: Username, post_id: PostId) -> bool:
        pass

    @abstractmethod
    async def add_comment_like(self, like: CommentLike) -> bool:
        """Create a comment like record if absent.

        Returns:
            True if created, False if the user already liked the comment
        """
        pass

    @abstractmethod
    async def remove_comment_like(
        self, username: Username, post_id: PostId, comment_id: CommentId
    ) -> bool:
        """Delete a comment like record if present.

        Returns:
            True if deleted, False if there was nothing to delete
        """
        pass

    @abstractmethod
    async def has_comment_like(
        self, username: Username, post_id: PostId, comment_id: CommentId
    ) -> bool:
        pass

    @abstractmethod
    async def increment_article_likes(self, post_id: PostId, delta: int) -> int:
        """Atomically add delta to an article's like counter (floored at 0).

        Returns:
            The new count
        """
        pass

    @abstractmethod
    async def count_article_likes(self, post_id: PostId) -> int:
        """Read an article's like counter (0 if never liked)."""
        pass
