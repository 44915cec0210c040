"""Comment repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import List, Optional

from remark.domain.model.comment import Comment
from remark.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Mutations that must not recreate a concurrently deleted comment
    (content edits, counter updates, child links) are guarded: they do
    nothing and return None/False when the comment is gone.
    """

    @abstractmethod
    async def find_by_id(
        self, post_id: PostId, comment_id: CommentId, fresh: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            post_id: The post the comment belongs to
            comment_id: The comment's ID
            fresh: Bypass the read cache

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId, fresh: bool = False) -> List[Comment]:
        """Find all comments for a post, in storage order.

        Args:
            post_id: The post ID
            fresh: Bypass the read cache

        Returns:
            List of comments (empty if the post has none)
        """
        pass

    @abstractmethod
    async def reserve_id(self, post_id: PostId, parent_id: CommentId) -> CommentId:
        """Create a placeholder record under a new, time-ordered ID.

        Args:
            post_id: The post ID
            parent_id: Parent of the comment being created

        Returns:
            The new comment ID
        """
        pass

    @abstractmethod
    async def count_siblings(
        self, post_id: PostId, parent_id: CommentId, exclude: CommentId
    ) -> int:
        """Count stored comments with the given parent, placeholders included.

        Args:
            post_id: The post ID
            parent_id: Parent ID to match
            exclude: Comment ID not to count (the one being created)

        Returns:
            Number of matching comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Write a comment record, replacing whatever is stored under its ID.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, post_id: PostId, comment_id: CommentId, text: str, last_sync: int
    ) -> Optional[Comment]:
        """Replace a comment's text.

        Args:
            post_id: The post ID
            comment_id: The comment ID
            text: New, already sanitized text
            last_sync: Timestamp to store in lastSync (ms)

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def link_child(
        self, post_id: PostId, parent_id: CommentId, child_id: CommentId
    ) -> bool:
        """Add a child ID to a comment's children.

        Returns:
            False if the parent does not exist
        """
        pass

    @abstractmethod
    async def unlink_child(
        self, post_id: PostId, parent_id: CommentId, child_id: CommentId
    ) -> bool:
        """Remove a child ID from a comment's children.

        Returns:
            False if the parent does not exist
        """
        pass

    @abstractmethod
    async def increment_likes(
        self, post_id: PostId, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        """Atomically add delta to the direct like counter (floored at 0).

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def update_total_likes(
        self,
        post_id: PostId,
        comment_id: CommentId,
        children_total: int,
        last_sync: int,
    ) -> Optional[Comment]:
        """Set totalLikes to the stored likes plus children_total.

        Args:
            post_id: The post ID
            comment_id: The comment ID
            children_total: Sum of the children's totalLikes
            last_sync: Timestamp to store in lastSync (ms)

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId, comment_ids: Iterable[CommentId]) -> None:
        """Delete comments in one multi-path update.

        Args:
            post_id: The post ID
            comment_ids: IDs to remove
        """
        pass
