"""Store-backed implementation of Comment repository."""

from collections.abc import Iterable
from typing import Any, List, Optional

import logfire

from remark.domain.model import Comment
from remark.domain.repository import CommentRepository
from remark.domain.value import CommentId, PostId
from remark.persistence import paths
from remark.persistence.mappers import (
    comment_to_record,
    is_complete_comment,
    record_to_comment,
)
from remark.persistence.store import Store, WriteMode
from remark.util.clock import now_ms


def _counter(record: dict[str, Any], key: str) -> int:
    return max(0, int(record.get(key) or 0))


def _children(record: dict[str, Any]) -> dict[str, bool]:
    """Read the children field of a raw record as {id: True}.

    Older records store a list of ids or of {id} stubs; they are rewritten
    in the current shape by whichever transaction touches them next.
    """
    value = record.get("children") or {}
    if isinstance(value, dict):
        return {str(key): True for key in value}
    ids = (item.get("id") if isinstance(item, dict) else item for item in value)
    return {str(child_id): True for child_id in ids if child_id}


class StoreCommentRepository(CommentRepository):
    """CommentRepository over the document store.

    Comments of a post live under comments/{postId}/{commentId}.
    """

    def __init__(self, store: Store) -> None:
        """Initialize repository with the store adapter.

        Args:
            store: Store adapter
        """
        self.store = store

    async def find_by_id(
        self, post_id: PostId, comment_id: CommentId, fresh: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID."""
        record = await self.store.read(
            paths.comment(post_id, comment_id), use_cache=not fresh
        )
        if not is_complete_comment(record):
            return None
        return record_to_comment(post_id, comment_id, record)

    async def find_by_post(self, post_id: PostId, fresh: bool = False) -> List[Comment]:
        """Find all comments for a post, skipping creation placeholders."""
        records = (
            await self.store.read(paths.post_comments(post_id), use_cache=not fresh)
            or {}
        )
        comments = []
        for comment_id, record in records.items():
            if not is_complete_comment(record):
                logfire.debug(
                    "Skipping incomplete comment record",
                    post_id=post_id,
                    comment_id=comment_id,
                )
                continue
            comments.append(record_to_comment(post_id, CommentId(comment_id), record))
        return comments

    async def reserve_id(self, post_id: PostId, parent_id: CommentId) -> CommentId:
        """Push a placeholder record holding only parentId and date."""
        key = await self.store.write(
            paths.post_comments(post_id),
            {"parentId": parent_id, "date": now_ms()},
            mode=WriteMode.CREATE,
        )
        return CommentId(key)

    async def count_siblings(
        self, post_id: PostId, parent_id: CommentId, exclude: CommentId
    ) -> int:
        """Count comments sharing a parent from one fresh read of the post."""
        records = (
            await self.store.read(paths.post_comments(post_id), use_cache=False) or {}
        )
        return sum(
            1
            for comment_id, record in records.items()
            if comment_id != exclude
            and isinstance(record, dict)
            and (record.get("parentId") or "0") == parent_id
        )

    async def save(self, comment: Comment) -> Comment:
        """Write the full comment record."""
        await self.store.write(
            paths.comment(comment.post_id, comment.id), comment_to_record(comment)
        )
        return comment

    async def update_content(
        self, post_id: PostId, comment_id: CommentId, text: str, last_sync: int
    ) -> Optional[Comment]:
        """Replace the text of an existing comment."""

        def apply(record: Any) -> Any:
            if not is_complete_comment(record):
                return None
            record["comment"] = text
            record["lastSync"] = last_sync
            return record

        result = await self.store.transact(paths.comment(post_id, comment_id), apply)
        if not result.committed:
            return None
        return record_to_comment(post_id, comment_id, result.value)

    async def link_child(
        self, post_id: PostId, parent_id: CommentId, child_id: CommentId
    ) -> bool:
        """Add child_id to the parent's children."""

        def apply(record: Any) -> Any:
            if not is_complete_comment(record):
                return None
            children = _children(record)
            children[child_id] = True
            record["children"] = children
            return record

        result = await self.store.transact(paths.comment(post_id, parent_id), apply)
        return result.committed

    async def unlink_child(
        self, post_id: PostId, parent_id: CommentId, child_id: CommentId
    ) -> bool:
        """Remove child_id from the parent's children."""

        def apply(record: Any) -> Any:
            if not is_complete_comment(record):
                return None
            children = _children(record)
            children.pop(child_id, None)
            record["children"] = children
            return record

        result = await self.store.transact(paths.comment(post_id, parent_id), apply)
        return result.committed

    async def increment_likes(
        self, post_id: PostId, comment_id: CommentId, delta: int
    ) -> Optional[Comment]:
        """Add delta to likes, never going below zero."""

        def apply(record: Any) -> Any:
            if not is_complete_comment(record):
                return None
            record["likes"] = max(0, _counter(record, "likes") + delta)
            return record

        result = await self.store.transact(paths.comment(post_id, comment_id), apply)
        if not result.committed:
            return None
        return record_to_comment(post_id, comment_id, result.value)

    async def update_total_likes(
        self,
        post_id: PostId,
        comment_id: CommentId,
        children_total: int,
        last_sync: int,
    ) -> Optional[Comment]:
        """Set totalLikes from the stored likes and the children's totals."""

        def apply(record: Any) -> Any:
            if not is_complete_comment(record):
                return None
            record["totalLikes"] = _counter(record, "likes") + max(0, children_total)
            record["lastSync"] = last_sync
            return record

        result = await self.store.transact(paths.comment(post_id, comment_id), apply)
        if not result.committed:
            return None
        return record_to_comment(post_id, comment_id, result.value)

    async def delete(self, post_id: PostId, comment_ids: Iterable[CommentId]) -> None:
        """Delete comments with one multi-path update under the post."""
        fields = {comment_id: None for comment_id in comment_ids}
        if not fields:
            return
        await self.store.write(
            paths.post_comments(post_id), fields, mode=WriteMode.MERGE
        )
