"""Like aggregation domain service.

Owns per-user like flags, direct like counters, and the denormalized
totalLikes of every comment (its own likes plus its children's totals).

Each like is a two-state machine per (user, target):

    absent --add--> present --remove--> absent

Both transitions are transactions on the flag record. A request that finds
the flag already in the target state changes nothing and reports so
(changed=False), which makes repeated and racing requests idempotent.
Counter updates follow a successful transition; subtree totals are then
refreshed from the liked comment up to its top-level ancestor.
Recomputation is serialized per post within the process, so once concurrent
likes settle every total reflects all of them.
"""

import asyncio
import weakref

import logfire

from remark.domain.error import GhostTargetError
from remark.domain.model import (
    ArticleLike,
    ArticleLikeResult,
    Comment,
    CommentLike,
    CommentLikeResult,
)
from remark.domain.repository import CommentRepository, LikeRepository
from remark.domain.value import (
    ROOT_PARENT_ID,
    CommentId,
    PostId,
    Rule,
    Username,
    require,
)
from remark.util.clock import now_ms

from .base import Service

MAX_RECURSION_DEPTH = 20


def _ids(
    username: str, post_id: str, comment_id: str | None = None
) -> tuple[Username, PostId, CommentId | None]:
    user = Username(require(username, Rule.ID, "userId"))
    post = PostId(require(post_id, Rule.ID, "postId"))
    if comment_id is None:
        return user, post, None
    return user, post, CommentId(require(comment_id, Rule.ID, "commentId"))


def _post_and_comment(post_id: str, comment_id: str) -> tuple[PostId, CommentId]:
    return (
        PostId(require(post_id, Rule.ID, "postId")),
        CommentId(require(comment_id, Rule.ID, "commentId")),
    )


class LikeAggregator(Service):
    """Domain service for likes and subtree like totals."""

    def __init__(
        self,
        like_repository: LikeRepository,
        comment_repository: CommentRepository,
        max_recursion_depth: int = MAX_RECURSION_DEPTH,
    ) -> None:
        """Initialize like aggregator.

        Args:
            like_repository: Like repository
            comment_repository: Comment repository
            max_recursion_depth: Bound for subtree recursion and ancestor walks
        """
        self.like_repository = like_repository
        self.comment_repository = comment_repository
        self.max_recursion_depth = max_recursion_depth
        self._refreshes: dict[tuple[PostId, CommentId], asyncio.Task] = {}
        self._post_locks: weakref.WeakValueDictionary[PostId, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock(self, post_id: PostId) -> asyncio.Lock:
        """Serializes total recomputation within one post."""
        lock = self._post_locks.get(post_id)
        if lock is None:
            lock = asyncio.Lock()
            self._post_locks[post_id] = lock
        return lock

    # Article likes

    async def add_article_like(self, username: str, post_id: str) -> ArticleLikeResult:
        """Like an article.

        Args:
            username: User liking the article
            post_id: Article ID

        Returns:
            Result with changed=False if the user had already liked it
        """
        user, post, _ = _ids(username, post_id)
        with logfire.span("like_aggregator.add_article_like", username=user, post_id=post):
            created = await self.like_repository.add_article_like(
                ArticleLike(username=user, post_id=post)
            )
            if created:
                count = await self.like_repository.increment_article_likes(post, 1)
                logfire.info("Article liked", username=user, post_id=post, likes=count)
            else:
                count = await self.like_repository.count_article_likes(post)
                logfire.info("Article already liked", username=user, post_id=post)
            return ArticleLikeResult(changed=created, likes_count=count)

    async def remove_article_like(
        self, username: str, post_id: str
    ) -> ArticleLikeResult:
        """Unlike an article.

        Returns:
            Result with changed=False if the user had not liked it
        """
        user, post, _ = _ids(username, post_id)
        with logfire.span(
            "like_aggregator.remove_article_like", username=user, post_id=post
        ):
            removed = await self.like_repository.remove_article_like(user, post)
            if removed:
                count = await self.like_repository.increment_article_likes(post, -1)
                logfire.info("Article unliked", username=user, post_id=post, likes=count)
            else:
                count = await self.like_repository.count_article_likes(post)
                logfire.info("Article was not liked", username=user, post_id=post)
            return ArticleLikeResult(changed=removed, likes_count=count)

    async def has_liked_article(self, username: str, post_id: str) -> bool:
        user, post, _ = _ids(username, post_id)
        return await self.like_repository.has_article_like(user, post)

    async def get_article_likes_count(self, post_id: str) -> int:
        post = PostId(require(post_id, Rule.ID, "postId"))
        return await self.like_repository.count_article_likes(post)

    # Comment likes

    async def add_comment_like(
        self, username: str, post_id: str, comment_id: str
    ) -> CommentLikeResult:
        """Like a comment.

        Args:
            username: User liking the comment
            post_id: Post ID
            comment_id: Comment ID

        Returns:
            Result with the counters read back after the update

        Raises:
            ValidationError: If an ID is malformed
            GhostTargetError: If the comment does not exist
        """
        user, post, comment_id = _ids(username, post_id, comment_id)
        with logfire.span(
            "like_aggregator.add_comment_like",
            username=user,
            post_id=post,
            comment_id=comment_id,
        ):
            target = await self._require_comment(post, comment_id)

            created = await self.like_repository.add_comment_like(
                CommentLike(username=user, post_id=post, comment_id=comment_id)
            )
            if created:
                updated = await self.comment_repository.increment_likes(
                    post, comment_id, 1
                )
                if updated is None:
                    # Deleted between the check and the counter update
                    await self.like_repository.remove_comment_like(user, post, comment_id)
                    logfire.warn(
                        "Comment vanished while liking",
                        post_id=post,
                        comment_id=comment_id,
                    )
                    raise GhostTargetError(post, comment_id)
                await self._settle(post, comment_id, target.parent_id)
                logfire.info(
                    "Comment liked", username=user, post_id=post, comment_id=comment_id
                )
            else:
                logfire.info(
                    "Comment already liked",
                    username=user,
                    post_id=post,
                    comment_id=comment_id,
                )

            return await self._comment_result(post, comment_id, created)

    async def remove_comment_like(
        self, username: str, post_id: str, comment_id: str
    ) -> CommentLikeResult:
        """Unlike a comment.

        Raises:
            ValidationError: If an ID is malformed
            GhostTargetError: If the comment does not exist
        """
        user, post, comment_id = _ids(username, post_id, comment_id)
        with logfire.span(
            "like_aggregator.remove_comment_like",
            username=user,
            post_id=post,
            comment_id=comment_id,
        ):
            target = await self._require_comment(post, comment_id)

            removed = await self.like_repository.remove_comment_like(
                user, post, comment_id
            )
            if removed:
                updated = await self.comment_repository.increment_likes(
                    post, comment_id, -1
                )
                if updated is None:
                    logfire.warn(
                        "Comment vanished while unliking",
                        post_id=post,
                        comment_id=comment_id,
                    )
                    raise GhostTargetError(post, comment_id)
                await self._settle(post, comment_id, target.parent_id)
                logfire.info(
                    "Comment unliked", username=user, post_id=post, comment_id=comment_id
                )
            else:
                logfire.info(
                    "Comment was not liked",
                    username=user,
                    post_id=post,
                    comment_id=comment_id,
                )

            return await self._comment_result(post, comment_id, removed)

    async def has_liked_comment(
        self, username: str, post_id: str, comment_id: str
    ) -> bool:
        user, post, comment_id = _ids(username, post_id, comment_id)
        return await self.like_repository.has_comment_like(user, post, comment_id)

    async def get_comment_direct_likes_count(self, post_id: str, comment_id: str) -> int:
        """Direct likes of a comment (0 if it does not exist)."""
        post, comment_id = _post_and_comment(post_id, comment_id)
        comment = await self.comment_repository.find_by_id(post, comment_id, fresh=True)
        return comment.likes if comment else 0

    async def get_comment_total_likes_count(self, post_id: str, comment_id: str) -> int:
        """Subtree total likes of a comment (0 if it does not exist)."""
        post, comment_id = _post_and_comment(post_id, comment_id)
        comment = await self.comment_repository.find_by_id(post, comment_id, fresh=True)
        return comment.total_likes if comment else 0

    async def _require_comment(self, post_id: PostId, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(
            post_id, comment_id, fresh=True
        )
        if comment is None:
            logfire.warn("Like on missing comment", post_id=post_id, comment_id=comment_id)
            raise GhostTargetError(post_id, comment_id)
        return comment

    async def _comment_result(
        self, post_id: PostId, comment_id: CommentId, changed: bool
    ) -> CommentLikeResult:
        comment = await self._require_comment(post_id, comment_id)
        return CommentLikeResult(
            changed=changed,
            direct_likes_count=comment.likes,
            total_likes_count=comment.total_likes,
        )

    # Subtree totals

    async def recompute_subtree(
        self, post_id: PostId, comment_id: CommentId, depth: int = 0
    ) -> int:
        """Recompute totalLikes for a comment and all of its descendants.

        Post-order: children first, then the node itself. A missing node
        counts as 0. Recursion stops at max_recursion_depth.

        Args:
            post_id: Post ID
            comment_id: Root of the subtree
            depth: Current recursion depth

        Returns:
            The node's new totalLikes
        """
        async with self._lock(post_id):
            node = await self._recompute(post_id, comment_id, depth)
        return node.total_likes if node else 0

    async def _recompute(
        self, post_id: PostId, comment_id: CommentId, depth: int
    ) -> Comment | None:
        if depth > self.max_recursion_depth:
            logfire.warn(
                "Subtree recursion depth exceeded",
                post_id=post_id,
                comment_id=comment_id,
                depth=depth,
            )
            return None

        node = await self.comment_repository.find_by_id(post_id, comment_id, fresh=True)
        if node is None:
            return None

        children_total = 0
        for child_id in sorted(node.children):
            child = await self._recompute(post_id, child_id, depth + 1)
            if child is not None:
                children_total += child.total_likes

        # Guarded: a node deleted meanwhile is not written back
        return await self.comment_repository.update_total_likes(
            post_id, comment_id, children_total, now_ms()
        )

    async def _settle(
        self, post_id: PostId, comment_id: CommentId, parent_id: CommentId
    ) -> None:
        """Recompute a liked comment's subtree, then its ancestors."""
        async with self._lock(post_id):
            await self._recompute(post_id, comment_id, 0)
            await self._walk_up(post_id, parent_id)

    async def propagate_to_ancestors(
        self, post_id: PostId, start_id: CommentId
    ) -> list[CommentId]:
        """Recompute totalLikes from a comment up to its top-level ancestor.

        Each step recomputes the whole subtree of the node, so a stale
        descendant total is repaired on the way up.

        The walk stops at the root, at a missing node, at an ID already
        visited (a parent cycle), or after max_recursion_depth steps.

        Args:
            post_id: Post ID
            start_id: First comment to refresh

        Returns:
            IDs refreshed, starting with start_id
        """
        async with self._lock(post_id):
            return await self._walk_up(post_id, start_id)

    async def _walk_up(
        self, post_id: PostId, start_id: CommentId
    ) -> list[CommentId]:
        with logfire.span(
            "like_aggregator.propagate_to_ancestors",
            post_id=post_id,
            start_id=start_id,
        ):
            refreshed: list[CommentId] = []
            visited: set[CommentId] = set()
            current = start_id

            while current != ROOT_PARENT_ID:
                if current in visited:
                    logfire.error(
                        "Cycle in comment parents",
                        post_id=post_id,
                        comment_id=current,
                    )
                    break
                if len(refreshed) >= self.max_recursion_depth:
                    logfire.warn(
                        "Ancestor walk depth exceeded",
                        post_id=post_id,
                        start_id=start_id,
                    )
                    break
                visited.add(current)

                node = await self._recompute(post_id, current, 0)
                if node is None:
                    break
                refreshed.append(current)
                current = node.parent_id

            return refreshed

    # Background refresh

    def schedule_refresh(self, post_id: PostId, comment_id: CommentId) -> asyncio.Task:
        """Recompute a subtree and its ancestors in the background.

        A refresh already running for the same comment is reused.

        Returns:
            The running task
        """
        key = (post_id, comment_id)
        task = self._refreshes.get(key)
        if task is not None and not task.done():
            return task

        task = asyncio.create_task(self._refresh(post_id, comment_id))
        self._refreshes[key] = task
        task.add_done_callback(lambda done: self._forget(key, done))
        return task

    def _forget(self, key: tuple[PostId, CommentId], task: asyncio.Task) -> None:
        if self._refreshes.get(key) is task:
            del self._refreshes[key]

    async def _refresh(self, post_id: PostId, comment_id: CommentId) -> None:
        try:
            await self.recompute_subtree(post_id, comment_id)
            node = await self.comment_repository.find_by_id(
                post_id, comment_id, fresh=True
            )
            if node is not None:
                await self.propagate_to_ancestors(post_id, node.parent_id)
        except Exception:
            logfire.exception(
                "Background refresh failed", post_id=post_id, comment_id=comment_id
            )

    @property
    def pending_refreshes(self) -> int:
        return sum(1 for task in self._refreshes.values() if not task.done())

    async def drain(self) -> None:
        """Wait for every background refresh in flight."""
        while True:
            running = [t for t in self._refreshes.values() if not t.done()]
            if not running:
                return
            await asyncio.gather(*running)
