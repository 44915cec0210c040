"""Comment domain service."""

from dataclasses import dataclass, field

import logfire

from remark.domain.error import ForbiddenError, NotFoundError
from remark.domain.model import Comment
from remark.domain.repository import CommentRepository
from remark.domain.value import ROOT_PARENT_ID, CommentId, PostId, Rule, require
from remark.util.clock import now_ms

from .base import Service
from .like_aggregator import LikeAggregator
from .user_service import UserService

STALE_AFTER_SECONDS = 300


@dataclass
class CommentTreeNode:
    """Node in a post's comment tree.

    Represents a comment and its replies, siblings ordered by floor.
    """

    comment: Comment
    children: list["CommentTreeNode"] = field(default_factory=list)


def _sibling_order(node: CommentTreeNode) -> tuple[int, int, str]:
    return (node.comment.floor, node.comment.date, node.comment.id)


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_aggregator: LikeAggregator,
        user_service: UserService,
        stale_after_seconds: int = STALE_AFTER_SECONDS,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            like_aggregator: Keeps subtree like totals in step with the tree
            user_service: User domain service (admin checks)
            stale_after_seconds: Age of lastSync that triggers a background refresh
        """
        self.comment_repository = comment_repository
        self.like_aggregator = like_aggregator
        self.user_service = user_service
        self.stale_after_seconds = stale_after_seconds

    async def add(
        self,
        post_id: str,
        name: str,
        email: str | None,
        comment: str,
        parent_id: str | None = ROOT_PARENT_ID,
        is_guest: bool = False,
    ) -> Comment:
        """Add a comment to a post or reply to another comment.

        A reply to a comment that does not exist becomes a top-level comment.

        Args:
            post_id: Post ID
            name: Display name of the author
            email: Author email (optional)
            comment: Comment text
            parent_id: Parent comment ID ("0" or empty for top-level)
            is_guest: Whether the author is not a registered user

        Returns:
            Created comment

        Raises:
            ValidationError: If any field fails validation
        """
        post = PostId(require(post_id, Rule.ID, "postId"))
        name = require(name, Rule.NAME, "name")
        text = require(comment, Rule.COMMENT, "comment")
        email = require(email, Rule.EMAIL, "email") if email and email.strip() else ""
        parent = ROOT_PARENT_ID
        if parent_id and parent_id.strip():
            parent = CommentId(parent_id.strip())
        if parent != ROOT_PARENT_ID:
            parent = CommentId(require(parent, Rule.ID, "parentId"))

        return await self._add(post, name, email, text, parent, is_guest, retry=True)

    async def _add(
        self,
        post_id: PostId,
        name: str,
        email: str,
        text: str,
        parent_id: CommentId,
        is_guest: bool,
        retry: bool,
    ) -> Comment:
        with logfire.span(
            "comment_service.add",
            post_id=post_id,
            parent_id=parent_id,
            is_guest=is_guest,
        ):
            if parent_id != ROOT_PARENT_ID:
                parent = await self.comment_repository.find_by_id(
                    post_id, parent_id, fresh=True
                )
                if parent is None:
                    logfire.warn(
                        "Parent comment not found, posting as top-level",
                        post_id=post_id,
                        parent_id=parent_id,
                    )
                    parent_id = ROOT_PARENT_ID

            comment_id = await self.comment_repository.reserve_id(post_id, parent_id)
            siblings = await self.comment_repository.count_siblings(
                post_id, parent_id, exclude=comment_id
            )

            now = now_ms()
            created = await self.comment_repository.save(
                Comment(
                    id=comment_id,
                    post_id=post_id,
                    parent_id=parent_id,
                    name=name,
                    email=email,
                    comment=text,
                    date=now,
                    floor=siblings + 1,
                    likes=0,
                    total_likes=0,
                    children=frozenset(),
                    last_sync=now,
                    is_guest=is_guest,
                )
            )

            if parent_id != ROOT_PARENT_ID:
                linked = await self.comment_repository.link_child(
                    post_id, parent_id, comment_id
                )
                if not linked:
                    # Parent deleted since the existence check
                    await self.comment_repository.delete(post_id, [comment_id])
                    logfire.warn(
                        "Parent vanished while replying",
                        post_id=post_id,
                        parent_id=parent_id,
                        comment_id=comment_id,
                    )
                    if not retry:
                        raise NotFoundError("Comment", f"{post_id}/{parent_id}")
                    return await self._add(
                        post_id, name, email, text, ROOT_PARENT_ID, is_guest, retry=False
                    )
                await self.like_aggregator.propagate_to_ancestors(post_id, parent_id)

            logfire.info(
                "Comment created",
                post_id=post_id,
                comment_id=comment_id,
                parent_id=parent_id,
                floor=created.floor,
            )
            return created

    async def list_comments(self, post_id: str) -> list[CommentTreeNode]:
        """Get a post's comments as a tree.

        Comments whose parent is missing are attached to the root. Comments
        whose totals have not been recomputed for a while are refreshed in
        the background; the returned tree shows the stored values.

        Args:
            post_id: Post ID

        Returns:
            Top-level nodes, ordered by floor
        """
        post = PostId(require(post_id, Rule.ID, "postId"))
        with logfire.span("comment_service.list_comments", post_id=post):
            comments = await self.comment_repository.find_by_post(post)
            roots = self._build_tree(post, comments)
            self._refresh_stale(post, roots)
            logfire.info("Comments retrieved for post", post_id=post, count=len(comments))
            return roots

    def _build_tree(
        self, post_id: PostId, comments: list[Comment]
    ) -> list[CommentTreeNode]:
        nodes = {c.id: CommentTreeNode(comment=c) for c in comments}
        roots: list[CommentTreeNode] = []

        for node in nodes.values():
            parent_id = node.comment.parent_id
            if parent_id == ROOT_PARENT_ID:
                roots.append(node)
            elif parent_id in nodes and parent_id != node.comment.id:
                nodes[parent_id].children.append(node)
            else:
                logfire.warn(
                    "Orphan comment attached to root",
                    post_id=post_id,
                    comment_id=node.comment.id,
                    parent_id=parent_id,
                )
                roots.append(node)

        # Nodes on a parent cycle are unreachable from the root
        reached: set[CommentId] = set()
        stack = list(roots)
        while stack:
            node = stack.pop()
            reached.add(node.comment.id)
            stack.extend(node.children)
        for comment_id, node in nodes.items():
            if comment_id not in reached:
                logfire.error(
                    "Comment on a parent cycle attached to root",
                    post_id=post_id,
                    comment_id=comment_id,
                )
                for other in nodes.values():
                    if node in other.children:
                        other.children.remove(node)
                roots.append(node)
                stack = [node]
                while stack:
                    current = stack.pop()
                    reached.add(current.comment.id)
                    stack.extend(current.children)

        for node in nodes.values():
            node.children.sort(key=_sibling_order)
        roots.sort(key=_sibling_order)
        return roots

    def _refresh_stale(self, post_id: PostId, roots: list[CommentTreeNode]) -> None:
        """Schedule a refresh for the top-most stale comment of each branch."""
        now = now_ms()
        stale_after_ms = self.stale_after_seconds * 1000
        stack = list(roots)
        while stack:
            node = stack.pop()
            if node.comment.is_stale(now, stale_after_ms):
                self.like_aggregator.schedule_refresh(post_id, node.comment.id)
            else:
                stack.extend(node.children)

    async def get(self, post_id: str, comment_id: str) -> Comment:
        """Get a comment by ID.

        Raises:
            ValidationError: If an ID is malformed
            NotFoundError: If the comment does not exist
        """
        post = PostId(require(post_id, Rule.ID, "postId"))
        comment_id = CommentId(require(comment_id, Rule.ID, "commentId"))
        with logfire.span("comment_service.get", post_id=post, comment_id=comment_id):
            comment = await self.comment_repository.find_by_id(post, comment_id)
            if comment is None:
                logfire.warn("Comment not found", post_id=post, comment_id=comment_id)
                raise NotFoundError("Comment", f"{post}/{comment_id}")
            return comment

    async def edit(self, post_id: str, comment_id: str, comment: str) -> Comment:
        """Update the text of a comment.

        Args:
            post_id: Post ID
            comment_id: Comment ID
            comment: New text

        Returns:
            Updated comment

        Raises:
            ValidationError: If an ID or the text is invalid
            NotFoundError: If the comment does not exist
        """
        post = PostId(require(post_id, Rule.ID, "postId"))
        comment_id = CommentId(require(comment_id, Rule.ID, "commentId"))
        text = require(comment, Rule.COMMENT, "comment")

        with logfire.span(
            "comment_service.edit",
            post_id=post,
            comment_id=comment_id,
            text_length=len(text),
        ):
            updated = await self.comment_repository.update_content(
                post, comment_id, text, now_ms()
            )
            if updated is None:
                logfire.warn(
                    "Comment not found for edit", post_id=post, comment_id=comment_id
                )
                raise NotFoundError("Comment", f"{post}/{comment_id}")

            logfire.info("Comment edited", post_id=post, comment_id=comment_id)
            return updated

    async def delete(
        self, post_id: str, comment_id: str, requester: str | None
    ) -> list[CommentId]:
        """Delete a comment and all of its replies.

        Only admins may delete. The removed likes leave the ancestors'
        totals, which are recomputed from the parent up.

        Args:
            post_id: Post ID
            comment_id: Comment ID
            requester: Username of the caller

        Returns:
            IDs of the deleted comments, the target first

        Raises:
            ValidationError: If an ID is malformed
            ForbiddenError: If the requester is not an admin
            NotFoundError: If the comment does not exist
        """
        post = PostId(require(post_id, Rule.ID, "postId"))
        comment_id = CommentId(require(comment_id, Rule.ID, "commentId"))

        with logfire.span(
            "comment_service.delete",
            post_id=post,
            comment_id=comment_id,
            requester=requester,
        ):
            if not await self.user_service.is_admin(requester):
                logfire.warn(
                    "Comment delete by non-admin",
                    post_id=post,
                    comment_id=comment_id,
                    requester=requester,
                )
                raise ForbiddenError("delete comments", requester)

            comments = {
                c.id: c for c in await self.comment_repository.find_by_post(post, fresh=True)
            }
            target = comments.get(comment_id)
            if target is None:
                raise NotFoundError("Comment", f"{post}/{comment_id}")

            deleted = self._subtree_ids(target, comments)
            await self.comment_repository.delete(post, deleted)

            if target.parent_id != ROOT_PARENT_ID:
                await self.comment_repository.unlink_child(
                    post, target.parent_id, comment_id
                )
                await self.like_aggregator.propagate_to_ancestors(post, target.parent_id)

            logfire.info(
                "Comment deleted",
                post_id=post,
                comment_id=comment_id,
                deleted_count=len(deleted),
            )
            return deleted

    @staticmethod
    def _subtree_ids(
        target: Comment, comments: dict[CommentId, Comment]
    ) -> list[CommentId]:
        """IDs of a comment and its descendants, by children links or parentId."""
        replies: dict[CommentId, set[CommentId]] = {}
        for c in comments.values():
            replies.setdefault(c.parent_id, set()).add(c.id)

        ordered = [target.id]
        seen = {target.id}
        index = 0
        while index < len(ordered):
            current = comments.get(ordered[index])
            index += 1
            if current is None:
                continue
            for child_id in sorted(current.children | replies.get(current.id, set())):
                if child_id not in seen:
                    seen.add(child_id)
                    ordered.append(child_id)
        return ordered
