"""Unit tests for LikeAggregator."""

import asyncio

import pytest

from remark.domain.error import GhostTargetError, ValidationError
from remark.domain.repository import CommentRepository
from remark.domain.service import CommentService, LikeAggregator
from remark.domain.value import CommentId, PostId
from remark.persistence.backend import StoreBackend
from tests.harness import create_env_fixture, make_thread

unit_env = create_env_fixture()

POST = "post-1"


async def totals(comment_repo: CommentRepository, *comments) -> list[int]:
    result = []
    for comment in comments:
        stored = await comment_repo.find_by_id(PostId(POST), comment.id, fresh=True)
        result.append(stored.total_likes)
    return result


class TestArticleLikes:
    """Tests for article likes."""

    @pytest.mark.asyncio
    async def test_like_is_idempotent(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)

        first = await like_aggregator.add_article_like("alice", POST)
        second = await like_aggregator.add_article_like("alice", POST)

        assert (first.changed, first.likes_count) == (True, 1)
        assert (second.changed, second.likes_count) == (False, 1)
        assert await like_aggregator.has_liked_article("alice", POST) is True

    @pytest.mark.asyncio
    async def test_concurrent_likes_from_one_user_count_once(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)

        results = await asyncio.gather(
            *(like_aggregator.add_article_like("alice", POST) for _ in range(5))
        )

        assert sum(r.changed for r in results) == 1
        assert await like_aggregator.get_article_likes_count(POST) == 1

    @pytest.mark.asyncio
    async def test_add_and_remove_balance(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        for user in ("alice", "bob", "carol"):
            await like_aggregator.add_article_like(user, POST)

        removed = await like_aggregator.remove_article_like("bob", POST)
        again = await like_aggregator.remove_article_like("bob", POST)

        assert (removed.changed, removed.likes_count) == (True, 2)
        assert (again.changed, again.likes_count) == (False, 2)
        assert await like_aggregator.has_liked_article("bob", POST) is False

    @pytest.mark.asyncio
    async def test_unlike_without_like_keeps_counter_at_zero(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)

        result = await like_aggregator.remove_article_like("alice", POST)

        assert (result.changed, result.likes_count) == (False, 0)

    @pytest.mark.asyncio
    async def test_ids_are_validated(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        backend = await unit_env.get(StoreBackend)

        with pytest.raises(ValidationError):
            await like_aggregator.add_article_like("", POST)
        with pytest.raises(ValidationError):
            await like_aggregator.add_article_like("alice", "a/b")

        assert backend.snapshot() == {}


class TestCommentLikes:
    """Tests for comment likes and subtree totals."""

    @pytest.mark.asyncio
    async def test_like_updates_ancestors(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        a, b, c = await make_thread(comment_service, POST)

        result = await like_aggregator.add_comment_like("alice", POST, c.id)

        assert result.changed is True
        assert (result.direct_likes_count, result.total_likes_count) == (1, 1)
        assert await totals(comment_repo, a, b, c) == [1, 1, 1]

    @pytest.mark.asyncio
    async def test_totals_are_subtree_sums(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        a, b, c = await make_thread(comment_service, POST)
        d = await comment_service.add(POST, "Dan", "", "Another reply", parent_id=a.id)

        for user in ("alice", "bob"):
            await like_aggregator.add_comment_like(user, POST, c.id)
        await like_aggregator.add_comment_like("alice", POST, d.id)
        await like_aggregator.add_comment_like("carol", POST, a.id)

        assert await totals(comment_repo, a, b, c, d) == [4, 2, 2, 1]

    @pytest.mark.asyncio
    async def test_repeated_like_changes_nothing(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.add(POST, "Alice", "", "Hello")

        await like_aggregator.add_comment_like("bob", POST, comment.id)
        again = await like_aggregator.add_comment_like("bob", POST, comment.id)

        assert again.changed is False
        assert again.direct_likes_count == 1
        assert await like_aggregator.has_liked_comment("bob", POST, comment.id) is True

    @pytest.mark.asyncio
    async def test_unlike_restores_totals(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        a, b, c = await make_thread(comment_service, POST)
        await like_aggregator.add_comment_like("alice", POST, c.id)

        result = await like_aggregator.remove_comment_like("alice", POST, c.id)
        again = await like_aggregator.remove_comment_like("alice", POST, c.id)

        assert result.changed is True
        assert again.changed is False
        assert await totals(comment_repo, a, b, c) == [0, 0, 0]

    @pytest.mark.asyncio
    async def test_like_on_missing_comment_is_ghost(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        backend = await unit_env.get(StoreBackend)

        with pytest.raises(GhostTargetError):
            await like_aggregator.add_comment_like("alice", POST, "gone")
        with pytest.raises(GhostTargetError):
            await like_aggregator.remove_comment_like("alice", POST, "gone")

        assert backend.snapshot() == {}

    @pytest.mark.asyncio
    async def test_comment_deleted_mid_like_rolls_back_flag(self, unit_env, monkeypatch):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_service.add(POST, "Alice", "", "Hello")
        increment_likes = comment_repo.increment_likes

        async def delete_then_increment(post_id, comment_id, delta):
            await comment_repo.delete(post_id, [comment_id])
            return await increment_likes(post_id, comment_id, delta)

        monkeypatch.setattr(comment_repo, "increment_likes", delete_then_increment)

        with pytest.raises(GhostTargetError):
            await like_aggregator.add_comment_like("bob", POST, comment.id)

        assert await like_aggregator.has_liked_comment("bob", POST, comment.id) is False

    @pytest.mark.asyncio
    async def test_counts_of_missing_comment_are_zero(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)

        assert await like_aggregator.get_comment_direct_likes_count(POST, "gone") == 0
        assert await like_aggregator.get_comment_total_likes_count(POST, "gone") == 0

    @pytest.mark.asyncio
    async def test_concurrent_likes_settle_to_exact_totals(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        a, b, c = await make_thread(comment_service, POST)
        users = ["alice", "bob", "carol", "dave"]

        await asyncio.gather(
            *(like_aggregator.add_comment_like(user, POST, c.id) for user in users),
            *(like_aggregator.add_comment_like(user, POST, b.id) for user in users[:2]),
        )

        assert await totals(comment_repo, a, b, c) == [6, 6, 4]


class TestRecompute:
    """Tests for recompute_subtree and propagate_to_ancestors."""

    @pytest.mark.asyncio
    async def test_recompute_repairs_corrupted_totals(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        backend = await unit_env.get(StoreBackend)
        a, b, c = await make_thread(comment_service, POST)
        await backend.update(
            f"comments/{POST}",
            {
                f"{a.id}/likes": 1,
                f"{c.id}/likes": 3,
                f"{a.id}/totalLikes": 50,
                f"{b.id}/totalLikes": 50,
                f"{c.id}/totalLikes": 50,
            },
        )

        total = await like_aggregator.recompute_subtree(PostId(POST), a.id)

        assert total == 4
        assert await totals(comment_repo, a, b, c) == [4, 3, 3]

    @pytest.mark.asyncio
    async def test_liking_a_parent_repairs_stale_reply_totals(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        backend = await unit_env.get(StoreBackend)
        a, b, c = await make_thread(comment_service, POST)
        await backend.update(
            f"comments/{POST}", {f"{b.id}/likes": 3, f"{b.id}/totalLikes": 0}
        )

        result = await like_aggregator.add_comment_like("alice", POST, a.id)

        assert await totals(comment_repo, a, b, c) == [4, 3, 0]
        assert result.total_likes_count == 4

    @pytest.mark.asyncio
    async def test_propagation_repairs_stale_subtrees(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        backend = await unit_env.get(StoreBackend)
        a, b, c = await make_thread(comment_service, POST)
        await backend.update(
            f"comments/{POST}", {f"{c.id}/likes": 2, f"{c.id}/totalLikes": 0}
        )

        await like_aggregator.propagate_to_ancestors(PostId(POST), a.id)

        assert await totals(comment_repo, a, b, c) == [2, 2, 2]

    @pytest.mark.asyncio
    async def test_missing_child_counts_as_zero(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_service.add(POST, "Alice", "", "Hello")
        await comment_repo.link_child(PostId(POST), comment.id, CommentId("gone"))

        total = await like_aggregator.recompute_subtree(PostId(POST), comment.id)

        assert total == 0

    @pytest.mark.asyncio
    async def test_recompute_of_missing_comment_is_zero(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)

        assert await like_aggregator.recompute_subtree(PostId(POST), CommentId("x")) == 0

    @pytest.mark.asyncio
    async def test_recursion_is_bounded(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        backend = await unit_env.get(StoreBackend)
        # Two comments listing each other as children
        base = {"comment": "x", "name": "n", "likes": 1}
        await backend.set(
            f"comments/{POST}",
            {
                "x": {**base, "parentId": "y", "children": {"y": True}},
                "y": {**base, "parentId": "x", "children": {"x": True}},
            },
        )

        total = await like_aggregator.recompute_subtree(PostId(POST), CommentId("x"))

        assert total >= 1

    @pytest.mark.asyncio
    async def test_propagate_returns_refreshed_path(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        a, b, c = await make_thread(comment_service, POST)

        refreshed = await like_aggregator.propagate_to_ancestors(PostId(POST), c.id)

        assert refreshed == [c.id, b.id, a.id]

    @pytest.mark.asyncio
    async def test_propagate_stops_on_parent_cycle(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        backend = await unit_env.get(StoreBackend)
        base = {"comment": "x", "name": "n"}
        await backend.set(
            f"comments/{POST}",
            {
                "x": {**base, "parentId": "y"},
                "y": {**base, "parentId": "x"},
            },
        )

        refreshed = await like_aggregator.propagate_to_ancestors(
            PostId(POST), CommentId("x")
        )

        assert refreshed == ["x", "y"]


class TestBackgroundRefresh:
    """Tests for schedule_refresh and drain."""

    @pytest.mark.asyncio
    async def test_refresh_for_same_comment_is_shared(self, unit_env):
        like_aggregator = await unit_env.get(LikeAggregator)
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.add(POST, "Alice", "", "Hello")

        first = like_aggregator.schedule_refresh(PostId(POST), comment.id)
        second = like_aggregator.schedule_refresh(PostId(POST), comment.id)

        assert first is second
        assert like_aggregator.pending_refreshes == 1
        await like_aggregator.drain()
        assert like_aggregator.pending_refreshes == 0

    @pytest.mark.asyncio
    async def test_failed_refresh_is_logged_not_raised(self, unit_env, monkeypatch):
        like_aggregator = await unit_env.get(LikeAggregator)

        async def broken(post_id, comment_id, depth=0):
            raise RuntimeError("boom")

        monkeypatch.setattr(like_aggregator, "recompute_subtree", broken)

        task = like_aggregator.schedule_refresh(PostId(POST), CommentId("c1"))
        await like_aggregator.drain()

        assert task.done()
        assert task.exception() is None
