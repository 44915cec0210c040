"""Unit tests for StoreLikeRepository."""

import asyncio

import pytest

from remark.domain.model import ArticleLike, CommentLike
from remark.domain.repository import LikeRepository
from remark.domain.value import CommentId, PostId, Username
from remark.persistence.backend import StoreBackend
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = Username("alice")
POST = PostId("post-1")


class TestLikeFlags:
    """Tests for like flag records."""

    @pytest.mark.asyncio
    async def test_article_flag_is_created_once(self, unit_env):
        repo = await unit_env.get(LikeRepository)

        first = await repo.add_article_like(ArticleLike(username=ALICE, post_id=POST))
        second = await repo.add_article_like(ArticleLike(username=ALICE, post_id=POST))

        assert (first, second) == (True, False)
        assert await repo.has_article_like(ALICE, POST) is True

    @pytest.mark.asyncio
    async def test_racing_adds_create_one_flag(self, unit_env):
        repo = await unit_env.get(LikeRepository)
        like = CommentLike(username=ALICE, post_id=POST, comment_id=CommentId("c1"))

        results = await asyncio.gather(*(repo.add_comment_like(like) for _ in range(5)))

        assert sorted(results) == [False, False, False, False, True]

    @pytest.mark.asyncio
    async def test_flag_paths(self, unit_env):
        repo = await unit_env.get(LikeRepository)
        backend = await unit_env.get(StoreBackend)

        await repo.add_article_like(ArticleLike(username=ALICE, post_id=POST))
        await repo.add_comment_like(
            CommentLike(username=ALICE, post_id=POST, comment_id=CommentId("c1"))
        )

        snapshot = backend.snapshot()
        assert set(snapshot["articleLikes"]) == {"alice_post-1"}
        assert set(snapshot["commentLikes"]) == {"alice_post-1_c1"}

    @pytest.mark.asyncio
    async def test_remove_reports_whether_flag_existed(self, unit_env):
        repo = await unit_env.get(LikeRepository)
        await repo.add_article_like(ArticleLike(username=ALICE, post_id=POST))

        assert await repo.remove_article_like(ALICE, POST) is True
        assert await repo.remove_article_like(ALICE, POST) is False
        assert await repo.has_article_like(ALICE, POST) is False


class TestArticleCounter:
    """Tests for the article like counter."""

    @pytest.mark.asyncio
    async def test_missing_counter_reads_as_zero(self, unit_env):
        repo = await unit_env.get(LikeRepository)

        assert await repo.count_article_likes(POST) == 0

    @pytest.mark.asyncio
    async def test_counter_never_goes_negative(self, unit_env):
        repo = await unit_env.get(LikeRepository)

        assert await repo.increment_article_likes(POST, 1) == 1
        assert await repo.increment_article_likes(POST, -1) == 0
        assert await repo.increment_article_likes(POST, -1) == 0
        assert await repo.count_article_likes(POST) == 0
