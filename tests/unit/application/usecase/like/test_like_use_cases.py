"""Unit tests for the like use cases."""

import pytest

from remark.application.usecase.like import (
    ArticleLikeRequest,
    CommentLikeRequest,
    CountKind,
    GetLikeCountUseCase,
    HasLikedRequest,
    HasLikedUseCase,
    LikeArticleUseCase,
    LikeCommentUseCase,
    LikeCountRequest,
    UnlikeArticleUseCase,
    UnlikeCommentUseCase,
)
from remark.domain.error import GhostTargetError
from remark.domain.service import CommentService
from remark.domain.value import LikeTarget
from tests.harness import create_env_fixture, make_thread

unit_env = create_env_fixture()

POST = "post-1"


class TestArticleLikeUseCases:
    """Tests for article like use cases."""

    @pytest.mark.asyncio
    async def test_like_and_unlike(self, unit_env):
        like = await unit_env.get(LikeArticleUseCase)
        unlike = await unit_env.get(UnlikeArticleUseCase)
        request = ArticleLikeRequest.model_validate({"userId": "alice", "postId": POST})

        liked = await like.execute(request)
        liked_again = await like.execute(request)
        unliked = await unlike.execute(request)

        assert (liked.is_new_like, liked.likes_count) == (True, 1)
        assert (liked_again.is_new_like, liked_again.likes_count) == (False, 1)
        assert (unliked.is_removed, unliked.likes_count) == (True, 0)

    def test_username_is_an_alias_of_user_id(self):
        request = ArticleLikeRequest.model_validate({"username": "alice", "postId": 7})

        assert request.user_id == "alice"
        assert request.post_id == "7"


class TestCommentLikeUseCases:
    """Tests for comment like use cases."""

    @pytest.mark.asyncio
    async def test_like_reports_both_counters(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        like = await unit_env.get(LikeCommentUseCase)
        a, b, _ = await make_thread(comment_service, POST)

        await like.execute(
            CommentLikeRequest(user_id="alice", post_id=POST, comment_id=b.id)
        )
        response = await like.execute(
            CommentLikeRequest(user_id="bob", post_id=POST, comment_id=a.id)
        )

        assert response.is_new_like is True
        assert response.direct_likes_count == 1
        assert response.total_likes_count == 2

    @pytest.mark.asyncio
    async def test_unlike_ghost_comment(self, unit_env):
        unlike = await unit_env.get(UnlikeCommentUseCase)

        with pytest.raises(GhostTargetError):
            await unlike.execute(
                CommentLikeRequest(user_id="alice", post_id=POST, comment_id="gone")
            )


class TestLikeStatusUseCases:
    """Tests for has-liked and count use cases."""

    @pytest.mark.asyncio
    async def test_has_liked(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        like = await unit_env.get(LikeCommentUseCase)
        has_liked = await unit_env.get(HasLikedUseCase)
        comment = await comment_service.add(POST, "Alice", "", "Hello")
        await like.execute(
            CommentLikeRequest(user_id="bob", post_id=POST, comment_id=comment.id)
        )

        on_comment = await has_liked.execute(
            HasLikedRequest(
                user_id="bob",
                post_id=POST,
                comment_id=comment.id,
                target=LikeTarget.COMMENT,
            )
        )
        on_article = await has_liked.execute(
            HasLikedRequest(user_id="bob", post_id=POST)
        )

        assert on_comment.has_liked is True
        assert on_article.has_liked is False

    @pytest.mark.asyncio
    async def test_counts(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        like = await unit_env.get(LikeCommentUseCase)
        count = await unit_env.get(GetLikeCountUseCase)
        a, b, _ = await make_thread(comment_service, POST)
        await like.execute(CommentLikeRequest(user_id="bob", post_id=POST, comment_id=b.id))

        direct = await count.execute(
            LikeCountRequest(
                post_id=POST,
                comment_id=a.id,
                target=LikeTarget.COMMENT,
                kind=CountKind.DIRECT,
            )
        )
        total = await count.execute(
            LikeCountRequest(post_id=POST, comment_id=a.id, target=LikeTarget.COMMENT)
        )
        article = await count.execute(LikeCountRequest(post_id=POST))

        assert direct.likes_count == 0
        assert total.likes_count == 1
        assert article.likes_count == 0
