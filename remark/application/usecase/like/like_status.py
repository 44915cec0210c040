"""Like status and count use cases."""

from enum import Enum

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import LikeAggregator
from remark.domain.value import LikeTarget

from .common import CommentLikeRequest


class CountKind(str, Enum):
    """Which comment counter to read."""

    DIRECT = "direct"
    TOTAL = "total"


class HasLikedRequest(CommentLikeRequest):
    """Has-liked request; comment_id is only used for comment targets."""

    target: LikeTarget = LikeTarget.ARTICLE


class HasLikedResponse(ApiModel):
    """Has-liked response."""

    has_liked: bool


class LikeCountRequest(CommentLikeRequest):
    """Like count request."""

    target: LikeTarget = LikeTarget.ARTICLE
    kind: CountKind = CountKind.TOTAL


class LikeCountResponse(ApiModel):
    """Like count response."""

    likes_count: int


class HasLikedUseCase(BaseUseCase):
    """Use case for checking whether a user likes an article or comment."""

    def __init__(self, like_aggregator: LikeAggregator) -> None:
        """Initialize has-liked use case.

        Args:
            like_aggregator: Like aggregation domain service
        """
        self.like_aggregator = like_aggregator

    async def execute(self, request: HasLikedRequest) -> HasLikedResponse:
        if request.target == LikeTarget.COMMENT:
            liked = await self.like_aggregator.has_liked_comment(
                request.user_id, request.post_id, request.comment_id
            )
        else:
            liked = await self.like_aggregator.has_liked_article(
                request.user_id, request.post_id
            )
        return HasLikedResponse(has_liked=liked)


class GetLikeCountUseCase(BaseUseCase):
    """Use case for reading like counters.

    Articles have one counter; comments have direct likes and the subtree
    total.
    """

    def __init__(self, like_aggregator: LikeAggregator) -> None:
        """Initialize get like count use case.

        Args:
            like_aggregator: Like aggregation domain service
        """
        self.like_aggregator = like_aggregator

    async def execute(self, request: LikeCountRequest) -> LikeCountResponse:
        if request.target == LikeTarget.ARTICLE:
            count = await self.like_aggregator.get_article_likes_count(request.post_id)
        elif request.kind == CountKind.DIRECT:
            count = await self.like_aggregator.get_comment_direct_likes_count(
                request.post_id, request.comment_id
            )
        else:
            count = await self.like_aggregator.get_comment_total_likes_count(
                request.post_id, request.comment_id
            )
        return LikeCountResponse(likes_count=count)
