"""Article like and unlike use cases."""

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import LikeAggregator

from .common import ArticleLikeRequest


class LikeArticleResponse(ApiModel):
    """Like article response."""

    is_new_like: bool
    likes_count: int


class UnlikeArticleResponse(ApiModel):
    """Unlike article response."""

    is_removed: bool
    likes_count: int


class LikeArticleUseCase(BaseUseCase):
    """Use case for liking an article."""

    def __init__(self, like_aggregator: LikeAggregator) -> None:
        """Initialize like article use case.

        Args:
            like_aggregator: Like aggregation domain service
        """
        self.like_aggregator = like_aggregator

    async def execute(self, request: ArticleLikeRequest) -> LikeArticleResponse:
        """Execute like article flow.

        Liking twice is not an error: the second call reports
        is_new_like=False and leaves the count alone.
        """
        result = await self.like_aggregator.add_article_like(
            request.user_id, request.post_id
        )
        return LikeArticleResponse(
            is_new_like=result.changed, likes_count=result.likes_count
        )


class UnlikeArticleUseCase(BaseUseCase):
    """Use case for removing a like from an article."""

    def __init__(self, like_aggregator: LikeAggregator) -> None:
        """Initialize unlike article use case.

        Args:
            like_aggregator: Like aggregation domain service
        """
        self.like_aggregator = like_aggregator

    async def execute(self, request: ArticleLikeRequest) -> UnlikeArticleResponse:
        result = await self.like_aggregator.remove_article_like(
            request.user_id, request.post_id
        )
        return UnlikeArticleResponse(
            is_removed=result.changed, likes_count=result.likes_count
        )
