"""Comment like and unlike use cases."""

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import LikeAggregator

from .common import CommentLikeRequest


class LikeCommentResponse(ApiModel):
    """Like comment response."""

    is_new_like: bool
    direct_likes_count: int
    total_likes_count: int


class UnlikeCommentResponse(ApiModel):
    """Unlike comment response."""

    is_removed: bool
    direct_likes_count: int
    total_likes_count: int


class LikeCommentUseCase(BaseUseCase):
    """Use case for liking a comment."""

    def __init__(self, like_aggregator: LikeAggregator) -> None:
        """Initialize like comment use case.

        Args:
            like_aggregator: Like aggregation domain service
        """
        self.like_aggregator = like_aggregator

    async def execute(self, request: CommentLikeRequest) -> LikeCommentResponse:
        """Execute like comment flow.

        Steps:
        1. Set the user's like flag (no-op if already set)
        2. Bump the comment's direct likes
        3. Refresh totalLikes from the comment up to its top-level ancestor

        Raises:
            ValidationError: If an ID is malformed
            GhostTargetError: If the comment does not exist
        """
        result = await self.like_aggregator.add_comment_like(
            request.user_id, request.post_id, request.comment_id
        )
        return LikeCommentResponse(
            is_new_like=result.changed,
            direct_likes_count=result.direct_likes_count,
            total_likes_count=result.total_likes_count,
        )


class UnlikeCommentUseCase(BaseUseCase):
    """Use case for removing a like from a comment."""

    def __init__(self, like_aggregator: LikeAggregator) -> None:
        """Initialize unlike comment use case.

        Args:
            like_aggregator: Like aggregation domain service
        """
        self.like_aggregator = like_aggregator

    async def execute(self, request: CommentLikeRequest) -> UnlikeCommentResponse:
        result = await self.like_aggregator.remove_comment_like(
            request.user_id, request.post_id, request.comment_id
        )
        return UnlikeCommentResponse(
            is_removed=result.changed,
            direct_likes_count=result.direct_likes_count,
            total_likes_count=result.total_likes_count,
        )
