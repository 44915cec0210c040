"""Subtree like total maintenance use cases.

Operators call these to repair totalLikes after manual edits to the
store; the like and comment flows keep totals current on their own.
"""

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import LikeAggregator
from remark.domain.value import CommentId, PostId, Rule, require


class RecomputeLikesRequest(ApiModel):
    """Recompute/propagate request."""

    post_id: str | None = None
    comment_id: str | None = None


class RecomputeLikesResponse(ApiModel):
    """Recompute response."""

    post_id: str
    comment_id: str
    total_likes: int


class PropagateLikesResponse(ApiModel):
    """Propagate response."""

    post_id: str
    comment_id: str
    updated_ids: list[str]


def _ids(request: RecomputeLikesRequest) -> tuple[PostId, CommentId]:
    return (
        PostId(require(request.post_id, Rule.ID, "postId")),
        CommentId(require(request.comment_id, Rule.ID, "commentId")),
    )


class RecomputeLikesUseCase(BaseUseCase):
    """Use case for recomputing totalLikes over a whole subtree."""

    def __init__(self, like_aggregator: LikeAggregator) -> None:
        """Initialize recompute likes use case.

        Args:
            like_aggregator: Like aggregation domain service
        """
        self.like_aggregator = like_aggregator

    async def execute(self, request: RecomputeLikesRequest) -> RecomputeLikesResponse:
        post_id, comment_id = _ids(request)
        total = await self.like_aggregator.recompute_subtree(post_id, comment_id)
        return RecomputeLikesResponse(
            post_id=post_id, comment_id=comment_id, total_likes=total
        )


class PropagateLikesUseCase(BaseUseCase):
    """Use case for refreshing totalLikes from a comment up to the root."""

    def __init__(self, like_aggregator: LikeAggregator) -> None:
        """Initialize propagate likes use case.

        Args:
            like_aggregator: Like aggregation domain service
        """
        self.like_aggregator = like_aggregator

    async def execute(self, request: RecomputeLikesRequest) -> PropagateLikesResponse:
        post_id, comment_id = _ids(request)
        updated = await self.like_aggregator.propagate_to_ancestors(post_id, comment_id)
        return PropagateLikesResponse(
            post_id=post_id, comment_id=comment_id, updated_ids=list(updated)
        )
