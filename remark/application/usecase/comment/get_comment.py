"""Get comment use case."""

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import CommentService

from .common import CommentResponse


class GetCommentRequest(ApiModel):
    """Get comment request."""

    post_id: str | None = None
    comment_id: str | None = None


class GetCommentUseCase(BaseUseCase):
    """Use case for fetching a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> CommentResponse:
        comment = await self.comment_service.get(request.post_id, request.comment_id)
        return CommentResponse.from_domain(comment)
