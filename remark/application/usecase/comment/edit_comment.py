"""Edit comment use case."""

from pydantic import AliasChoices, Field

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import CommentService

from .common import CommentResponse


class EditCommentRequest(ApiModel):
    """Edit comment request."""

    post_id: str | None = None
    comment_id: str | None = None
    comment: str | None = Field(
        default=None, validation_alias=AliasChoices("comment", "content")
    )


class EditCommentUseCase(BaseUseCase):
    """Use case for changing the text of a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize edit comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: EditCommentRequest) -> CommentResponse:
        """Execute edit comment flow.

        Only the text and lastSync change; likes and replies are untouched.

        Raises:
            ValidationError: If an ID or the text is invalid
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_service.edit(
            request.post_id, request.comment_id, request.comment
        )
        return CommentResponse.from_domain(comment)
