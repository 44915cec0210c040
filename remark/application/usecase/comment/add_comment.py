"""Add comment use case."""

from pydantic import AliasChoices, Field

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import CommentService

from .common import CommentResponse


class AddCommentRequest(ApiModel):
    """Add comment request.

    author/content are the names older blog pages send for name/comment.
    """

    post_id: str | None = None
    name: str | None = Field(
        default=None, validation_alias=AliasChoices("name", "author")
    )
    email: str | None = None
    comment: str | None = Field(
        default=None, validation_alias=AliasChoices("comment", "content")
    )
    parent_id: str | None = None
    is_guest: bool = False


class AddCommentUseCase(BaseUseCase):
    """Use case for posting a comment or a reply."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: AddCommentRequest) -> CommentResponse:
        """Execute add comment flow.

        Args:
            request: Add comment request

        Returns:
            The created comment

        Raises:
            ValidationError: If a field fails validation
        """
        comment = await self.comment_service.add(
            post_id=request.post_id,
            name=request.name,
            email=request.email,
            comment=request.comment,
            parent_id=request.parent_id,
            is_guest=request.is_guest,
        )
        return CommentResponse.from_domain(comment)
