"""Delete comment use case."""

from pydantic import AliasChoices, Field

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import CommentService


class DeleteCommentRequest(ApiModel):
    """Delete comment request.

    user_id is the requester; only admins may delete.
    """

    post_id: str | None = None
    comment_id: str | None = None
    user_id: str | None = Field(
        default=None, validation_alias=AliasChoices("userId", "username", "user_id")
    )


class DeleteCommentResponse(ApiModel):
    """Delete comment response."""

    post_id: str
    comment_id: str
    deleted_ids: list[str]


class DeleteCommentUseCase(BaseUseCase):
    """Use case for removing a comment together with its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            ForbiddenError: If the requester is not an admin
            NotFoundError: If the comment does not exist
        """
        deleted = await self.comment_service.delete(
            request.post_id, request.comment_id, request.user_id
        )
        return DeleteCommentResponse(
            post_id=request.post_id.strip(),
            comment_id=deleted[0],
            deleted_ids=list(deleted),
        )
