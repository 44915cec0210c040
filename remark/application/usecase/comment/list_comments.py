"""List comments use case."""

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import CommentService

from .common import CommentTreeNodeResponse


class ListCommentsRequest(ApiModel):
    """List comments request."""

    post_id: str | None = None


class ListCommentsResponse(ApiModel):
    """A post's comment tree."""

    post_id: str
    comments: list[CommentTreeNodeResponse]
    total: int


def _count(nodes: list[CommentTreeNodeResponse]) -> int:
    return sum(1 + _count(node.children) for node in nodes)


class ListCommentsUseCase(BaseUseCase):
    """Use case for getting a post's comments as a tree."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        roots = await self.comment_service.list_comments(request.post_id)
        comments = [CommentTreeNodeResponse.from_domain(node) for node in roots]
        return ListCommentsResponse(
            post_id=request.post_id.strip(),
            comments=comments,
            total=_count(comments),
        )
