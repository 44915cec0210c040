"""Comment use cases."""

from .add_comment import AddCommentRequest, AddCommentUseCase
from .common import CommentResponse, CommentTreeNodeResponse
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .edit_comment import EditCommentRequest, EditCommentUseCase
from .get_comment import GetCommentRequest, GetCommentUseCase
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .recompute_likes import (
    PropagateLikesResponse,
    PropagateLikesUseCase,
    RecomputeLikesRequest,
    RecomputeLikesResponse,
    RecomputeLikesUseCase,
)

__all__ = [
    "AddCommentRequest",
    "AddCommentUseCase",
    "CommentResponse",
    "CommentTreeNodeResponse",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "EditCommentRequest",
    "EditCommentUseCase",
    "GetCommentRequest",
    "GetCommentUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "PropagateLikesResponse",
    "PropagateLikesUseCase",
    "RecomputeLikesRequest",
    "RecomputeLikesResponse",
    "RecomputeLikesUseCase",
]
