"""Like use cases."""

from .common import ArticleLikeRequest, CommentLikeRequest
from .like_article import (
    LikeArticleResponse,
    LikeArticleUseCase,
    UnlikeArticleResponse,
    UnlikeArticleUseCase,
)
from .like_comment import (
    LikeCommentResponse,
    LikeCommentUseCase,
    UnlikeCommentResponse,
    UnlikeCommentUseCase,
)
from .like_status import (
    CountKind,
    GetLikeCountUseCase,
    HasLikedRequest,
    HasLikedResponse,
    HasLikedUseCase,
    LikeCountRequest,
    LikeCountResponse,
)

__all__ = [
    "ArticleLikeRequest",
    "CommentLikeRequest",
    "CountKind",
    "GetLikeCountUseCase",
    "HasLikedRequest",
    "HasLikedResponse",
    "HasLikedUseCase",
    "LikeArticleResponse",
    "LikeArticleUseCase",
    "LikeCommentResponse",
    "LikeCommentUseCase",
    "LikeCountRequest",
    "LikeCountResponse",
    "UnlikeArticleResponse",
    "UnlikeArticleUseCase",
    "UnlikeCommentResponse",
    "UnlikeCommentUseCase",
]
