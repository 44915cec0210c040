"""Domain model entities for Remark."""

from remark.domain.model.comment import Comment
from remark.domain.model.like import (
    ArticleLike,
    ArticleLikeResult,
    CommentLike,
    CommentLikeResult,
)
from remark.domain.model.user import User

__all__ = [
    "ArticleLike",
    "ArticleLikeResult",
    "Comment",
    "CommentLike",
    "CommentLikeResult",
    "User",
]
