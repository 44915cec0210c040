"""Domain services."""

from .base import Service
from .comment_service import CommentService, CommentTreeNode
from .like_aggregator import LikeAggregator
from .password_service import PasswordService
from .user_service import UserService

__all__ = [
    "CommentService",
    "CommentTreeNode",
    "LikeAggregator",
    "PasswordService",
    "Service",
    "UserService",
]
