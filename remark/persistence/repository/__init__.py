"""Store-backed repository implementations."""

from remark.persistence.repository.comment import StoreCommentRepository
from remark.persistence.repository.like import StoreLikeRepository
from remark.persistence.repository.user import StoreUserRepository

__all__ = [
    "StoreUserRepository",
    "StoreCommentRepository",
    "StoreLikeRepository",
]
