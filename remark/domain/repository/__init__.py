"""Repository interfaces for Remark domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from remark.domain.repository.comment import CommentRepository
from remark.domain.repository.like import LikeRepository
from remark.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "CommentRepository",
    "LikeRepository",
]
