"""Domain value objects for Remark."""

from remark.domain.value.identifiers import CommentId, PostId, Username
from remark.domain.value.rules import Rule, require, sanitize, validate
from remark.domain.value.types import ROOT_PARENT_ID, LikeTarget, UserRole

__all__ = [
    # Identifiers
    "PostId",
    "CommentId",
    "Username",
    # Types
    "ROOT_PARENT_ID",
    "LikeTarget",
    "UserRole",
    # Rules
    "Rule",
    "require",
    "sanitize",
    "validate",
]
