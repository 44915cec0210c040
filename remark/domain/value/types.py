"""Domain value types for Remark."""

from enum import Enum

from remark.domain.value.identifiers import CommentId

# parentId of a top-level comment
ROOT_PARENT_ID = CommentId("0")


class UserRole(str, Enum):
    """Role of a registered user."""

    USER = "user"
    ADMIN = "admin"


class LikeTarget(str, Enum):
    """Type of entity that can be liked."""

    ARTICLE = "article"
    COMMENT = "comment"
