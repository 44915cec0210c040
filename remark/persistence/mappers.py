"""Mappers between stored JSON records and domain models.

Records use camelCase keys, which is what the model aliases produce, so
mapping is mostly model_validate / model_dump plus the keys that are
implied by the record path.
"""

from typing import Any, Dict

from remark.domain.model import ArticleLike, Comment, CommentLike, User
from remark.domain.value import CommentId, PostId


def record_to_comment(
    post_id: PostId, comment_id: CommentId, record: Dict[str, Any]
) -> Comment:
    """Convert a stored record to a Comment.

    Args:
        post_id: Post the record is stored under
        comment_id: Record key (used when the record lacks an id)
        record: Stored JSON object

    Returns:
        Comment domain model
    """
    return Comment.model_validate(
        {**record, "id": record.get("id") or comment_id, "postId": post_id}
    )


def comment_to_record(comment: Comment) -> Dict[str, Any]:
    return comment.model_dump(by_alias=True, mode="json")


def is_complete_comment(record: Any) -> bool:
    """Whether a record is a full comment rather than a creation placeholder."""
    return isinstance(record, dict) and "comment" in record and "name" in record


def record_to_user(record: Dict[str, Any]) -> User:
    return User.model_validate(record)


def user_to_record(user: User) -> Dict[str, Any]:
    """Convert a User to its stored form (password hash included)."""
    return user.model_dump(by_alias=True, mode="json")


def article_like_to_record(like: ArticleLike) -> Dict[str, Any]:
    return like.model_dump(by_alias=True, mode="json")


def comment_like_to_record(like: CommentLike) -> Dict[str, Any]:
    return like.model_dump(by_alias=True, mode="json")

