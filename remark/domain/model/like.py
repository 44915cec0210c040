"""Like records and like operation results.

A like record exists exactly while a user's like on a target is in effect;
its presence is the whole state, counters are derived from it.
"""

from datetime import datetime

from pydantic import Field

from remark.domain.model.common import DomainModel
from remark.domain.value import CommentId, PostId, Username
from remark.domain.value.common import ValueObject


class ArticleLike(DomainModel):
    """A user's like on an article."""

    username: Username
    post_id: PostId
    created_at: datetime = Field(default_factory=datetime.now)


class CommentLike(DomainModel):
    """A user's like on a comment."""

    username: Username
    post_id: PostId
    comment_id: CommentId
    created_at: datetime = Field(default_factory=datetime.now)


class ArticleLikeResult(ValueObject):
    """Outcome of liking or unliking an article.

    changed is False when the request was a no-op (already liked on add,
    not liked on remove).
    """

    changed: bool
    likes_count: int


class CommentLikeResult(ValueObject):
    """Outcome of liking or unliking a comment."""

    changed: bool
    direct_likes_count: int
    total_likes_count: int
