"""Like request fields shared by the like use cases."""

from pydantic import AliasChoices, Field

from remark.application.usecase.base import ApiModel


class ArticleLikeRequest(ApiModel):
    """Like/unlike an article."""

    user_id: str | None = Field(
        default=None, validation_alias=AliasChoices("userId", "username", "user_id")
    )
    post_id: str | None = None


class CommentLikeRequest(ArticleLikeRequest):
    """Like/unlike a comment."""

    comment_id: str | None = None
