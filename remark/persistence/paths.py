"""Store path layout.

All records live in one JSON tree:

    users/{username}
    comments/{postId}/{commentId}
    articleLikes/{username}_{postId}
    commentLikes/{username}_{postId}_{commentId}
    articles/{postId}/likes
"""

from remark.domain.value import CommentId, PostId, Username

USERS = "users"
COMMENTS = "comments"
ARTICLES = "articles"
ARTICLE_LIKES = "articleLikes"
COMMENT_LIKES = "commentLikes"


def join(*segments: str) -> str:
    """Join path segments, ignoring surrounding slashes."""
    return "/".join(s.strip("/") for s in segments if s and s.strip("/"))


def user(username: Username) -> str:
    return join(USERS, username)


def post_comments(post_id: PostId) -> str:
    return join(COMMENTS, post_id)


def comment(post_id: PostId, comment_id: CommentId) -> str:
    return join(COMMENTS, post_id, comment_id)


def article_likes_count(post_id: PostId) -> str:
    return join(ARTICLES, post_id, "likes")


def article_like(username: Username, post_id: PostId) -> str:
    return join(ARTICLE_LIKES, f"{username}_{post_id}")


def comment_like(username: Username, post_id: PostId, comment_id: CommentId) -> str:
    return join(COMMENT_LIKES, f"{username}_{post_id}_{comment_id}")
