"""Request dispatcher.

Every API call is an envelope:

    {"type": "comment", "action": "add", "userId": ..., "postId": ...,
     "commentId": ..., "data": {...}}

Fields inside `data` and any other top-level fields are merged into one
payload, so flat bodies from older blog pages work as well. The
(type, action) pair selects a use case; the payload is parsed into that
use case's request model.
"""

from typing import Any, NamedTuple

import logfire

from remark.application.usecase.base import ApiModel
from remark.application.usecase.comment import (
    AddCommentRequest,
    AddCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    PropagateLikesUseCase,
    RecomputeLikesRequest,
    RecomputeLikesUseCase,
)
from remark.application.usecase.like import (
    ArticleLikeRequest,
    CommentLikeRequest,
    GetLikeCountUseCase,
    HasLikedRequest,
    HasLikedUseCase,
    LikeArticleUseCase,
    LikeCommentUseCase,
    LikeCountRequest,
    UnlikeArticleUseCase,
    UnlikeCommentUseCase,
)
from remark.application.usecase.user import (
    DeleteUserRequest,
    DeleteUserUseCase,
    GetUserProfileRequest,
    GetUserProfileUseCase,
    LoginRequest,
    LoginUseCase,
    LogoutRequest,
    LogoutUseCase,
    RegisterRequest,
    RegisterUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
)
from remark.interface.error import BadRequestError

ENVELOPE_KEYS = ("type", "action", "data")


class Route(NamedTuple):
    """Where a (type, action) pair goes."""

    use_case: str  # Dispatcher attribute holding the use case
    request: type[ApiModel]
    defaults: dict[str, Any] = {}


ACTIONS: dict[tuple[str, str], Route] = {
    # Articles
    ("article", "like"): Route("like_article", ArticleLikeRequest),
    ("article", "unlike"): Route("unlike_article", ArticleLikeRequest),
    ("article", "hasLiked"): Route("has_liked", HasLikedRequest, {"target": "article"}),
    ("article", "count"): Route("like_count", LikeCountRequest, {"target": "article"}),
    # Comments
    ("comment", "add"): Route("add_comment", AddCommentRequest),
    ("comment", "list"): Route("list_comments", ListCommentsRequest),
    ("comment", "get"): Route("get_comment", GetCommentRequest),
    ("comment", "edit"): Route("edit_comment", EditCommentRequest),
    ("comment", "delete"): Route("delete_comment", DeleteCommentRequest),
    ("comment", "like"): Route("like_comment", CommentLikeRequest),
    ("comment", "unlike"): Route("unlike_comment", CommentLikeRequest),
    ("comment", "hasLiked"): Route("has_liked", HasLikedRequest, {"target": "comment"}),
    ("comment", "directCount"): Route(
        "like_count", LikeCountRequest, {"target": "comment", "kind": "direct"}
    ),
    ("comment", "totalCount"): Route(
        "like_count", LikeCountRequest, {"target": "comment", "kind": "total"}
    ),
    ("comment", "recompute"): Route("recompute_likes", RecomputeLikesRequest),
    ("comment", "propagate"): Route("propagate_likes", RecomputeLikesRequest),
    # Users
    ("user", "register"): Route("register", RegisterRequest),
    ("user", "login"): Route("login", LoginRequest),
    ("user", "logout"): Route("logout", LogoutRequest),
    ("user", "profile"): Route("get_user_profile", GetUserProfileRequest),
    ("user", "update"): Route("update_user_profile", UpdateUserProfileRequest),
    ("user", "delete"): Route("delete_user", DeleteUserRequest),
}

# Names older clients still send
ACTION_ALIASES: dict[tuple[str, str], tuple[str, str]] = {
    ("comment", "getTree"): ("comment", "list"),
    ("comment", "update"): ("comment", "edit"),
    ("comment", "computeTotalLikes"): ("comment", "recompute"),
    ("comment", "updateAncestorsLikes"): ("comment", "propagate"),
    ("like", "addArticleLike"): ("article", "like"),
    ("like", "removeArticleLike"): ("article", "unlike"),
    ("like", "getArticleLikesCount"): ("article", "count"),
    ("like", "hasUserLikedArticle"): ("article", "hasLiked"),
    ("like", "addCommentLike"): ("comment", "like"),
    ("like", "removeCommentLike"): ("comment", "unlike"),
    ("like", "getCommentDirectLikesCount"): ("comment", "directCount"),
    ("like", "getCommentTotalLikesCount"): ("comment", "totalCount"),
    ("like", "hasUserLikedComment"): ("comment", "hasLiked"),
}

# Actions of the dedicated like endpoint, per target type
LIKE_ACTIONS: dict[str, dict[str, str]] = {
    "article": {
        "add": "like",
        "remove": "unlike",
        "has_liked": "hasLiked",
        "get_count": "count",
    },
    "comment": {
        "add": "like",
        "remove": "unlike",
        "has_liked": "hasLiked",
        "get_count": "totalCount",
        "get_direct_count": "directCount",
        "get_total_count": "totalCount",
    },
}


def _payload(body: dict[str, Any]) -> dict[str, Any]:
    """Merge top-level fields and `data` into one payload."""
    data = body.get("data")
    if data is not None and not isinstance(data, dict):
        raise BadRequestError("data must be an object")
    payload = {k: v for k, v in body.items() if k not in ENVELOPE_KEYS}
    payload.update(data or {})
    return payload


class Dispatcher:
    """Routes envelopes to use cases."""

    def __init__(
        self,
        *,
        add_comment: AddCommentUseCase,
        list_comments: ListCommentsUseCase,
        get_comment: GetCommentUseCase,
        edit_comment: EditCommentUseCase,
        delete_comment: DeleteCommentUseCase,
        recompute_likes: RecomputeLikesUseCase,
        propagate_likes: PropagateLikesUseCase,
        like_article: LikeArticleUseCase,
        unlike_article: UnlikeArticleUseCase,
        like_comment: LikeCommentUseCase,
        unlike_comment: UnlikeCommentUseCase,
        has_liked: HasLikedUseCase,
        like_count: GetLikeCountUseCase,
        register: RegisterUseCase,
        login: LoginUseCase,
        logout: LogoutUseCase,
        get_user_profile: GetUserProfileUseCase,
        update_user_profile: UpdateUserProfileUseCase,
        delete_user: DeleteUserUseCase,
    ) -> None:
        self.add_comment = add_comment
        self.list_comments = list_comments
        self.get_comment = get_comment
        self.edit_comment = edit_comment
        self.delete_comment = delete_comment
        self.recompute_likes = recompute_likes
        self.propagate_likes = propagate_likes
        self.like_article = like_article
        self.unlike_article = unlike_article
        self.like_comment = like_comment
        self.unlike_comment = unlike_comment
        self.has_liked = has_liked
        self.like_count = like_count
        self.register = register
        self.login = login
        self.logout = logout
        self.get_user_profile = get_user_profile
        self.update_user_profile = update_user_profile
        self.delete_user = delete_user

    async def dispatch(self, body: dict[str, Any]) -> ApiModel:
        """Run the use case an envelope asks for.

        Args:
            body: Parsed request body or query parameters

        Returns:
            The use case response

        Raises:
            BadRequestError: If type/action are missing or unknown
            pydantic.ValidationError: If the payload does not fit the request model
        """
        if not isinstance(body, dict):
            raise BadRequestError("Request body must be a JSON object")

        kind, action = body.get("type"), body.get("action")
        if not kind or not action:
            raise BadRequestError("Missing required parameters: type and action")
        if not isinstance(kind, str) or not isinstance(action, str):
            raise BadRequestError("type and action must be strings")

        key = ACTION_ALIASES.get((kind, action), (kind, action))
        route = ACTIONS.get(key)
        if route is None:
            logfire.warn("Unsupported action", type=kind, action=action)
            raise BadRequestError(f"Unsupported {kind} action: {action}")

        request = route.request.model_validate({**_payload(body), **route.defaults})
        logfire.debug("Dispatching", type=key[0], action=key[1])
        return await getattr(self, route.use_case).execute(request)

    async def dispatch_like(self, body: dict[str, Any]) -> ApiModel:
        """Run a request in the like endpoint's protocol.

        `type` is article or comment; `action` is one of add, remove,
        has_liked, get_count, get_direct_count, get_total_count.
        """
        if not isinstance(body, dict):
            raise BadRequestError("Request body must be a JSON object")

        kind = body.get("type") or ("comment" if body.get("commentId") else "article")
        actions = LIKE_ACTIONS.get(kind) if isinstance(kind, str) else None
        if actions is None:
            raise BadRequestError(f"Unsupported like type: {kind}")
        action = actions.get(str(body.get("action") or "add"))
        if action is None:
            raise BadRequestError(f"Unsupported {kind} like action: {body.get('action')}")

        return await self.dispatch({**body, "type": kind, "action": action})
