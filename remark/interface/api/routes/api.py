"""API routes.

All routes funnel into the dispatcher. Query-string parameters are merged
under the JSON body, so `POST /api/user?action=login` works with a body
holding only the credentials.
"""

import json
from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request

from remark.application.usecase.base import ApiModel
from remark.interface.api.dispatcher import Dispatcher
from remark.interface.error import BadRequestError

router = APIRouter(tags=["api"], route_class=DishkaRoute)

ROUTES = {
    "POST /api": "Envelope {type, action, userId, postId, commentId?, data?}",
    "GET /api": "Envelope in the query string",
    "GET /api/comments?postId=": "Comment tree of a post",
    "POST /api/comments": "Add a comment (type=comment, default action add)",
    "PUT /api/comments": "Edit a comment (default action edit)",
    "DELETE /api/comments": "Delete a comment and its replies (admin)",
    "POST /api/like": "Like protocol {type: article|comment, action: add|remove|...}",
    "GET /api/user": "User actions (default action profile)",
    "POST /api/user": "User actions (register, login, logout, update, delete)",
    "GET /health": "Health check",
}


def envelope(response: ApiModel) -> dict[str, Any]:
    return {"success": True, "data": response.model_dump(by_alias=True, mode="json")}


async def read_body(request: Request) -> dict[str, Any]:
    """Parse the JSON body (if any) over the query parameters.

    Raises:
        BadRequestError: If the body is not a JSON object
    """
    payload: dict[str, Any] = dict(request.query_params)
    raw = await request.body()
    if not raw.strip():
        return payload
    try:
        body = json.loads(raw)
    except ValueError as e:
        raise BadRequestError("Request body is not valid JSON") from e
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    payload.update(body)
    return payload


@router.get("/")
async def index() -> dict[str, Any]:
    """List the available routes."""
    return {"success": True, "data": {"routes": ROUTES}}


@router.post("/api")
async def api(request: Request, dispatcher: FromDishka[Dispatcher]) -> dict[str, Any]:
    """Dispatch an envelope."""
    return envelope(await dispatcher.dispatch(await read_body(request)))


@router.get("/api")
async def api_query(
    request: Request, dispatcher: FromDishka[Dispatcher]
) -> dict[str, Any]:
    """Dispatch an envelope given as query parameters."""
    return envelope(await dispatcher.dispatch(dict(request.query_params)))


@router.get("/api/comments")
async def list_comments(
    request: Request, dispatcher: FromDishka[Dispatcher]
) -> dict[str, Any]:
    """Get the comment tree of a post."""
    body = {"action": "list", **request.query_params, "type": "comment"}
    return envelope(await dispatcher.dispatch(body))


async def _comments(request: Request, dispatcher: Dispatcher, action: str) -> dict[str, Any]:
    body = await read_body(request)
    body["type"] = "comment"
    body.setdefault("action", action)
    return envelope(await dispatcher.dispatch(body))


@router.post("/api/comments")
async def add_comment(
    request: Request, dispatcher: FromDishka[Dispatcher]
) -> dict[str, Any]:
    """Comment actions, add by default."""
    return await _comments(request, dispatcher, "add")


@router.put("/api/comments")
async def edit_comment(
    request: Request, dispatcher: FromDishka[Dispatcher]
) -> dict[str, Any]:
    """Edit a comment."""
    return await _comments(request, dispatcher, "edit")


@router.delete("/api/comments")
async def delete_comment(
    request: Request, dispatcher: FromDishka[Dispatcher]
) -> dict[str, Any]:
    """Delete a comment and its replies."""
    return await _comments(request, dispatcher, "delete")


@router.post("/api/like")
async def like(request: Request, dispatcher: FromDishka[Dispatcher]) -> dict[str, Any]:
    """Like endpoint of the blog pages."""
    return envelope(await dispatcher.dispatch_like(await read_body(request)))


@router.get("/api/user")
async def user_query(
    request: Request, dispatcher: FromDishka[Dispatcher]
) -> dict[str, Any]:
    """User actions from the query string, profile by default."""
    body = {"action": "profile", **request.query_params, "type": "user"}
    return envelope(await dispatcher.dispatch(body))


@router.post("/api/user")
async def user(request: Request, dispatcher: FromDishka[Dispatcher]) -> dict[str, Any]:
    """User actions; the action comes from the body or the query string."""
    body = await read_body(request)
    body["type"] = "user"
    return envelope(await dispatcher.dispatch(body))
