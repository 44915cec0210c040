"""Exception handlers.

Every failure leaves the API as `{"success": false, "message": ...}` with
the status code of its error kind.
"""

import logfire
import pydantic
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from remark.config import Settings
from remark.domain.error import (
    ConflictError,
    DomainError,
    ForbiddenError,
    GhostTargetError,
    NotFoundError,
    UnauthorizedError,
    UnavailableError,
    ValidationError,
)
from remark.interface.error import BadRequestError
from remark.persistence.error import PersistenceError, StorePermissionError

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Checked in order; subclasses come before their bases
DOMAIN_STATUS: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (GhostTargetError, status.HTTP_410_GONE),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (UnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def cors_headers(settings: Settings) -> dict[str, str]:
    """CORS headers sent with every response."""
    return {
        "Access-Control-Allow-Origin": ", ".join(settings.cors.allow_origins),
        "Access-Control-Allow-Methods": ", ".join(settings.cors.allow_methods),
        "Access-Control-Allow-Headers": ", ".join(settings.cors.allow_headers),
    }


def error_response(
    request: Request, status_code: int, message: str, **extra
) -> JSONResponse:
    settings: Settings = request.app.state.settings
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
        headers=cors_headers(settings),
    )


def domain_status(exc: DomainError) -> int:
    for kind, status_code in DOMAIN_STATUS:
        if isinstance(exc, kind):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = domain_status(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    else:
        logfire.info(
            "Request rejected",
            path=request.url.path,
            status=status_code,
            error_type=type(exc).__name__,
            error=str(exc),
        )

    if isinstance(exc, GhostTargetError):
        return error_response(request, status_code, str(exc), ghostLike=True)
    return error_response(request, status_code, str(exc))


async def handle_bad_request(request: Request, exc: BadRequestError) -> JSONResponse:
    logfire.info("Bad request", path=request.url.path, error=str(exc))
    return error_response(request, status.HTTP_400_BAD_REQUEST, str(exc))


def _validation_message(errors: list[dict]) -> str:
    parts = []
    for error in errors:
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part not in ("body", "query")
        )
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def handle_model_validation_error(
    request: Request, exc: pydantic.ValidationError
) -> JSONResponse:
    message = _validation_message(exc.errors())
    logfire.info("Request payload invalid", path=request.url.path, error=message)
    return error_response(request, status.HTTP_400_BAD_REQUEST, message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = _validation_message(list(exc.errors()))
    logfire.info("Request parameters invalid", path=request.url.path, error=message)
    return error_response(request, status.HTTP_400_BAD_REQUEST, message)


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Route not found: {request.url.path}"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = f"Method not allowed: {request.method}"
    else:
        message = str(exc.detail)
    return error_response(request, exc.status_code, message)


async def handle_store_permission_error(
    request: Request, exc: StorePermissionError
) -> JSONResponse:
    logfire.error("Store permission denied", path=request.url.path, error=str(exc))
    return error_response(request, status.HTTP_403_FORBIDDEN, "Permission denied")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    settings: Settings = request.app.state.settings
    message = str(exc) if settings.expose_errors else INTERNAL_ERROR_MESSAGE
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on an application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(BadRequestError, handle_bad_request)
    app.add_exception_handler(pydantic.ValidationError, handle_model_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(StorePermissionError, handle_store_permission_error)
    app.add_exception_handler(PersistenceError, handle_unexpected_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
