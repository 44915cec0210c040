"""Logfire setup.

Services log with `logfire.info(...)` and wrap multi-step store work in
`logfire.span(...)`; this module only decides where that output goes.
"""

import logfire
from fastapi import FastAPI

from remark.config import Settings

# Values under these keys never leave the process
SCRUBBED_FIELDS = ["password", "password_hash", "passwordHash", "private_key"]

# Polled by uptime checks; not worth a trace each
UNTRACED_URLS = ["/health"]


def _send_to_logfire(settings: Settings) -> bool:
    # An explicit flag wins, otherwise a token turns sending on
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the process.

    Console output is verbose only in debug mode. Cloud sending needs
    OBSERVABILITY__LOGFIRE_TOKEN, or OBSERVABILITY__SEND_TO_LOGFIRE=true
    with a token from the Logfire CLI.

    Args:
        settings: Application settings
    """
    send = _send_to_logfire(settings)

    logfire.configure(
        service_name="remark-api",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUBBED_FIELDS),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
        store=settings.firebase.database_url or "unset",
    )


def _request_attributes(request, attributes: dict) -> dict:
    """Tag request spans with the envelope selector when it is in the URL."""
    result = {**attributes, "path": request.url.path}
    for key in ("type", "action", "postId"):
        value = request.query_params.get(key)
        if value:
            result[key] = value
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request of the app except health checks."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
        excluded_urls=UNTRACED_URLS,
    )
