#!/usr/bin/env python3
"""Run the remark API under uvicorn.

Exits with status 1 before binding the port when the Firebase web config
is incomplete.
"""

import sys

import logfire
import uvicorn

from remark.config import Settings
from remark.util.logging import setup_logging
from remark.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    missing = settings.firebase.missing()
    if missing:
        logfire.error("Firebase configuration incomplete", missing=missing)
        print(f"Missing environment variables: {', '.join(missing)}", file=sys.stderr)
        return 1

    try:
        logfire.info(
            "Starting remark API",
            host=settings.host,
            port=settings.port,
            environment=settings.environment,
        )
        uvicorn.run(
            "remark.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        logfire.exception("API stopped on a startup error")
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
