"""Standard-library logging for third-party code.

Application events go through logfire; this only sets levels for the
libraries underneath (uvicorn, the Firebase Admin SDK and its HTTP stack).
"""

import logging
import sys

from remark.config import Settings

# Chatty at INFO: one line per HTTP round trip to the database
QUIET_LOGGERS = ("firebase_admin", "google.auth", "urllib3", "cachecontrol")


def log_level(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the process.

    Args:
        settings: Application settings
    """
    level = log_level(settings)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    logging.getLogger("remark").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
