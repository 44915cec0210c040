"""Firebase Realtime Database backend.

The Admin SDK is synchronous (plain HTTP requests), so every call runs in a
worker thread. SDK exceptions are translated to persistence errors here and
nowhere else.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

import firebase_admin
import logfire
from firebase_admin import credentials, db, exceptions

from remark.config import FirebaseSettings
from remark.persistence.backend.base import StoreBackend
from remark.persistence.error import (
    PersistenceError,
    StorePermissionError,
    TransientStoreError,
    WriteConflictError,
)
from remark.util.error import ConfigurationError

T = TypeVar("T")

APP_NAME = "remark"

_TRANSIENT = (
    exceptions.UnavailableError,
    exceptions.DeadlineExceededError,
    exceptions.InternalError,
    exceptions.UnknownError,
)
_PERMISSION = (
    exceptions.PermissionDeniedError,
    exceptions.UnauthenticatedError,
)


def initialize_app(settings: FirebaseSettings) -> firebase_admin.App:
    """Initialize the Admin SDK app for the configured database.

    Args:
        settings: Firebase settings

    Returns:
        Initialized app (reused if it already exists in this process)

    Raises:
        ConfigurationError: If required FIREBASE_* variables are missing
    """
    missing = settings.missing()
    if missing:
        raise ConfigurationError(
            f"Missing Firebase configuration: {', '.join(missing)}"
        )

    try:
        return firebase_admin.get_app(APP_NAME)
    except ValueError:
        pass

    if settings.credentials_file:
        credential = credentials.Certificate(settings.credentials_file)
    else:
        credential = credentials.ApplicationDefault()

    app = firebase_admin.initialize_app(
        credential,
        {
            "databaseURL": settings.database_url,
            "projectId": settings.project_id,
            "storageBucket": settings.storage_bucket,
        },
        name=APP_NAME,
    )
    logfire.info(
        "Firebase app initialized",
        project_id=settings.project_id,
        database_url=settings.database_url,
    )
    return app


class FirebaseBackend(StoreBackend):
    """StoreBackend over firebase_admin.db."""

    def __init__(self, app: firebase_admin.App) -> None:
        """Initialize backend.

        Args:
            app: Initialized Admin SDK app
        """
        self.app = app

    @classmethod
    def from_settings(cls, settings: FirebaseSettings) -> "FirebaseBackend":
        return cls(initialize_app(settings))

    def close(self) -> None:
        """Release the SDK app and its HTTP sessions."""
        firebase_admin.delete_app(self.app)

    def _ref(self, path: str) -> db.Reference:
        return db.reference(path or "/", app=self.app)

    async def _call(self, path: str, fn: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(fn)
        except db.TransactionAbortedError as e:
            raise WriteConflictError(f"Transaction at {path} did not commit") from e
        except _PERMISSION as e:
            raise StorePermissionError(f"Permission denied at {path}") from e
        except _TRANSIENT as e:
            raise TransientStoreError(f"Store unavailable at {path}: {e}") from e
        except exceptions.FirebaseError as e:
            raise PersistenceError(f"Store error at {path}: {e}") from e

    async def get(self, path: str) -> Any:
        return await self._call(path, self._ref(path).get)

    async def set(self, path: str, value: Any) -> None:
        if value is None:
            await self.delete(path)
            return
        ref = self._ref(path)
        await self._call(path, lambda: ref.set(value))

    async def update(self, path: str, fields: dict[str, Any]) -> None:
        if not fields:
            return
        ref = self._ref(path)
        await self._call(path, lambda: ref.update(fields))

    async def push(self, path: str, value: Any) -> str:
        ref = self._ref(path)
        child = await self._call(path, lambda: ref.push(value))
        return child.key

    async def delete(self, path: str) -> None:
        await self._call(path, self._ref(path).delete)

    async def transaction(self, path: str, update: Callable[[Any], Any]) -> Any:
        ref = self._ref(path)
        return await self._call(path, lambda: ref.transaction(update))
