"""Store adapter.

Typed wrapper around a StoreBackend. Every database access in the
repositories goes through one of five operations: read, write, delete,
transact and with_timeout.

Retry policy:
- read: bounded by the timeout, never retried
- write/delete/transact: transient errors and write conflicts are retried
  up to max_retries times, sleeping retry_interval_base * 2 ** (n - 1)
  before retry n
- permission errors and timeouts are never retried
"""

import asyncio
import copy
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

import logfire

from remark.config import StoreSettings
from remark.domain.error import UnavailableError
from remark.persistence.backend.base import AbortTransaction, StoreBackend
from remark.persistence.error import TransientStoreError, WriteConflictError

T = TypeVar("T")


class WriteMode(str, Enum):
    """How write() applies a value."""

    REPLACE = "replace"  # Overwrite the node
    MERGE = "merge"  # Update listed children only
    CREATE = "create"  # Add a child under a generated key


class _Delete:
    def __repr__(self) -> str:
        return "DELETE"


# Returned by a transaction updater to remove the node
DELETE: Any = _Delete()


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of Store.transact.

    Attributes:
        committed: False if the updater aborted
        value: Value at the path after the transaction (the observed value
            when aborted)
    """

    committed: bool
    value: Any


Updater = Callable[[Any], Any]


def _overlaps(a: str, b: str) -> bool:
    """Whether one path is the other or one of its ancestors."""
    return a == b or a.startswith(b + "/") or b.startswith(a + "/") or not a or not b


class Store:
    """Adapter all repositories use to reach the database."""

    def __init__(self, backend: StoreBackend, settings: StoreSettings) -> None:
        """Initialize store.

        Args:
            backend: Database backend
            settings: Timeout, retry and cache configuration
        """
        self.backend = backend
        self.settings = settings
        self._cache: dict[str, tuple[float, Any]] = {}

    async def with_timeout(
        self, awaitable: Awaitable[T], timeout: float | None = None
    ) -> T:
        """Bound a store call by a timeout.

        Args:
            awaitable: Call to wait for
            timeout: Seconds (defaults to read_timeout)

        Returns:
            Result of the call

        Raises:
            UnavailableError: If the timeout expires
        """
        timeout = self.settings.read_timeout if timeout is None else timeout
        try:
            return await asyncio.wait_for(awaitable, timeout)
        except asyncio.TimeoutError as e:
            logfire.warn("Store call timed out", timeout=timeout)
            raise UnavailableError(f"Store did not answer within {timeout}s") from e

    async def read(self, path: str, *, use_cache: bool = True) -> Any:
        """Read the value at a path.

        Args:
            path: Node path
            use_cache: Serve from (and fill) the read cache when enabled.
                Callers that are about to compute a derived value pass False.

        Returns:
            The JSON value, or None if absent
        """
        caching = use_cache and self.settings.cache_enabled
        if caching:
            cached = self._cache.get(path)
            if cached and cached[0] > time.monotonic():
                return copy.deepcopy(cached[1])

        try:
            value = await self.with_timeout(self.backend.get(path))
        except TransientStoreError as e:
            raise UnavailableError(f"Store unavailable: {e}") from e

        if caching:
            self._cache[path] = (
                time.monotonic() + self.settings.cache_ttl,
                copy.deepcopy(value),
            )
        return value

    async def write(
        self, path: str, value: Any, mode: WriteMode = WriteMode.REPLACE
    ) -> str | None:
        """Write a value.

        Args:
            path: Node path (the parent node for CREATE)
            value: Value to write. For MERGE, a mapping of child key (or
                relative path) to value; a None value deletes that child.
            mode: REPLACE, MERGE or CREATE

        Returns:
            The generated key for CREATE, None otherwise
        """
        mode = WriteMode(mode)
        if mode is WriteMode.MERGE:
            if not isinstance(value, dict):
                raise TypeError("MERGE writes take a mapping of fields")
            await self._mutate(path, lambda: self.backend.update(path, value))
            return None
        if mode is WriteMode.CREATE:
            return await self._mutate(path, lambda: self.backend.push(path, value))
        await self._mutate(path, lambda: self.backend.set(path, value))
        return None

    async def delete(self, path: str) -> None:
        """Remove a node and all of its descendants."""
        await self._mutate(path, lambda: self.backend.delete(path))

    async def transact(self, path: str, updater: Updater) -> TransactionResult:
        """Run an optimistic transaction.

        `updater` receives a private copy of the current value (None if
        absent) and may be called several times. It returns the new value,
        None to abort without writing, or DELETE to remove the node.

        Args:
            path: Node path
            updater: Pure function from current to new value

        Returns:
            TransactionResult

        Raises:
            UnavailableError: If the transaction kept conflicting
        """
        observed: list[Any] = [None]

        def apply(current: Any) -> Any:
            observed[0] = copy.deepcopy(current)
            new_value = updater(current)
            if new_value is None:
                raise AbortTransaction()
            if new_value is DELETE:
                return None
            return new_value

        try:
            value = await self._mutate(
                path, lambda: self.backend.transaction(path, apply)
            )
        except AbortTransaction:
            return TransactionResult(committed=False, value=observed[0])
        return TransactionResult(committed=True, value=value)

    async def _mutate(self, path: str, call: Callable[[], Awaitable[T]]) -> T:
        retries = 0
        while True:
            try:
                result = await self.with_timeout(call())
            except (TransientStoreError, WriteConflictError) as e:
                retries += 1
                if retries > self.settings.max_retries:
                    logfire.error(
                        "Store write failed after retries",
                        path=path,
                        retries=self.settings.max_retries,
                        error=str(e),
                    )
                    raise UnavailableError(f"Store unavailable: {e}") from e
                delay = self.settings.retry_interval_base * 2 ** (retries - 1)
                logfire.warn(
                    "Retrying store write",
                    path=path,
                    retry=retries,
                    delay=delay,
                    error=str(e),
                )
                await asyncio.sleep(delay)
                continue
            self._invalidate(path)
            return result

    def _invalidate(self, path: str) -> None:
        for cached in [p for p in self._cache if _overlaps(p, path)]:
            del self._cache[cached]
