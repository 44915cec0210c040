"""In-memory store backend for testing and local runs.

Mimics the Realtime Database semantics the services rely on:
- writing None (or an empty object) removes the node
- parents left without children disappear
- push keys sort in creation order
- transactions are optimistic: if the node changes while the update
  function runs, the update is re-run against the fresh value
"""

import asyncio
import copy
import random
import time
from collections.abc import Callable
from typing import Any

from remark.persistence.backend.base import StoreBackend
from remark.persistence.error import WriteConflictError

PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"

# Same budget the Firebase SDKs use before giving up on a transaction
MAX_TRANSACTION_ATTEMPTS = 25


def _split(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _normalize(value: Any) -> Any:
    """Drop None members and empty objects, the way the database stores JSON."""
    if isinstance(value, dict):
        result = {}
        for key, child in value.items():
            child = _normalize(child)
            if child is not None:
                result[str(key)] = child
        return result or None
    if isinstance(value, (list, tuple)):
        # Arrays come back as arrays, like the SDK returns dense index keys
        items = [_normalize(child) for child in value]
        return items if any(item is not None for item in items) else None
    return value


class PushIdGenerator:
    """Generate 20-character keys that sort by creation time.

    8 characters of millisecond timestamp followed by 12 random characters.
    Keys generated within the same millisecond increment the random part,
    so ordering holds even for bursts.
    """

    def __init__(self) -> None:
        self._last_time = 0
        self._last_random: list[int] = []

    def __call__(self) -> str:
        now = int(time.time() * 1000)
        duplicate = now == self._last_time
        self._last_time = now

        time_chars = []
        for _ in range(8):
            time_chars.append(PUSH_CHARS[now % 64])
            now //= 64
        time_chars.reverse()

        if not duplicate:
            self._last_random = [random.randrange(64) for _ in range(12)]
        else:
            i = 11
            while i >= 0 and self._last_random[i] == 63:
                self._last_random[i] = 0
                i -= 1
            if i >= 0:
                self._last_random[i] += 1

        return "".join(time_chars) + "".join(PUSH_CHARS[i] for i in self._last_random)


class InMemoryBackend(StoreBackend):
    """In-memory implementation of StoreBackend.

    Every operation yields to the event loop once, so concurrent callers
    interleave the way they would against the real service.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._root: dict[str, Any] = _normalize(copy.deepcopy(data)) or {}
        self._next_push_id = PushIdGenerator()

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the whole tree."""
        return copy.deepcopy(self._root)

    def _get(self, path: str) -> Any:
        node: Any = self._root
        for segment in _split(path):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return copy.deepcopy(node)

    def _set(self, path: str, value: Any) -> None:
        segments = _split(path)
        value = _normalize(copy.deepcopy(value))

        if not segments:
            self._root = value if isinstance(value, dict) else {}
            return

        # Walk down, creating intermediate objects as needed
        trail = [self._root]
        node = self._root
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                if value is None:
                    return
                child = {}
                node[segment] = child
            node = child
            trail.append(node)

        leaf = segments[-1]
        if value is None:
            node.pop(leaf, None)
        else:
            node[leaf] = value

        # Prune parents left empty
        for depth in range(len(segments) - 1, 0, -1):
            if trail[depth]:
                break
            trail[depth - 1].pop(segments[depth - 1], None)

    async def get(self, path: str) -> Any:
        await asyncio.sleep(0)
        return self._get(path)

    async def set(self, path: str, value: Any) -> None:
        await asyncio.sleep(0)
        self._set(path, value)

    async def update(self, path: str, fields: dict[str, Any]) -> None:
        await asyncio.sleep(0)
        for key, value in fields.items():
            self._set(f"{path}/{key}", value)

    async def push(self, path: str, value: Any) -> str:
        await asyncio.sleep(0)
        key = self._next_push_id()
        self._set(f"{path}/{key}", value)
        return key

    async def delete(self, path: str) -> None:
        await asyncio.sleep(0)
        self._set(path, None)

    async def transaction(self, path: str, update: Callable[[Any], Any]) -> Any:
        for _ in range(MAX_TRANSACTION_ATTEMPTS):
            before = self._get(path)
            new_value = update(copy.deepcopy(before))
            await asyncio.sleep(0)
            if self._get(path) == before:
                self._set(path, new_value)
                return self._get(path)
        raise WriteConflictError(f"Transaction at {path} did not commit")
