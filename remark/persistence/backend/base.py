"""Store backend interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class AbortTransaction(Exception):
    """Raised by a transaction update function to leave the data untouched."""

    pass


class StoreBackend(ABC):
    """Hierarchical JSON document store.

    Defines the narrow set of operations the store adapter needs from the
    database SDK. Paths are slash-separated keys; a `None` value means
    "absent" both when reading and writing.
    Implementations live next to this module.
    """

    @abstractmethod
    async def get(self, path: str) -> Any:
        """Read the value at a path.

        Args:
            path: Node path

        Returns:
            The JSON value, or None if the node does not exist
        """
        pass

    @abstractmethod
    async def set(self, path: str, value: Any) -> None:
        """Overwrite the node at a path.

        Args:
            path: Node path
            value: New value (None deletes the node)
        """
        pass

    @abstractmethod
    async def update(self, path: str, fields: dict[str, Any]) -> None:
        """Update some children of a node.

        Keys may be nested paths relative to `path`; a None value deletes
        that child. All listed children change together.

        Args:
            path: Node path
            fields: Child key to new value
        """
        pass

    @abstractmethod
    async def push(self, path: str, value: Any) -> str:
        """Create a child with a generated, time-ordered key.

        Args:
            path: Parent node path
            value: Value of the new child

        Returns:
            The generated key
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Remove a node and all of its descendants.

        Args:
            path: Node path
        """
        pass

    @abstractmethod
    async def transaction(self, path: str, update: Callable[[Any], Any]) -> Any:
        """Run an optimistic transaction on a node.

        `update` receives the current value and returns the new one
        (None deletes the node). If the node changed before the write could
        commit, `update` is called again with the fresh value. Raising
        AbortTransaction from `update` propagates to the caller untouched.

        Args:
            path: Node path
            update: Pure function from current to new value

        Returns:
            The committed value

        Raises:
            AbortTransaction: If `update` aborted
            WriteConflictError: If the backend gave up retrying
        """
        pass
