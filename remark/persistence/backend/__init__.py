"""Store backends."""

from remark.persistence.backend.base import AbortTransaction, StoreBackend
from remark.persistence.backend.inmemory import InMemoryBackend

__all__ = [
    "AbortTransaction",
    "InMemoryBackend",
    "StoreBackend",
]
