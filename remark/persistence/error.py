"""Persistence layer errors.

Backends translate SDK failures into these so the store adapter can decide
what to retry.
"""


class PersistenceError(Exception):
    """Base persistence error."""

    pass


class TransientStoreError(PersistenceError):
    """Temporary failure (network, service unavailable); safe to retry."""

    pass


class StorePermissionError(PersistenceError):
    """The store rejected the call for lack of permission; never retried."""

    pass


class WriteConflictError(PersistenceError):
    """An optimistic transaction could not commit because the data kept changing."""

    pass
