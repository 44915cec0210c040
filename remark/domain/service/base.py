"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the business rules; repositories only move
    records in and out of the store.
    """

    pass
