"""Dependency injection.

Providers are listed once in PROVIDERS. A provider base with subclasses
is a swappable component: tests pick its mock subclass, production its
real one (see tests/di).
"""

from typing import Type

from remark.util.di.application import ProdApplicationProvider
from remark.util.di.base import Component, ProviderBase
from remark.util.di.core import ProdConfigProvider
from remark.util.di.domain import ProdDomainProvider
from remark.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdStoreProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdStoreProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable: Firebase in production, in-memory tree in tests
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class to instantiate.

    Args:
        base: Entry of PROVIDERS
        use_mock: Pick the mock subclass of a swappable component

    Raises:
        ValueError: If the component has no subclass of the requested kind
    """
    variants = base.__subclasses__()
    if not variants:
        return base

    for variant in variants:
        if getattr(variant, "__is_mock__", False) == use_mock:
            return variant

    component = getattr(base, "__mock_component__", base.__name__)
    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} provider registered for {component}")


__all__ = [
    "PROVIDERS",
    "Component",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProdStoreProvider",
    "ProviderBase",
    "get_provider",
]
