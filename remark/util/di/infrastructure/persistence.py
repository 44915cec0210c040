"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide

from remark.config import FirebaseSettings, StoreSettings
from remark.domain.repository import CommentRepository, LikeRepository, UserRepository
from remark.persistence.backend import StoreBackend
from remark.persistence.backend.firebase import FirebaseBackend
from remark.persistence.repository import (
    StoreCommentRepository,
    StoreLikeRepository,
    StoreUserRepository,
)
from remark.persistence.store import Store
from remark.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """Persistence component base.

    Implementations provide the StoreBackend; everything above it is
    shared (see ProdStoreProvider).
    """

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using Firebase Realtime Database."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_backend(self, settings: FirebaseSettings) -> AsyncIterator[StoreBackend]:
        """Provide the Firebase backend, one SDK app per process.

        Raises:
            ConfigurationError: If Firebase settings are incomplete
        """
        backend = FirebaseBackend.from_settings(settings)
        yield backend
        backend.close()
        logfire.info("Firebase app closed")


class ProdStoreProvider(ProviderBase):
    """Store adapter and repositories - concrete, no mocks needed.

    APP-scoped: the store holds the read cache shared by all requests.
    """

    scope = Scope.APP

    @provide
    def get_store(self, backend: StoreBackend, settings: StoreSettings) -> Store:
        """Provide the store adapter."""
        return Store(backend, settings)

    @provide
    def get_user_repository(self, store: Store) -> UserRepository:
        """Provide User repository."""
        return StoreUserRepository(store)

    @provide
    def get_comment_repository(self, store: Store) -> CommentRepository:
        """Provide Comment repository."""
        return StoreCommentRepository(store)

    @provide
    def get_like_repository(self, store: Store) -> LikeRepository:
        """Provide Like repository."""
        return StoreLikeRepository(store)
