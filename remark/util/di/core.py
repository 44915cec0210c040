"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from remark.config import CommentSettings, FirebaseSettings, Settings, StoreSettings
from remark.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_store_settings(self, settings: Settings) -> StoreSettings:
        """Provide store adapter settings."""
        return settings.store

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment tree settings."""
        return settings.comments

    @provide(scope=Scope.APP)
    def provide_firebase_settings(self, settings: Settings) -> FirebaseSettings:
        """Provide Firebase settings."""
        return settings.firebase
