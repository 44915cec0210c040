"""Application configuration."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FirebaseSettings(BaseSettings):
    """Firebase Realtime Database configuration.

    Read from the same variables the blog front-end deployment already uses
    (FIREBASE_API_KEY, FIREBASE_DATABASE_URL, ...). All of the web config
    values must be present before the production store starts.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = None
    auth_domain: str | None = None
    database_url: str | None = None
    project_id: str | None = None
    storage_bucket: str | None = None
    messaging_sender_id: str | None = None
    app_id: str | None = None

    # Service-account JSON for the Admin SDK.
    # Application default credentials are used when unset.
    credentials_file: str | None = None

    def missing(self) -> list[str]:
        """List the environment variables that are required but unset.

        Returns:
            Variable names, e.g. ["FIREBASE_DATABASE_URL"]
        """
        required = (
            "api_key",
            "auth_domain",
            "database_url",
            "project_id",
            "storage_bucket",
            "messaging_sender_id",
            "app_id",
        )
        return [f"FIREBASE_{name.upper()}" for name in required if not getattr(self, name)]


class StoreSettings(BaseModel):
    """Store adapter configuration."""

    # Applied to every store call (seconds)
    read_timeout: float = 5.0

    # Retries for write conflicts and transient errors on mutating calls
    max_retries: int = 3

    # Backoff before retry n is retry_interval_base * 2 ** (n - 1)
    retry_interval_base: float = 0.5

    # Optional read memoization
    cache_enabled: bool = True
    cache_ttl: float = 300.0


class CommentSettings(BaseModel):
    """Comment tree and like aggregation configuration."""

    # Bound for subtree recursion and ancestor walks (cycle guard)
    max_recursion_depth: int = 20

    # A comment whose lastSync is older than this is refreshed in the background
    stale_after_seconds: int = 300


class CORSSettings(BaseModel):
    """CORS configuration.

    Blog pages are static and served from arbitrary hosts, so the API is open.
    """

    allow_origins: list[str] = ["*"]
    allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    allow_headers: list[str] = ["Content-Type"]


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, nested values use the
    double-underscore syntax:

        NODE_ENV=production
        ADMIN_USERNAME=alice
        STORE__READ_TIMEOUT=3
        COMMENTS__STALE_AFTER_SECONDS=600
        FIREBASE_DATABASE_URL=https://example.firebaseio.com
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows STORE__MAX_RETRIES syntax
        extra="ignore",
        populate_by_name=True,
    )

    # NODE_ENV is what the blog deployment sets; ENVIRONMENT also works
    environment: Literal["test", "development", "staging", "production"] = Field(
        default="development",
        validation_alias=AliasChoices("NODE_ENV", "ENVIRONMENT"),
    )
    debug: bool = False

    host: str = "localhost"
    port: int = 8000

    # Username that is given the admin role when it registers
    admin_username: str | None = None

    # Nested settings
    store: StoreSettings = StoreSettings()
    comments: CommentSettings = CommentSettings()
    cors: CORSSettings = CORSSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    firebase: FirebaseSettings = Field(default_factory=FirebaseSettings)

    @property
    def expose_errors(self) -> bool:
        """Whether internal error messages may be returned to clients."""
        return self.environment == "development"
