"""Application settings and configuration.

This module defines all configuration options for the Open Court service.
Settings are loaded from environment variables with sensible defaults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from open_court.services.verdicts import ResolutionPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Open Court", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./open_court.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Open Court resolution policy
    court_min_verdicts: int = Field(default=5, ge=1, alias="COURT_MIN_VERDICTS")
    court_guilty_ratio: float = Field(default=0.5, ge=0.0, lt=1.0, alias="COURT_GUILTY_RATIO")
    court_verdict_public: bool = Field(default=False, alias="COURT_VERDICT_PUBLIC")
    court_page_size: int = Field(default=10, ge=1, alias="COURT_PAGE_SIZE")
    court_history_limit: int = Field(default=50, ge=1, alias="COURT_HISTORY_LIMIT")

    # Public mod log paging
    mod_log_page_size: int = Field(default=20, ge=1, alias="MOD_LOG_PAGE_SIZE")
    mod_log_max_page_size: int = Field(default=100, ge=1, alias="MOD_LOG_MAX_PAGE_SIZE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def resolution_policy(self) -> ResolutionPolicy:
        """Return the configured verdict resolution policy."""
        from open_court.services.verdicts import ResolutionPolicy

        return ResolutionPolicy(
            min_verdicts=self.court_min_verdicts,
            guilty_ratio=self.court_guilty_ratio,
        )


settings = Settings()  # type: ignore[call-arg]
