"""Application settings and configuration.

This module defines all configuration options for the Smokes Hub application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="CS2 Smokes Hub API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=3000, ge=1, le=65535, alias="PORT")
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./smokes_hub.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT session tokens
    jwt_secret: str = Field(alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Steam OpenID / Web API
    steam_api_key: str = Field(default="", alias="STEAM_API_KEY")
    steam_realm: str = Field(default="http://localhost:3000", alias="STEAM_REALM")
    steam_return_url: str = Field(
        default="http://localhost:3000/auth/steam/return",
        alias="STEAM_RETURN_URL",
    )
    steam_http_timeout_seconds: float = Field(
        default=10.0,
        alias="STEAM_HTTP_TIMEOUT_SECONDS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5757"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "PATCH"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
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
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def allowed_origins(self) -> list[str]:
        """Return CORS origins including the configured frontend, if any."""
        origins = list(self.cors_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins


settings = Settings()  # type: ignore[call-arg]
