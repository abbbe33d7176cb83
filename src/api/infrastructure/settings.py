"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        USECRAFT_DB_HOST: Database host (default: localhost)
        USECRAFT_DB_PORT: Database port (default: 5432)
        USECRAFT_DB_DATABASE: Database name (default: usecraft)
        USECRAFT_DB_USERNAME: Database user (default: usecraft)
        USECRAFT_DB_PASSWORD: Database password (required in production)
        USECRAFT_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        USECRAFT_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        USECRAFT_DB_APPLICATION_NAME: Name reported to the server (default: usecraft-authoring)
    """

    model_config = SettingsConfigDict(
        env_prefix="USECRAFT_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="usecraft", description="Database name")
    username: str = Field(default="usecraft", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    application_name: str = Field(
        default="usecraft-authoring",
        description="application_name reported to PostgreSQL",
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthoringSettings(BaseSettings):
    """Settings for the use case authoring context.

    Environment variables:
        USECRAFT_AUTHORING_SLUG_MAX_LENGTH: Maximum use case slug length (default: 50)
        USECRAFT_AUTHORING_PROJECT_SLUG_MAX_LENGTH: Maximum project slug length (default: 64)
    """

    model_config = SettingsConfigDict(
        env_prefix="USECRAFT_AUTHORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    slug_max_length: int = Field(
        default=50,
        description="Maximum length of a use case slug",
        ge=16,
        le=255,
    )
    project_slug_max_length: int = Field(
        default=64,
        description="Maximum length of a project slug",
        ge=16,
        le=255,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Usecraft API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def authoring(self) -> AuthoringSettings:
        """Get authoring settings."""
        return get_authoring_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_authoring_settings() -> AuthoringSettings:
    """Get cached authoring settings."""
    return AuthoringSettings()
