"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    AuthoringSettings,
    DatabaseSettings,
    Settings,
    get_authoring_settings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)


class TestDatabaseSettingsEnvironment:
    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("USECRAFT_DB_HOST", "db.internal")
        monkeypatch.setenv("USECRAFT_DB_PORT", "6543")
        monkeypatch.setenv("USECRAFT_DB_APPLICATION_NAME", "usecraft-worker")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.port == 6543
        assert settings.application_name == "usecraft-worker"

    def test_connection_string_omits_password(self):
        settings = DatabaseSettings(username="author", password="secret")

        assert "secret" not in settings.connection_string
        assert settings.connection_string.startswith("postgresql://author@")


class TestAuthoringSettings:
    def test_defaults(self):
        settings = AuthoringSettings()
        assert settings.slug_max_length == 50
        assert settings.project_slug_max_length == 64

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("USECRAFT_AUTHORING_SLUG_MAX_LENGTH", "80")

        assert AuthoringSettings().slug_max_length == 80

    def test_slug_length_has_a_floor(self):
        with pytest.raises(ValidationError):
            AuthoringSettings(slug_max_length=4)

    def test_cached_accessor(self):
        assert get_authoring_settings() is get_authoring_settings()


def test_settings_aggregate():
    settings = Settings()

    assert settings.app_name == "Usecraft API"
    assert isinstance(settings.authoring, AuthoringSettings)
    assert isinstance(settings.database, DatabaseSettings)
