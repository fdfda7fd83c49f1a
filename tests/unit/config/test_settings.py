"""
Module: test_settings.py
Description: Unit tests for application settings.

Tests environment parsing of the API key, allowed origins and log
level.
"""

import pytest
from pydantic import ValidationError

from bridge_backend.config.settings import Settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove settings variables that could leak in from the shell."""
    for name in ("API_KEY", "API_ALLOWED_ORIGINS", "DATABASE_URL", "LOG_LEVEL", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Test cases for Settings parsing."""

    def test_defaults(self, clean_env):
        """Test defaults with no environment."""
        s = Settings(_env_file=None)

        assert s.api_key is None
        assert s.api_allowed_origins == []
        assert s.database_url is None
        assert s.log_level == "INFO"

    def test_comma_separated_origins(self, clean_env):
        """Test comma-separated allowed origins from the environment."""
        clean_env.setenv("API_ALLOWED_ORIGINS", "https://a.com, https://b.com ,,")

        s = Settings(_env_file=None)

        assert s.api_allowed_origins == ["https://a.com", "https://b.com"]

    def test_json_list_origins(self, clean_env):
        """Test JSON list allowed origins from the environment."""
        clean_env.setenv("API_ALLOWED_ORIGINS", '["https://a.com", "https://b.com"]')

        s = Settings(_env_file=None)

        assert s.api_allowed_origins == ["https://a.com", "https://b.com"]

    def test_blank_key_is_unset(self, clean_env):
        """Test that an empty API_KEY disables authorization."""
        clean_env.setenv("API_KEY", "   ")
        clean_env.setenv("DATABASE_URL", "")

        s = Settings(_env_file=None)

        assert s.api_key is None
        assert s.database_url is None

    def test_key_from_env(self, clean_env):
        """Test that API_KEY is read case-insensitively."""
        clean_env.setenv("api_key", "secret123")

        s = Settings(_env_file=None)

        assert s.api_key == "secret123"

    def test_log_level_normalized(self, clean_env):
        """Test that log level is upper-cased."""
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self, clean_env):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="verbose")
