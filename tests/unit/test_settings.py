# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from clientdesk.core.config.settings import (
    DEFAULT_DEVELOPMENT_DATABASE_URL,
    CORSSettings,
    JWTSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

BASE_ENV = {"JWT_SECRET": "unit-test-secret"}


def _settings(**env: str) -> Settings:
    with patch.dict(os.environ, {**BASE_ENV, **env}, clear=True):
        return Settings(_env_file=None)


class TestJWTSettings:
    """Tests for JWTSettings."""

    def test_secret_is_mandatory(self) -> None:
        """Test that settings refuse to load without JWT_SECRET."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                JWTSettings(_env_file=None)

    def test_blank_secret_rejected(self) -> None:
        """Test that a whitespace secret is refused."""
        with patch.dict(os.environ, {"JWT_SECRET": "   "}, clear=True):
            with pytest.raises(ValidationError):
                JWTSettings(_env_file=None)

    def test_defaults(self) -> None:
        """Test default algorithm and lifetime."""
        with patch.dict(os.environ, BASE_ENV, clear=True):
            settings = JWTSettings(_env_file=None)

        assert settings.algorithm == "HS256"
        assert settings.expire_hours == 24
        assert settings.secret_key.get_secret_value() == "unit-test-secret"


class TestSettings:
    """Tests for the aggregated Settings."""

    def test_development_falls_back_to_local_database(self) -> None:
        """Test the development database default."""
        settings = _settings(ENVIRONMENT="development")

        assert settings.database.resolved_url == DEFAULT_DEVELOPMENT_DATABASE_URL
        assert settings.database.is_configured is False
        assert settings.is_development

    def test_production_requires_database_url(self) -> None:
        """Test that production refuses to start without DATABASE_URL."""
        with pytest.raises(ValidationError):
            _settings(ENVIRONMENT="production")

    def test_production_defaults(self) -> None:
        """Test secure cookie and hidden diagnostics in production."""
        settings = _settings(
            ENVIRONMENT="production",
            DATABASE_URL="postgresql+asyncpg://u:p@db/clientdesk",
        )

        assert settings.is_production
        assert settings.cookie.secure is True
        assert settings.diagnostics.expose_debug_endpoint is False

    def test_non_production_defaults(self) -> None:
        """Test insecure cookie and exposed diagnostics outside production."""
        settings = _settings(ENVIRONMENT="test")

        assert settings.cookie.secure is False
        assert settings.cookie.name == "auth-token"
        assert settings.cookie.samesite == "lax"
        assert settings.diagnostics.expose_debug_endpoint is True

    def test_node_env_alias(self) -> None:
        """Test that NODE_ENV selects the environment."""
        settings = _settings(NODE_ENV="test")

        assert settings.environment == "test"

    def test_explicit_debug_endpoint_override(self) -> None:
        """Test that production diagnostics can be enabled explicitly."""
        settings = _settings(
            ENVIRONMENT="production",
            DATABASE_URL="postgresql+asyncpg://u:p@db/clientdesk",
            DEBUG_EXPOSE_DEBUG_ENDPOINT="true",
        )

        assert settings.diagnostics.expose_debug_endpoint is True

    def test_rate_limit_settings(self) -> None:
        """Test rate limit configuration from the environment."""
        settings = _settings(RATE_LIMIT_ENABLED="false", RATE_LIMIT_LOGIN_LIMIT="3/minute")

        assert settings.rate_limit.enabled is False
        assert settings.rate_limit.login_limit == "3/minute"


class TestCORSSettings:
    """Tests for CORSSettings."""

    def test_origins_list_parsing(self) -> None:
        """Test comma-separated origins are split and trimmed."""
        settings = CORSSettings(origins="http://a.test, http://b.test,,")

        assert settings.origins_list == ["http://a.test", "http://b.test"]


class TestGetSettings:
    """Tests for the cached accessor."""

    def test_get_settings_is_cached(self) -> None:
        """Test that get_settings returns the same instance until cleared."""
        clear_settings_cache()
        first = get_settings()

        assert get_settings() is first

        clear_settings_cache()
        assert get_settings() is not first
        clear_settings_cache()
