# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for ClientDesk.

Settings are pydantic-settings models loaded from environment variables.

Example:
    >>> from clientdesk.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from clientdesk.core.config.settings import (
    CookieSettings,
    CORSSettings,
    DatabaseSettings,
    DebugSettings,
    JWTSettings,
    RateLimitSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "JWTSettings",
    "CookieSettings",
    "RateLimitSettings",
    "CORSSettings",
    "DebugSettings",
]
