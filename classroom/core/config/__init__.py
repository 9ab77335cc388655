# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the Classroom API.

Example:
    >>> from classroom.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.database.url)
"""

from classroom.core.config.settings import (
    AuthSettings,
    CORSSettings,
    DatabaseSettings,
    RateLimitSettings,
    SeedSettings,
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
    "AuthSettings",
    "RateLimitSettings",
    "CORSSettings",
    "SeedSettings",
]
