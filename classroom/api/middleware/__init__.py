# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware package.

This package contains middleware and request guards for:
- Session resolution from the auth service's session table
- Role-tiered rate limiting
- Trailing slash normalization
"""

from classroom.api.middleware.rate_limit import create_limiter, enforce_rate_limit
from classroom.api.middleware.session import CurrentUser, SessionMiddleware, get_current_user
from classroom.api.middleware.trailing_slash import TrailingSlashMiddleware

__all__ = [
    "CurrentUser",
    "SessionMiddleware",
    "TrailingSlashMiddleware",
    "get_current_user",
    "create_limiter",
    "enforce_rate_limit",
]
