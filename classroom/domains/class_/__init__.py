# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class domain package.

This package provides class functionality including:
- Class listing and search
- Class detail
- Class creation with invite codes
"""

from classroom.domains.class_.service import (
    ClassService,
    ClassServiceError,
    ClassNotFoundError,
    generate_invite_code,
)

__all__ = [
    "ClassService",
    "ClassServiceError",
    "ClassNotFoundError",
    "generate_invite_code",
]
