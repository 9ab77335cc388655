# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the classroom schema.

Importing this package registers every table on ``Base.metadata``.
"""

from classroom.infrastructure.database.models.academic import (
    Class,
    ClassStatus,
    Department,
    Enrollment,
    Subject,
)
from classroom.infrastructure.database.models.auth import (
    Account,
    Session,
    User,
    UserRole,
    Verification,
)
from classroom.infrastructure.database.models.base import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    # Auth
    "User",
    "UserRole",
    "Session",
    "Account",
    "Verification",
    # Academic
    "Department",
    "Subject",
    "Class",
    "ClassStatus",
    "Enrollment",
]
