# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides student enrollment functionality including:
- Enrollment by class id
- Joining a class by invite code
"""

from classroom.domains.enrollment.service import (
    EnrollmentService,
    EnrollmentServiceError,
    MissingFieldsError,
    ClassNotFoundError,
    StudentNotFoundError,
    AlreadyEnrolledError,
)

__all__ = [
    "EnrollmentService",
    "EnrollmentServiceError",
    "MissingFieldsError",
    "ClassNotFoundError",
    "StudentNotFoundError",
    "AlreadyEnrolledError",
]
