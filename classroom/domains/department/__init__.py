# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Department domain package.

This package provides department functionality including:
- Department listing with subject counts
- Department detail totals
- Department-scoped subjects, classes and users
"""

from classroom.domains.department.service import (
    DepartmentService,
    DepartmentServiceError,
    DepartmentNotFoundError,
    InvalidRoleError,
)

__all__ = [
    "DepartmentService",
    "DepartmentServiceError",
    "DepartmentNotFoundError",
    "InvalidRoleError",
]
