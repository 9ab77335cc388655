# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API routes package.

This package contains all /api endpoint definitions.
Each module provides a FastAPI router for a specific resource.

Modules:
    auth: Forwarding to the external auth service.
    departments: Department listing, detail, sub-resources and creation.
    subjects: Subject listing.
    classes: Class listing, detail and creation.
    users: User listing.
    enrollments: Enrollment by class id or invite code.
    stats: Dashboard counts and chart aggregates.
"""

from fastapi import APIRouter, Depends

from classroom.api.endpoints import auth, classes, departments, enrollments, stats, subjects, users
from classroom.api.middleware.rate_limit import enforce_rate_limit

# Create the main API router
router = APIRouter(prefix="/api")

# Auth forwarding is not rate limited here; the auth service applies its own rules
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Resource routers share the role-tiered rate limit
rate_limited = [Depends(enforce_rate_limit)]
router.include_router(departments.router, prefix="/departments", tags=["Departments"], dependencies=rate_limited)
router.include_router(subjects.router, prefix="/subjects", tags=["Subjects"], dependencies=rate_limited)
router.include_router(classes.router, prefix="/classes", tags=["Classes"], dependencies=rate_limited)
router.include_router(users.router, prefix="/users", tags=["Users"], dependencies=rate_limited)
router.include_router(enrollments.router, prefix="/enrollments", tags=["Enrollments"], dependencies=rate_limited)
router.include_router(stats.router, prefix="/stats", tags=["Stats"], dependencies=rate_limited)

__all__ = ["router"]
