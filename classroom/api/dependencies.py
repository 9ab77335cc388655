# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

The Database is created once by the application factory and stored on
app.state; these dependencies hand it, or a service built on it, to the
endpoints.

Example:
    @router.get("")
    async def list_classes(
        service: ClassService = Depends(get_class_service),
    ):
        ...
"""

import logging
import re

from fastapi import Depends, HTTPException, Request, status

from classroom.domains.class_.service import ClassService
from classroom.domains.department.service import DepartmentService
from classroom.domains.enrollment.service import EnrollmentService
from classroom.domains.stats.service import StatsService
from classroom.domains.subject.service import SubjectService
from classroom.domains.user.service import UserService
from classroom.infrastructure.database.connection import Database
from classroom.models.common import BIGINT_MAX, BIGINT_MIN

logger = logging.getLogger(__name__)

_INTEGER_ID = re.compile(r"^\s*-?\d+\s*$")


def get_database(request: Request) -> Database:
    """Get the application's Database.

    Args:
        request: HTTP request.

    Returns:
        Database stored on app.state by the application factory.
    """
    return request.app.state.database


def parse_resource_id(raw: str, detail: str) -> int:
    """Parse an integer path identifier.

    Args:
        raw: Path segment as received.
        detail: Error message used when the value is not an integer.

    Returns:
        Parsed identifier.

    Raises:
        HTTPException: 400 if the value is not an integer or does not fit
            a 64-bit column.
    """
    if not _INTEGER_ID.match(raw):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    value = int(raw)
    if not BIGINT_MIN <= value <= BIGINT_MAX:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return value


def get_department_service(db: Database = Depends(get_database)) -> DepartmentService:
    return DepartmentService(db=db)


def get_subject_service(db: Database = Depends(get_database)) -> SubjectService:
    return SubjectService(db=db)


def get_class_service(db: Database = Depends(get_database)) -> ClassService:
    return ClassService(db=db)


def get_user_service(db: Database = Depends(get_database)) -> UserService:
    return UserService(db=db)


def get_enrollment_service(db: Database = Depends(get_database)) -> EnrollmentService:
    return EnrollmentService(db=db)


def get_stats_service(db: Database = Depends(get_database)) -> StatsService:
    return StatsService(db=db)
