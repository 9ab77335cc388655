# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment API endpoints.

- POST / - Enroll a student in a class by class id
- POST /join - Enroll a student in a class by invite code
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from classroom.api.dependencies import get_enrollment_service
from classroom.domains.enrollment.service import (
    AlreadyEnrolledError,
    ClassNotFoundError,
    EnrollmentService,
    EnrollmentServiceError,
    MissingFieldsError,
    StudentNotFoundError,
)
from classroom.infrastructure.database.connection import DatabaseError
from classroom.models.common import DataResponse
from classroom.models.enrollment import (
    EnrollmentDetail,
    EnrollStudentRequest,
    JoinClassRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http_error(error: EnrollmentServiceError) -> HTTPException:
    """Map an enrollment service error to its HTTP status."""
    if isinstance(error, MissingFieldsError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, (ClassNotFoundError, StudentNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, AlreadyEnrolledError):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(error))


@router.post(
    "",
    response_model=DataResponse[EnrollmentDetail],
    status_code=status.HTTP_201_CREATED,
    summary="Enroll student",
)
async def create_enrollment(
    data: EnrollStudentRequest,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> DataResponse[EnrollmentDetail]:
    try:
        enrollment = await service.enroll_student(data)
    except EnrollmentServiceError as e:
        raise _to_http_error(e)
    except DatabaseError:
        logger.exception("POST /enrollments failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create enrollment",
        )
    return DataResponse[EnrollmentDetail](data=enrollment)


@router.post(
    "/join",
    response_model=DataResponse[EnrollmentDetail],
    status_code=status.HTTP_201_CREATED,
    summary="Join class by invite code",
)
async def join_class(
    data: JoinClassRequest,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> DataResponse[EnrollmentDetail]:
    try:
        enrollment = await service.join_class(data)
    except EnrollmentServiceError as e:
        raise _to_http_error(e)
    except DatabaseError:
        logger.exception("POST /enrollments/join failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to join class",
        )
    return DataResponse[EnrollmentDetail](data=enrollment)
