# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Department API endpoints.

This module provides endpoints for departments:
- GET / - List departments with subject counts
- POST / - Create a department
- GET /{department_id} - Department detail with totals
- GET /{department_id}/subjects - Subjects of a department
- GET /{department_id}/classes - Classes of a department
- GET /{department_id}/users - Teachers or students of a department
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classroom.api.dependencies import get_department_service, parse_resource_id
from classroom.domains.department.service import (
    DepartmentNotFoundError,
    DepartmentService,
    InvalidRoleError,
)
from classroom.infrastructure.database.connection import DatabaseError
from classroom.infrastructure.database.query import parse_page_params
from classroom.models.class_ import ClassListItem
from classroom.models.common import CreatedId, DataResponse, PaginatedResponse
from classroom.models.department import (
    DepartmentCreateRequest,
    DepartmentDetail,
    DepartmentListItem,
)
from classroom.models.subject import SubjectRead
from classroom.models.user import UserRead

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_ID = "Invalid department id"


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get(
    "",
    response_model=PaginatedResponse[DepartmentListItem],
    summary="List departments",
    description="List departments with optional search on name and code.",
)
async def list_departments(
    search: Annotated[str | None, Query(description="Search by name or code")] = None,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Rows per page")] = None,
    service: DepartmentService = Depends(get_department_service),
) -> PaginatedResponse[DepartmentListItem]:
    params = parse_page_params(page, limit)
    try:
        return await service.list_departments(params, search=search)
    except DatabaseError:
        logger.exception("GET /departments failed")
        raise _server_error("Failed to fetch departments")


@router.post(
    "",
    response_model=DataResponse[CreatedId],
    status_code=status.HTTP_201_CREATED,
    summary="Create department",
)
async def create_department(
    data: DepartmentCreateRequest,
    service: DepartmentService = Depends(get_department_service),
) -> DataResponse[CreatedId]:
    """Create a department.

    A duplicate code is rejected by the database and reported as 500.
    """
    try:
        created = await service.create_department(data)
    except DatabaseError:
        logger.exception("POST /departments failed")
        raise _server_error("Failed to create department")
    return DataResponse[CreatedId](data=created)


@router.get(
    "/{department_id}",
    response_model=DataResponse[DepartmentDetail],
    summary="Get department",
    description="Department with subject, class and enrolled-student totals.",
)
async def get_department(
    department_id: str,
    service: DepartmentService = Depends(get_department_service),
) -> DataResponse[DepartmentDetail]:
    dept_id = parse_resource_id(department_id, INVALID_ID)
    try:
        detail = await service.get_department_detail(dept_id)
    except DepartmentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Department not found",
        )
    except DatabaseError:
        logger.exception("GET /departments/%s failed", department_id)
        raise _server_error("Failed to fetch department details")
    return DataResponse[DepartmentDetail](data=detail)


@router.get(
    "/{department_id}/subjects",
    response_model=PaginatedResponse[SubjectRead],
    summary="List department subjects",
)
async def list_department_subjects(
    department_id: str,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Rows per page")] = None,
    service: DepartmentService = Depends(get_department_service),
) -> PaginatedResponse[SubjectRead]:
    dept_id = parse_resource_id(department_id, INVALID_ID)
    params = parse_page_params(page, limit)
    try:
        return await service.list_department_subjects(dept_id, params)
    except DatabaseError:
        logger.exception("GET /departments/%s/subjects failed", department_id)
        raise _server_error("Failed to fetch department subjects")


@router.get(
    "/{department_id}/classes",
    response_model=PaginatedResponse[ClassListItem],
    summary="List department classes",
)
async def list_department_classes(
    department_id: str,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Rows per page")] = None,
    service: DepartmentService = Depends(get_department_service),
) -> PaginatedResponse[ClassListItem]:
    dept_id = parse_resource_id(department_id, INVALID_ID)
    params = parse_page_params(page, limit)
    try:
        return await service.list_department_classes(dept_id, params)
    except DatabaseError:
        logger.exception("GET /departments/%s/classes failed", department_id)
        raise _server_error("Failed to fetch department classes")


@router.get(
    "/{department_id}/users",
    response_model=PaginatedResponse[UserRead],
    summary="List department users",
    description="Teachers (through their classes) or students (through enrollments) of a department.",
)
async def list_department_users(
    department_id: str,
    role: Annotated[str | None, Query(description="Either teacher or student")] = None,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Rows per page")] = None,
    service: DepartmentService = Depends(get_department_service),
) -> PaginatedResponse[UserRead]:
    """List the teachers or students of a department.

    The role is validated before the department is looked at, so an
    invalid role is a 400 whether or not the department exists.
    """
    dept_id = parse_resource_id(department_id, INVALID_ID)
    params = parse_page_params(page, limit)
    try:
        return await service.list_department_users(dept_id, role, params)
    except InvalidRoleError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid role",
        )
    except DatabaseError:
        logger.exception("GET /departments/%s/users failed", department_id)
        raise _server_error("Failed to fetch department users")
