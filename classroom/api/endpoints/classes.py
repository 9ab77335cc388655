# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class API endpoints.

This module provides endpoints for classes:
- GET / - List classes with search, subject and teacher filters
- POST / - Create a class
- GET /{class_id} - Class detail with subject, department and teacher
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classroom.api.dependencies import get_class_service, parse_resource_id
from classroom.domains.class_.service import ClassNotFoundError, ClassService
from classroom.infrastructure.database.connection import DatabaseError
from classroom.infrastructure.database.query import MAX_PAGE_LIMIT, parse_page_params
from classroom.models.class_ import ClassCreateRequest, ClassDetail, ClassListItem
from classroom.models.common import CreatedId, DataResponse, PaginatedResponse

logger = logging.getLogger(__name__)

router = APIRouter()

CLASS_NOT_FOUND = "No Class found."


@router.get(
    "",
    response_model=PaginatedResponse[ClassListItem],
    summary="List classes",
    description="List classes with optional search and subject/teacher name filters.",
)
async def list_classes(
    search: Annotated[str | None, Query(description="Search by name or invite code")] = None,
    subject: Annotated[str | None, Query(description="Filter by subject name")] = None,
    teacher: Annotated[str | None, Query(description="Filter by teacher name")] = None,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Rows per page, at most 100")] = None,
    service: ClassService = Depends(get_class_service),
) -> PaginatedResponse[ClassListItem]:
    params = parse_page_params(page, limit, max_limit=MAX_PAGE_LIMIT)
    try:
        return await service.list_classes(
            params,
            search=search,
            subject=subject,
            teacher=teacher,
        )
    except DatabaseError:
        logger.exception("GET /classes failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get classes",
        )


@router.post(
    "",
    response_model=DataResponse[CreatedId],
    status_code=status.HTTP_201_CREATED,
    summary="Create class",
    description="Create a class. The invite code is generated and schedules start empty.",
)
async def create_class(
    data: ClassCreateRequest,
    service: ClassService = Depends(get_class_service),
) -> DataResponse[CreatedId]:
    """Create a class.

    Unknown subject or teacher ids are rejected by the database and
    reported as 500.
    """
    logger.info("Creating class: %s (subject=%s, teacher=%s)", data.name, data.subject_id, data.teacher_id)
    try:
        created = await service.create_class(data)
    except DatabaseError:
        logger.exception("POST /classes failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create class",
        )
    return DataResponse[CreatedId](data=created)


@router.get(
    "/{class_id}",
    response_model=DataResponse[ClassDetail],
    summary="Get class",
)
async def get_class(
    class_id: str,
    service: ClassService = Depends(get_class_service),
) -> DataResponse[ClassDetail]:
    parsed_id = parse_resource_id(class_id, CLASS_NOT_FOUND)
    try:
        detail = await service.get_class(parsed_id)
    except ClassNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=CLASS_NOT_FOUND,
        )
    except DatabaseError:
        logger.exception("GET /classes/%s failed", class_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get class",
        )
    return DataResponse[ClassDetail](data=detail)
