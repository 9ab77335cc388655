# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classroom.api.dependencies import get_subject_service
from classroom.domains.subject.service import SubjectService
from classroom.infrastructure.database.connection import DatabaseError
from classroom.infrastructure.database.query import MAX_PAGE_LIMIT, parse_page_params
from classroom.models.common import PaginatedResponse
from classroom.models.subject import SubjectListItem

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[SubjectListItem],
    summary="List subjects",
    description="List subjects with optional search and department filter.",
)
async def list_subjects(
    search: Annotated[str | None, Query(description="Search by name or code")] = None,
    department: Annotated[str | None, Query(description="Filter by department name")] = None,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Rows per page, at most 100")] = None,
    service: SubjectService = Depends(get_subject_service),
) -> PaginatedResponse[SubjectListItem]:
    params = parse_page_params(page, limit, max_limit=MAX_PAGE_LIMIT)
    try:
        return await service.list_subjects(params, search=search, department=department)
    except DatabaseError:
        logger.exception("GET /subjects failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get subjects",
        )
