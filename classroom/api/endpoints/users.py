# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classroom.api.dependencies import get_user_service
from classroom.domains.user.service import UserService
from classroom.infrastructure.database.connection import DatabaseError
from classroom.infrastructure.database.query import MAX_PAGE_LIMIT, parse_page_params
from classroom.models.common import PaginatedResponse
from classroom.models.user import UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[UserRead],
    summary="List users",
    description="List users with optional search on name and email and an exact role filter.",
)
async def list_users(
    search: Annotated[str | None, Query(description="Search by name or email")] = None,
    role: Annotated[str | None, Query(description="student, teacher or admin")] = None,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Rows per page, at most 100")] = None,
    service: UserService = Depends(get_user_service),
) -> PaginatedResponse[UserRead]:
    params = parse_page_params(page, limit, max_limit=MAX_PAGE_LIMIT)
    try:
        return await service.list_users(params, search=search, role=role)
    except DatabaseError:
        logger.exception("GET /users failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get users",
        )
