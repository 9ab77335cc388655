# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard statistics endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classroom.api.dependencies import get_stats_service
from classroom.domains.stats.service import DEFAULT_LATEST_LIMIT, StatsService
from classroom.infrastructure.database.connection import DatabaseError
from classroom.infrastructure.database.query import parse_page_params
from classroom.models.common import DataResponse
from classroom.models.stats import ChartStats, LatestStats, OverviewStats

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/overview",
    response_model=DataResponse[OverviewStats],
    summary="Entity counts",
)
async def get_overview(
    service: StatsService = Depends(get_stats_service),
) -> DataResponse[OverviewStats]:
    try:
        return DataResponse[OverviewStats](data=await service.get_overview())
    except DatabaseError:
        logger.exception("GET /stats/overview failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch overview stats",
        )


@router.get(
    "/latest",
    response_model=DataResponse[LatestStats],
    summary="Latest classes and teachers",
)
async def get_latest(
    limit: Annotated[str | None, Query(description="Rows per list")] = None,
    service: StatsService = Depends(get_stats_service),
) -> DataResponse[LatestStats]:
    params = parse_page_params(None, limit, default_limit=DEFAULT_LATEST_LIMIT)
    try:
        return DataResponse[LatestStats](data=await service.get_latest(params.limit))
    except DatabaseError:
        logger.exception("GET /stats/latest failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch latest stats",
        )


@router.get(
    "/charts",
    response_model=DataResponse[ChartStats],
    summary="Chart aggregates",
)
async def get_charts(
    service: StatsService = Depends(get_stats_service),
) -> DataResponse[ChartStats]:
    try:
        return DataResponse[ChartStats](data=await service.get_charts())
    except DatabaseError:
        logger.exception("GET /stats/charts failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch chart stats",
        )
