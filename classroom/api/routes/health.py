# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides the root greeting and the health endpoint for the API.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from classroom import __version__

logger = logging.getLogger(__name__)

router = APIRouter()


class ComponentHealth(BaseModel):
    """Individual component health status."""
    status: str = Field(description="Component status")
    latency_ms: float | None = Field(None, description="Response latency in ms")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    checked_at: datetime = Field(description="When health was checked")
    database: ComponentHealth


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "Welcome to Classroom API"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report API status and database reachability.",
)
async def health(request: Request) -> HealthResponse:
    start = time.time()
    reachable = await request.app.state.database.check_connection()
    latency = (time.time() - start) * 1000

    if not reachable:
        logger.error("Database health check failed")

    return HealthResponse(
        status="healthy" if reachable else "degraded",
        version=__version__,
        environment=request.app.state.settings.environment,
        checked_at=datetime.now(timezone.utc),
        database=ComponentHealth(
            status="healthy" if reachable else "unhealthy",
            latency_ms=round(latency, 2) if reachable else None,
        ),
    )
