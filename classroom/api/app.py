# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the application factory for the Classroom API.

Run with:
    uvicorn --factory classroom.api.app:create_app --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from classroom import __version__
from classroom.api.endpoints import router as api_router
from classroom.api.middleware.rate_limit import create_limiter
from classroom.api.middleware.session import SessionMiddleware
from classroom.api.middleware.trailing_slash import TrailingSlashMiddleware
from classroom.api.routes import health
from classroom.core.config import Settings, get_settings
from classroom.infrastructure.database.connection import Database
from classroom.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Checks the database on startup, and on shutdown closes the auth
    forwarding client and disposes the database engine.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting Classroom API",
        extra={"environment": settings.environment, "debug": settings.debug},
    )

    if await app.state.database.check_connection():
        logger.info("Database connection verified")
    else:
        logger.warning("Database is not reachable at startup")

    yield

    try:
        await app.state.auth_client.aclose()
        logger.info("Auth client closed")
    except Exception as e:
        logger.warning("Error closing auth client: %s", str(e))

    try:
        await app.state.database.dispose()
        logger.info("Database connections closed")
    except Exception as e:
        logger.warning("Error closing database connections: %s", str(e))

    logger.info("Shutting down Classroom API")


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    auth_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators default to ones built from settings; tests pass their own.

    Args:
        settings: Application settings. Defaults to get_settings().
        database: Database access. Defaults to one built from settings.
        auth_client: HTTP client for the auth service. Defaults to one
            pointed at settings.auth.service_url.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Classroom API",
        description="Classroom management backend: departments, subjects, classes and enrollments",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.auth_client = auth_client or httpx.AsyncClient(
        base_url=settings.auth.service_url,
        timeout=settings.auth.timeout,
    )
    app.state.limiter = create_limiter(settings)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================
    app.add_middleware(SessionMiddleware, cookie_name=settings.auth.session_cookie)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    app.add_middleware(TrailingSlashMiddleware, skip_prefixes=("/api/auth/",))

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(api_router)

    return app
