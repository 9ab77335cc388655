# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Settings pointed at a throwaway SQLite database
- A migrated Database, optionally seeded with the bundled dataset
- The FastAPI application and an async HTTP client bound to it
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.pool import NullPool

from classroom.api.app import create_app
from classroom.core.config.settings import DatabaseSettings, SeedSettings, Settings
from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.models import Session
from classroom.infrastructure.database.seeds import (
    PasswordHasher,
    SeedReconciler,
    load_seed_data,
)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (uses a SQLite database)"
    )


# =============================================================================
# Settings and Database Fixtures
# =============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Test settings backed by a file SQLite database in tmp_path."""
    return Settings(
        environment="test",
        log_level="WARNING",
        database=DatabaseSettings(explicit_url=f"sqlite+aiosqlite:///{tmp_path / 'classroom.db'}"),
        seed=SeedSettings(bcrypt_rounds=4),
    )


@pytest_asyncio.fixture(scope="function")
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Database with the schema created and no rows."""
    db = Database.from_url(settings.database.url, poolclass=NullPool)
    await db.create_schema()

    yield db

    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def seed_lookups(database: Database, settings: Settings) -> dict[str, dict[str, Any]]:
    """Seed the bundled dataset and return the natural key -> id lookups."""
    reconciler = SeedReconciler(database, PasswordHasher(rounds=settings.seed.bcrypt_rounds))
    return await reconciler.run(load_seed_data(settings.seed.data_file))


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def auth_transport_handler():
    """Request handler used by the mocked auth service; tests may replace it."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"path": request.url.path})

    return handler


@pytest.fixture
def app(settings: Settings, database: Database, auth_transport_handler) -> FastAPI:
    """Application wired to the test database and a mocked auth service."""
    auth_client = httpx.AsyncClient(
        transport=httpx.MockTransport(auth_transport_handler),
        base_url="http://auth.test",
    )
    return create_app(settings=settings, database=database, auth_client=auth_client)


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client talking to the application in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    await app.state.auth_client.aclose()


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def create_session(database: Database):
    """Factory inserting an auth session row for a user and returning its token."""

    async def _create(user_id: str, token: str, expires_in: timedelta = timedelta(hours=1)) -> str:
        async with database.session() as session:
            session.add(
                Session(
                    id=f"sess_{token}",
                    user_id=user_id,
                    token=token,
                    expires_at=datetime.now(timezone.utc) + expires_in,
                )
            )
        return token

    return _create
