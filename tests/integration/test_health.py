# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the root and health endpoints."""

import pytest

pytestmark = pytest.mark.integration


class TestHealth:
    """Tests for / and /health."""

    @pytest.mark.asyncio
    async def test_root_greeting(self, client):
        """The root path greets in plain text."""
        response = await client.get("/")

        assert response.status_code == 200
        assert response.text == "Welcome to Classroom API"

    @pytest.mark.asyncio
    async def test_health(self, client):
        """The health endpoint reports the database as reachable."""
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "test"
        assert body["database"]["status"] == "healthy"
