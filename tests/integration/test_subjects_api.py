# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for Subjects API endpoints."""

import pytest

pytestmark = pytest.mark.integration


class TestListSubjects:
    """Tests for GET /api/subjects."""

    @pytest.mark.asyncio
    async def test_list_embeds_department(self, client, seed_lookups):
        """Each subject carries its department."""
        body = (await client.get("/api/subjects")).json()

        assert body["pagination"]["total"] == 5
        by_code = {s["code"]: s for s in body["data"]}
        assert by_code["MATH101"]["department"]["code"] == "MATH"

    @pytest.mark.asyncio
    async def test_filter_by_department_name(self, client, seed_lookups):
        """The department filter matches the department name."""
        body = (await client.get("/api/subjects", params={"department": "math"})).json()

        assert {s["code"] for s in body["data"]} == {"MATH101", "MATH201"}

    @pytest.mark.asyncio
    async def test_search_by_code(self, client, seed_lookups):
        """Search matches the subject code case-insensitively."""
        body = (await client.get("/api/subjects", params={"search": "cs101"})).json()

        assert [s["code"] for s in body["data"]] == ["CS101"]

    @pytest.mark.asyncio
    async def test_wildcards_match_literally(self, client, seed_lookups):
        """LIKE wildcards in the search text do not match everything."""
        body = (await client.get("/api/subjects", params={"search": "%"})).json()

        assert body["data"] == []
        assert body["pagination"]["total"] == 0
        assert body["pagination"]["totalPages"] == 0

    @pytest.mark.asyncio
    async def test_limit_capped(self, client, seed_lookups):
        """The page size never exceeds 100."""
        body = (await client.get("/api/subjects", params={"limit": "1000"})).json()

        assert body["pagination"]["limit"] == 100
