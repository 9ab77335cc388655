# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for Users API endpoints."""

import pytest

pytestmark = pytest.mark.integration


class TestListUsers:
    """Tests for GET /api/users."""

    @pytest.mark.asyncio
    async def test_list_users(self, client, seed_lookups):
        """Users are listed with camelCase fields."""
        body = (await client.get("/api/users")).json()

        assert body["pagination"]["total"] == 8
        admin = next(u for u in body["data"] if u["id"] == "user_admin_01")
        assert admin["emailVerified"] is True
        assert admin["role"] == "admin"
        assert "imageCldPubId" in admin

    @pytest.mark.asyncio
    async def test_filter_by_role(self, client, seed_lookups):
        """The role filter is an exact match."""
        body = (await client.get("/api/users", params={"role": "teacher"})).json()

        assert body["pagination"]["total"] == 3
        assert all(u["role"] == "teacher" for u in body["data"])

    @pytest.mark.asyncio
    async def test_unknown_role_ignored(self, client, seed_lookups):
        """A role outside the enum does not filter."""
        body = (await client.get("/api/users", params={"role": "bogus"})).json()

        assert body["pagination"]["total"] == 8

    @pytest.mark.asyncio
    async def test_huge_page_is_empty(self, client, seed_lookups):
        """A page far past the end returns no rows instead of failing."""
        response = await client.get("/api/users", params={"page": "99999999999999999999"})

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["pagination"]["total"] == 8

    @pytest.mark.asyncio
    async def test_search_name_or_email(self, client, seed_lookups):
        """Search matches the name or the email."""
        by_name = (await client.get("/api/users", params={"search": "mei"})).json()
        by_email = (await client.get("/api/users", params={"search": "kwame.mensah@"})).json()

        assert [u["id"] for u in by_name["data"]] == ["user_teacher_02"]
        assert [u["id"] for u in by_email["data"]] == ["user_student_04"]

    @pytest.mark.asyncio
    async def test_underscore_matches_literally(self, client, seed_lookups):
        """An underscore is not a single-character wildcard."""
        body = (await client.get("/api/users", params={"search": "_"})).json()

        assert body["pagination"]["total"] == 0

    @pytest.mark.asyncio
    async def test_total_pages(self, client, seed_lookups):
        """totalPages rounds up and the last page holds the remainder."""
        body = (await client.get("/api/users", params={"page": "3", "limit": "3"})).json()

        assert body["pagination"] == {"page": 3, "limit": 3, "total": 8, "totalPages": 3}
        assert len(body["data"]) == 2

    @pytest.mark.asyncio
    async def test_garbage_paging_values(self, client, seed_lookups):
        """Unparseable paging values fall back to defaults."""
        body = (await client.get("/api/users", params={"page": "x", "limit": "0"})).json()

        assert body["pagination"]["page"] == 1
        assert body["pagination"]["limit"] == 1
        assert body["pagination"]["totalPages"] == 8

    @pytest.mark.asyncio
    async def test_limit_capped(self, client, seed_lookups):
        """The page size never exceeds 100."""
        body = (await client.get("/api/users", params={"limit": "500"})).json()

        assert body["pagination"]["limit"] == 100
