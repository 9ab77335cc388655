# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for Classes API endpoints."""

import pytest

pytestmark = pytest.mark.integration


class TestClassesAPIRouting:
    """Tests for classes API routing."""

    def test_routes_registered(self, app):
        """Test that class routes are registered."""
        routes = [route.path for route in app.routes]

        assert "/api/classes" in routes
        assert "/api/classes/{class_id}" in routes


class TestListClasses:
    """Tests for GET /api/classes."""

    @pytest.mark.asyncio
    async def test_search_by_invite_code(self, client, seed_lookups):
        """An invite code finds its class with subject and teacher embedded."""
        response = await client.get("/api/classes", params={"search": "ABC123"})

        assert response.status_code == 200
        body = response.json()
        assert body["pagination"]["total"] == 1
        item = body["data"][0]
        assert item["inviteCode"] == "ABC123"
        assert item["subject"]["code"] == "CS101"
        assert item["teacher"]["name"] == "Daniel Reyes"

    @pytest.mark.asyncio
    async def test_trailing_slash(self, client, seed_lookups):
        """The list is served with or without a trailing slash."""
        plain = await client.get("/api/classes")
        slashed = await client.get("/api/classes/")

        assert slashed.status_code == 200
        assert slashed.json()["pagination"] == plain.json()["pagination"]

    @pytest.mark.asyncio
    async def test_detail_trailing_slash(self, client, seed_lookups):
        """Detail routes accept a trailing slash too."""
        class_id = seed_lookups["classes"]["ABC123"]

        response = await client.get(f"/api/classes/{class_id}/")

        assert response.status_code == 200
        assert response.json()["data"]["inviteCode"] == "ABC123"

    @pytest.mark.asyncio
    async def test_filter_by_subject_name(self, client, seed_lookups):
        """The subject filter matches the subject name."""
        body = (await client.get("/api/classes", params={"subject": "calculus"})).json()

        assert [c["inviteCode"] for c in body["data"]] == ["calc7x1"]

    @pytest.mark.asyncio
    async def test_filter_by_teacher_name(self, client, seed_lookups):
        """The teacher filter matches the teacher name."""
        body = (await client.get("/api/classes", params={"teacher": "mei"})).json()

        assert {c["inviteCode"] for c in body["data"]} == {"calc7x1", "linalg9"}

    @pytest.mark.asyncio
    async def test_filters_combine(self, client, seed_lookups):
        """Filters are ANDed together."""
        body = (await client.get("/api/classes", params={"teacher": "mei", "search": "linear"})).json()

        assert [c["inviteCode"] for c in body["data"]] == ["linalg9"]

    @pytest.mark.asyncio
    async def test_newest_first(self, client, seed_lookups):
        """Classes are ordered newest first."""
        body = (await client.get("/api/classes")).json()

        assert body["data"][0]["inviteCode"] == "mech4lb"
        assert body["data"][-1]["inviteCode"] == "ABC123"

    @pytest.mark.asyncio
    async def test_limit_capped(self, client, seed_lookups):
        """The page size never exceeds 100."""
        body = (await client.get("/api/classes", params={"limit": "500"})).json()

        assert body["pagination"]["limit"] == 100
        assert body["pagination"]["total"] == 5


class TestGetClass:
    """Tests for GET /api/classes/{id}."""

    @pytest.mark.asyncio
    async def test_detail_with_department(self, client, seed_lookups):
        """The detail embeds subject, department and teacher."""
        class_id = seed_lookups["classes"]["mech4lb"]

        response = await client.get(f"/api/classes/{class_id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "inactive"
        assert data["subject"]["code"] == "PHY101"
        assert data["department"]["code"] == "PHY"
        assert data["teacher"]["id"] == "user_teacher_03"

    @pytest.mark.asyncio
    async def test_not_found(self, client, seed_lookups):
        """An unknown id is a 404."""
        response = await client.get("/api/classes/9999")

        assert response.status_code == 404
        assert response.json() == {"detail": "No Class found."}

    @pytest.mark.asyncio
    async def test_invalid_id(self, client):
        """A non-integer id is a 400."""
        response = await client.get("/api/classes/abc")

        assert response.status_code == 400
        assert response.json() == {"detail": "No Class found."}


class TestCreateClass:
    """Tests for POST /api/classes."""

    @pytest.mark.asyncio
    async def test_create_class(self, client, seed_lookups):
        """A new class gets an invite code, default capacity and no schedules."""
        subject_id = seed_lookups["subjects"]["CS201"]

        response = await client.post(
            "/api/classes",
            json={"subjectId": subject_id, "teacherId": "user_teacher_02", "name": "Data Structures - Section B"},
        )

        assert response.status_code == 201
        class_id = response.json()["data"]["id"]

        data = (await client.get(f"/api/classes/{class_id}")).json()["data"]
        assert len(data["inviteCode"]) == 7
        assert data["inviteCode"] == data["inviteCode"].lower()
        assert data["schedules"] == []
        assert data["capacity"] == 50
        assert data["status"] == "active"
        assert data["department"]["code"] == "CS"

    @pytest.mark.asyncio
    async def test_unknown_subject(self, client, seed_lookups):
        """An unknown subject violates the foreign key."""
        response = await client.post(
            "/api/classes",
            json={"subjectId": 9999, "teacherId": "user_teacher_02", "name": "Orphan"},
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to create class"}
