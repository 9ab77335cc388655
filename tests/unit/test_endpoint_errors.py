# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for endpoint error mapping with mocked services."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from classroom.api.dependencies import (
    get_class_service,
    get_department_service,
    get_enrollment_service,
    get_stats_service,
    get_subject_service,
    get_user_service,
)
from classroom.api.endpoints import router as api_router
from classroom.api.middleware.rate_limit import create_limiter
from classroom.core.config.settings import Settings
from classroom.domains.department.service import DepartmentNotFoundError
from classroom.infrastructure.database.connection import DatabaseError

DB_FAILURE = DatabaseError("Database operation failed", RuntimeError("connection reset"))


@pytest.fixture
def mock_service():
    """Create a service mock whose every method fails at the database."""
    service = MagicMock()
    for name in (
        "list_departments",
        "create_department",
        "get_department_detail",
        "list_department_subjects",
        "list_department_classes",
        "list_department_users",
        "list_subjects",
        "list_classes",
        "create_class",
        "get_class",
        "list_users",
        "enroll_student",
        "join_class",
        "get_overview",
        "get_latest",
        "get_charts",
    ):
        setattr(service, name, AsyncMock(side_effect=DB_FAILURE))
    return service


@pytest.fixture
def app(mock_service):
    """Create test FastAPI app with every service replaced by the mock."""
    settings = Settings(environment="test")
    app = FastAPI()
    app.state.settings = settings
    app.state.limiter = create_limiter(settings)
    app.include_router(api_router)

    for dependency in (
        get_department_service,
        get_subject_service,
        get_class_service,
        get_user_service,
        get_enrollment_service,
        get_stats_service,
    ):
        app.dependency_overrides[dependency] = lambda: mock_service
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


class TestDatabaseFailures:
    """Database failures map to 500 with a resource-specific message."""

    @pytest.mark.parametrize(
        ("method", "path", "body", "detail"),
        [
            ("GET", "/api/departments", None, "Failed to fetch departments"),
            ("POST", "/api/departments", {"code": "BIO", "name": "Biology"}, "Failed to create department"),
            ("GET", "/api/departments/1", None, "Failed to fetch department details"),
            ("GET", "/api/departments/1/subjects", None, "Failed to fetch department subjects"),
            ("GET", "/api/departments/1/classes", None, "Failed to fetch department classes"),
            ("GET", "/api/departments/1/users?role=student", None, "Failed to fetch department users"),
            ("GET", "/api/subjects", None, "Failed to get subjects"),
            ("GET", "/api/classes", None, "Failed to get classes"),
            ("POST", "/api/classes", {"subjectId": 1, "teacherId": "t", "name": "C"}, "Failed to create class"),
            ("GET", "/api/classes/1", None, "Failed to get class"),
            ("GET", "/api/users", None, "Failed to get users"),
            ("POST", "/api/enrollments", {"classId": 1, "studentId": "s"}, "Failed to create enrollment"),
            ("POST", "/api/enrollments/join", {"inviteCode": "abc", "studentId": "s"}, "Failed to join class"),
            ("GET", "/api/stats/overview", None, "Failed to fetch overview stats"),
            ("GET", "/api/stats/latest", None, "Failed to fetch latest stats"),
            ("GET", "/api/stats/charts", None, "Failed to fetch chart stats"),
        ],
    )
    def test_database_failure(self, client, method, path, body, detail):
        """Each endpoint reports its own failure message."""
        response = client.request(method, path, json=body)

        assert response.status_code == 500
        assert response.json() == {"detail": detail}


class TestServiceArguments:
    """Query parameters reach the services normalized."""

    def test_list_classes_params(self, client, mock_service):
        """Paging is parsed and filters are passed through."""
        mock_service.list_classes.side_effect = DB_FAILURE

        client.get("/api/classes", params={"page": "2", "limit": "250", "teacher": "mei"})

        params = mock_service.list_classes.call_args.args[0]
        assert (params.page, params.limit) == (2, 100)
        assert mock_service.list_classes.call_args.kwargs["teacher"] == "mei"

    def test_latest_limit_default(self, client, mock_service):
        """The latest stats default to five rows."""
        client.get("/api/stats/latest")

        mock_service.get_latest.assert_awaited_once_with(5)

    def test_department_not_found(self, client, mock_service):
        """A missing department is a 404."""
        mock_service.get_department_detail.side_effect = DepartmentNotFoundError("missing")

        response = client.get("/api/departments/42")

        assert response.status_code == 404
        assert response.json() == {"detail": "Department not found"}
