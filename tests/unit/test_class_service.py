# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Class service."""

import string
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from classroom.domains.class_.service import (
    INVITE_CODE_LENGTH,
    ClassNotFoundError,
    ClassService,
    generate_invite_code,
)
from classroom.infrastructure.database.models import ClassStatus
from classroom.models.class_ import ClassCreateRequest


@pytest.fixture
def mock_session():
    """Create mock database session."""
    session = AsyncMock()
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def mock_db(mock_session):
    """Create mock Database handing out the mock session."""
    db = MagicMock()

    @asynccontextmanager
    async def _session():
        yield mock_session

    db.session = _session
    return db


@pytest.fixture
def class_service(mock_db):
    """Create class service with mock database."""
    return ClassService(db=mock_db)


class TestGenerateInviteCode:
    """Tests for invite code generation."""

    def test_length_and_alphabet(self) -> None:
        """Codes are 7 lowercase base-36 characters."""
        allowed = set(string.ascii_lowercase + string.digits)

        for _ in range(50):
            code = generate_invite_code()
            assert len(code) == INVITE_CODE_LENGTH
            assert set(code) <= allowed

    def test_codes_vary(self) -> None:
        """Consecutive codes are not all the same."""
        codes = {generate_invite_code() for _ in range(20)}

        assert len(codes) > 1


class TestClassServiceCreate:
    """Tests for class creation."""

    @pytest.mark.asyncio
    async def test_create_class_success(self, class_service, mock_session):
        """The class is inserted with a generated invite code and no schedules."""

        async def assign_id():
            mock_session.add.call_args.args[0].id = 42

        mock_session.flush.side_effect = assign_id

        request = ClassCreateRequest(
            subject_id=1,
            teacher_id="user_teacher_01",
            name="Programming 101 - Evening",
            capacity=25,
        )

        result = await class_service.create_class(request)

        assert result.id == 42
        added = mock_session.add.call_args.args[0]
        assert added.name == "Programming 101 - Evening"
        assert added.capacity == 25
        assert added.status == ClassStatus.ACTIVE
        assert added.schedules == []
        assert len(added.invite_code) == INVITE_CODE_LENGTH

    @pytest.mark.asyncio
    async def test_create_class_accepts_camel_case_body(self, class_service, mock_session):
        """Request bodies use camelCase keys."""

        async def assign_id():
            mock_session.add.call_args.args[0].id = 7

        mock_session.flush.side_effect = assign_id

        request = ClassCreateRequest.model_validate(
            {"subjectId": 3, "teacherId": "user_teacher_02", "name": "Calculus I - Morning", "bannerUrl": "x"}
        )

        await class_service.create_class(request)

        added = mock_session.add.call_args.args[0]
        assert added.subject_id == 3
        assert added.teacher_id == "user_teacher_02"
        assert added.banner_url == "x"
        assert added.capacity == 50


class TestClassServiceGet:
    """Tests for class retrieval."""

    @pytest.mark.asyncio
    async def test_get_class_not_found(self, class_service, mock_session):
        """Test getting non-existent class raises error."""
        mock_result = MagicMock()
        mock_result.first.return_value = None
        mock_session.execute.return_value = mock_result

        with pytest.raises(ClassNotFoundError):
            await class_service.get_class(999)
