# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class service for listing, reading and creating classes.

This module provides the ClassService class for:
- Class listing with subject/teacher filters
- Class detail with subject, department and teacher
- Class creation with a generated invite code
"""

import logging
import secrets
import string

from sqlalchemy import func, select

from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.models import Class, Department, Subject, User
from classroom.infrastructure.database.query import (
    PageParams,
    combine_filters,
    contains,
    paginate,
    search_any,
)
from classroom.models.class_ import ClassCreateRequest, ClassDetail, ClassListItem
from classroom.models.common import CreatedId, PaginatedResponse

logger = logging.getLogger(__name__)

INVITE_CODE_LENGTH = 7
INVITE_CODE_ALPHABET = string.ascii_lowercase + string.digits


class ClassServiceError(Exception):
    """Base exception for class service errors."""

    pass


class ClassNotFoundError(ClassServiceError):
    """Raised when class is not found."""

    pass


def generate_invite_code() -> str:
    """Return a random 7-character lowercase base-36 invite code."""
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


class ClassService:
    """Service for class queries and creation.

    Attributes:
        db: Injected database access.
    """

    def __init__(self, db: Database) -> None:
        """Initialize class service.

        Args:
            db: Injected database access.
        """
        self.db = db

    async def list_classes(
        self,
        params: PageParams,
        search: str | None = None,
        subject: str | None = None,
        teacher: str | None = None,
    ) -> PaginatedResponse[ClassListItem]:
        """List classes with their subject and teacher.

        Args:
            params: Normalized page parameters.
            search: Optional text matched against class name and invite code.
            subject: Optional text matched against the subject name.
            teacher: Optional text matched against the teacher name.

        Returns:
            Page of classes with pagination metadata.
        """
        where = combine_filters(
            search_any(search, Class.name, Class.invite_code) if search else None,
            contains(Subject.name, subject) if subject else None,
            contains(User.name, teacher) if teacher else None,
        )

        count_stmt = (
            select(func.count())
            .select_from(Class)
            .outerjoin(Subject, Class.subject_id == Subject.id)
            .outerjoin(User, Class.teacher_id == User.id)
            .where(where)
        )
        page_stmt = (
            select(Class, Subject, User)
            .outerjoin(Subject, Class.subject_id == Subject.id)
            .outerjoin(User, Class.teacher_id == User.id)
            .where(where)
            .order_by(Class.created_at.desc(), Class.id.desc())
        )

        async with self.db.session() as session:
            rows, pagination = await paginate(session, count_stmt, page_stmt, params)

        data = [ClassListItem.from_row(class_, subj, user) for class_, subj, user in rows]
        return PaginatedResponse[ClassListItem](data=data, pagination=pagination)

    async def get_class(self, class_id: int) -> ClassDetail:
        """Get a class with its subject, department and teacher.

        Args:
            class_id: Class identifier.

        Returns:
            Class detail.

        Raises:
            ClassNotFoundError: If no class has this id.
        """
        stmt = (
            select(Class, Subject, User, Department)
            .outerjoin(Subject, Class.subject_id == Subject.id)
            .outerjoin(User, Class.teacher_id == User.id)
            .outerjoin(Department, Subject.department_id == Department.id)
            .where(Class.id == class_id)
        )

        async with self.db.session() as session:
            row = (await session.execute(stmt)).first()

        if row is None:
            raise ClassNotFoundError(f"Class {class_id} not found")

        class_, subj, user, department = row
        return ClassDetail.from_row(class_, subj, user, department)

    async def create_class(self, request: ClassCreateRequest) -> CreatedId:
        """Insert a class with a fresh invite code and no schedules.

        Subject and teacher references are checked by the database only.

        Args:
            request: Class fields.

        Returns:
            Generated class id.
        """
        class_ = Class(
            subject_id=request.subject_id,
            teacher_id=request.teacher_id,
            name=request.name,
            description=request.description,
            capacity=request.capacity,
            status=request.status,
            banner_url=request.banner_url,
            banner_cld_pub_id=request.banner_cld_pub_id,
            invite_code=generate_invite_code(),
            schedules=[],
        )

        async with self.db.session() as session:
            session.add(class_)
            await session.flush()
            class_id = class_.id

        logger.info(
            "Created class: %s (id=%s, invite_code=%s)",
            request.name,
            class_id,
            class_.invite_code,
        )
        return CreatedId(id=class_id)
