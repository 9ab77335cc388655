# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Department service.

This module provides the DepartmentService class for:
- Listing and searching departments with their subject counts
- Department detail with subject, class and enrolled-student totals
- Subjects, classes and users scoped to one department
- Department creation
"""

import asyncio
import logging

from sqlalchemy import Select, distinct, func, select

from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.models import (
    Class,
    Department,
    Enrollment,
    Subject,
    User,
    UserRole,
)
from classroom.infrastructure.database.query import (
    PageParams,
    combine_filters,
    paginate,
    search_any,
)
from classroom.models.class_ import ClassListItem
from classroom.models.common import CreatedId, PaginatedResponse
from classroom.models.department import (
    DepartmentCreateRequest,
    DepartmentDetail,
    DepartmentListItem,
    DepartmentRead,
    DepartmentTotals,
)
from classroom.models.subject import SubjectRead
from classroom.models.user import UserRead

logger = logging.getLogger(__name__)

DEPARTMENT_USER_ROLES = (UserRole.TEACHER.value, UserRole.STUDENT.value)


class DepartmentServiceError(Exception):
    """Base exception for department service errors."""

    pass


class DepartmentNotFoundError(DepartmentServiceError):
    """Raised when department is not found."""

    pass


class InvalidRoleError(DepartmentServiceError):
    """Raised when a department user listing asks for an unsupported role."""

    pass


class DepartmentService:
    """Service for department queries and creation.

    Attributes:
        db: Database used to open one session per query unit.
    """

    def __init__(self, db: Database) -> None:
        """Initialize department service.

        Args:
            db: Injected database access.
        """
        self.db = db

    async def list_departments(
        self,
        params: PageParams,
        search: str | None = None,
    ) -> PaginatedResponse[DepartmentListItem]:
        """List departments, each with its number of subjects.

        Args:
            params: Normalized page parameters.
            search: Optional text matched against name and code.

        Returns:
            Page of departments with pagination metadata.
        """
        where = combine_filters(
            search_any(search, Department.name, Department.code) if search else None,
        )

        count_stmt = select(func.count()).select_from(Department).where(where)
        total_subjects = func.count(Subject.id).label("total_subjects")
        page_stmt = (
            select(Department, total_subjects)
            .outerjoin(Subject, Subject.department_id == Department.id)
            .where(where)
            .group_by(Department.id)
            .order_by(Department.created_at.desc(), Department.id.desc())
        )

        async with self.db.session() as session:
            rows, pagination = await paginate(session, count_stmt, page_stmt, params)

        data = [
            DepartmentListItem(
                **DepartmentRead.model_validate(department).model_dump(),
                total_subjects=count,
            )
            for department, count in rows
        ]
        return PaginatedResponse[DepartmentListItem](data=data, pagination=pagination)

    async def get_department(self, department_id: int) -> DepartmentRead:
        """Get a department by id.

        Raises:
            DepartmentNotFoundError: If no department has this id.
        """
        async with self.db.session() as session:
            department = await session.get(Department, department_id)

        if department is None:
            raise DepartmentNotFoundError(f"Department {department_id} not found")
        return DepartmentRead.model_validate(department)

    async def get_department_detail(self, department_id: int) -> DepartmentDetail:
        """Get a department with its subject, class and enrolled-student totals.

        The three totals are independent aggregates issued concurrently,
        each on its own session.

        Args:
            department_id: Department identifier.

        Returns:
            Department and totals.

        Raises:
            DepartmentNotFoundError: If no department has this id.
        """
        department = await self.get_department(department_id)

        subjects_stmt = (
            select(func.count())
            .select_from(Subject)
            .where(Subject.department_id == department_id)
        )
        classes_stmt = (
            select(func.count(Class.id))
            .select_from(Class)
            .outerjoin(Subject, Class.subject_id == Subject.id)
            .where(Subject.department_id == department_id)
        )
        students_stmt = (
            select(func.count(distinct(User.id)))
            .select_from(User)
            .outerjoin(Enrollment, User.id == Enrollment.student_id)
            .outerjoin(Class, Enrollment.class_id == Class.id)
            .outerjoin(Subject, Class.subject_id == Subject.id)
            .where(
                User.role == UserRole.STUDENT,
                Subject.department_id == department_id,
            )
        )

        subjects, classes, students = await asyncio.gather(
            self._scalar_count(subjects_stmt),
            self._scalar_count(classes_stmt),
            self._scalar_count(students_stmt),
        )

        return DepartmentDetail(
            department=department,
            totals=DepartmentTotals(
                subjects=subjects,
                classes=classes,
                enrolled_students=students,
            ),
        )

    async def list_department_subjects(
        self,
        department_id: int,
        params: PageParams,
    ) -> PaginatedResponse[SubjectRead]:
        """List the subjects of one department."""
        where = Subject.department_id == department_id
        count_stmt = select(func.count()).select_from(Subject).where(where)
        page_stmt = (
            select(Subject)
            .where(where)
            .order_by(Subject.created_at.desc(), Subject.id.desc())
        )

        async with self.db.session() as session:
            rows, pagination = await paginate(session, count_stmt, page_stmt, params)

        data = [SubjectRead.model_validate(subject) for (subject,) in rows]
        return PaginatedResponse[SubjectRead](data=data, pagination=pagination)

    async def list_department_classes(
        self,
        department_id: int,
        params: PageParams,
    ) -> PaginatedResponse[ClassListItem]:
        """List the classes taught under one department, with subject and teacher."""
        where = Subject.department_id == department_id
        count_stmt = (
            select(func.count(Class.id))
            .select_from(Class)
            .outerjoin(Subject, Class.subject_id == Subject.id)
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

        data = [ClassListItem.from_row(class_, subject, teacher) for class_, subject, teacher in rows]
        return PaginatedResponse[ClassListItem](data=data, pagination=pagination)

    async def list_department_users(
        self,
        department_id: int,
        role: str | None,
        params: PageParams,
    ) -> PaginatedResponse[UserRead]:
        """List teachers or students connected to one department.

        Teachers are reached through the classes they teach, students
        through their enrollments. A user attached through several classes
        appears once.

        Args:
            department_id: Department identifier.
            role: Either "teacher" or "student".
            params: Normalized page parameters.

        Returns:
            Page of users with pagination metadata.

        Raises:
            InvalidRoleError: If role is not "teacher" or "student".
        """
        if role not in DEPARTMENT_USER_ROLES:
            raise InvalidRoleError(f"Invalid role: {role!r}")

        where = combine_filters(
            User.role == UserRole(role),
            Subject.department_id == department_id,
        )

        count_stmt = self._join_department_users(
            select(func.count(distinct(User.id))).select_from(User),
            role,
        ).where(where)

        user_columns = [column for column in User.__table__.columns]
        page_stmt = (
            self._join_department_users(select(User).select_from(User), role)
            .where(where)
            .group_by(*user_columns)
            .order_by(User.created_at.desc(), User.id.desc())
        )

        async with self.db.session() as session:
            rows, pagination = await paginate(session, count_stmt, page_stmt, params)

        data = [UserRead.model_validate(user) for (user,) in rows]
        return PaginatedResponse[UserRead](data=data, pagination=pagination)

    async def create_department(self, request: DepartmentCreateRequest) -> CreatedId:
        """Insert a department.

        Uniqueness of the code is left to the database.

        Args:
            request: Department fields.

        Returns:
            Generated department id.
        """
        department = Department(
            code=request.code,
            name=request.name,
            description=request.description,
        )

        async with self.db.session() as session:
            session.add(department)
            await session.flush()
            department_id = department.id

        logger.info("Created department: %s (id=%s)", request.code, department_id)
        return CreatedId(id=department_id)

    @staticmethod
    def _join_department_users(stmt: Select, role: str) -> Select:
        if role == UserRole.TEACHER.value:
            return stmt.outerjoin(Class, User.id == Class.teacher_id).outerjoin(
                Subject, Class.subject_id == Subject.id
            )
        return (
            stmt.outerjoin(Enrollment, User.id == Enrollment.student_id)
            .outerjoin(Class, Enrollment.class_id == Class.id)
            .outerjoin(Subject, Class.subject_id == Subject.id)
        )

    async def _scalar_count(self, stmt: Select) -> int:
        async with self.db.session() as session:
            result = await session.execute(stmt)
            return result.scalar_one() or 0

