# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for managing student class enrollments.

This module provides the EnrollmentService class for:
- Enrolling a student by class id
- Joining a class by invite code

Both paths check that the class and the student exist and that the pair
is not already enrolled before inserting. The check and the insert are
not atomic: a concurrent duplicate is rejected by the unique constraint on
(student_id, class_id) and surfaces as a DatabaseError.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.models import (
    Class,
    Department,
    Enrollment,
    Subject,
    User,
)
from classroom.models.class_ import ClassRead
from classroom.models.department import DepartmentRead
from classroom.models.enrollment import (
    EnrollmentDetail,
    EnrollStudentRequest,
    JoinClassRequest,
)
from classroom.models.subject import SubjectRead
from classroom.models.user import UserRead

logger = logging.getLogger(__name__)


class EnrollmentServiceError(Exception):
    """Base exception for enrollment service errors."""

    pass


class MissingFieldsError(EnrollmentServiceError):
    """Raised when a required request field is missing or empty."""

    pass


class ClassNotFoundError(EnrollmentServiceError):
    """Raised when class is not found."""

    pass


class StudentNotFoundError(EnrollmentServiceError):
    """Raised when student is not found."""

    pass


class AlreadyEnrolledError(EnrollmentServiceError):
    """Raised when student is already enrolled in class."""

    pass


class EnrollmentService:
    """Service for creating enrollments.

    Attributes:
        db: Injected database access.
    """

    def __init__(self, db: Database) -> None:
        """Initialize enrollment service.

        Args:
            db: Injected database access.
        """
        self.db = db

    async def enroll_student(self, request: EnrollStudentRequest) -> EnrollmentDetail:
        """Enroll a student in a class given by id.

        Args:
            request: Class id and student id.

        Returns:
            The new enrollment joined with class, subject, department and teacher.

        Raises:
            MissingFieldsError: If class id or student id is missing.
            ClassNotFoundError: If class not found.
            StudentNotFoundError: If student not found.
            AlreadyEnrolledError: If student already enrolled.
        """
        if not request.class_id or not request.student_id:
            raise MissingFieldsError("classId and studentId are required")

        async with self.db.session() as session:
            class_id = await session.scalar(
                select(Class.id).where(Class.id == request.class_id)
            )
            if class_id is None:
                raise ClassNotFoundError("Class not found")

            return await self._enroll(session, class_id, request.student_id)

    async def join_class(self, request: JoinClassRequest) -> EnrollmentDetail:
        """Enroll a student in the class holding an invite code.

        Args:
            request: Invite code and student id.

        Returns:
            The new enrollment joined with class, subject, department and teacher.

        Raises:
            MissingFieldsError: If invite code or student id is missing.
            ClassNotFoundError: If no class has this invite code.
            StudentNotFoundError: If student not found.
            AlreadyEnrolledError: If student already enrolled.
        """
        if not request.invite_code or not request.student_id:
            raise MissingFieldsError("inviteCode and studentId are required")

        async with self.db.session() as session:
            class_id = await session.scalar(
                select(Class.id).where(Class.invite_code == request.invite_code)
            )
            if class_id is None:
                raise ClassNotFoundError("Class not found")

            return await self._enroll(session, class_id, request.student_id)

    async def _enroll(
        self,
        session: AsyncSession,
        class_id: int,
        student_id: str,
    ) -> EnrollmentDetail:
        student = await session.scalar(select(User.id).where(User.id == student_id))
        if student is None:
            raise StudentNotFoundError("Student not found")

        if await self._is_enrolled(session, class_id, student_id):
            raise AlreadyEnrolledError("Student already enrolled in class")

        enrollment = Enrollment(class_id=class_id, student_id=student_id)
        session.add(enrollment)
        await session.flush()

        logger.info(
            "Enrolled student: student=%s, class=%s, enrollment=%s",
            student_id,
            class_id,
            enrollment.id,
        )

        return await self._get_enrollment_detail(session, enrollment.id)

    async def _is_enrolled(self, session: AsyncSession, class_id: int, student_id: str) -> bool:
        """Check for an existing enrollment of the pair.

        The check and the following insert are not atomic. A concurrent
        insert of the same pair is rejected by the unique constraint.
        """
        existing = await session.scalar(
            select(Enrollment.id).where(
                Enrollment.class_id == class_id,
                Enrollment.student_id == student_id,
            )
        )
        return existing is not None

    async def _get_enrollment_detail(
        self,
        session: AsyncSession,
        enrollment_id: int,
    ) -> EnrollmentDetail:
        stmt = (
            select(Enrollment, Class, Subject, Department, User)
            .outerjoin(Class, Enrollment.class_id == Class.id)
            .outerjoin(Subject, Class.subject_id == Subject.id)
            .outerjoin(Department, Subject.department_id == Department.id)
            .outerjoin(User, Class.teacher_id == User.id)
            .where(Enrollment.id == enrollment_id)
            .execution_options(populate_existing=True)
        )
        enrollment, class_, subject, department, teacher = (await session.execute(stmt)).one()

        return EnrollmentDetail(
            id=enrollment.id,
            student_id=enrollment.student_id,
            class_id=enrollment.class_id,
            created_at=enrollment.created_at,
            updated_at=enrollment.updated_at,
            class_=ClassRead.model_validate(class_) if class_ is not None else None,
            subject=SubjectRead.model_validate(subject) if subject is not None else None,
            department=DepartmentRead.model_validate(department) if department is not None else None,
            teacher=UserRead.model_validate(teacher) if teacher is not None else None,
        )
