# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard statistics service.

Every figure is an independent read-only aggregate, so each endpoint fans
its queries out with asyncio.gather, one session per query.
"""

import asyncio
import logging

from sqlalchemy import Select, func, select

from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.models import (
    Class,
    Department,
    Subject,
    User,
    UserRole,
)
from classroom.models.class_ import ClassListItem
from classroom.models.stats import (
    ChartStats,
    DepartmentSubjectTotal,
    LatestStats,
    OverviewStats,
    RoleTotal,
    SubjectClassTotal,
)
from classroom.models.user import UserRead

logger = logging.getLogger(__name__)

DEFAULT_LATEST_LIMIT = 5


class StatsService:
    """Service computing dashboard counts and chart series.

    Attributes:
        db: Injected database access.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_overview(self) -> OverviewStats:
        """Count users, teachers, admins, subjects, departments and classes."""
        users, teachers, admins, subjects, departments, classes = await asyncio.gather(
            self._count(select(func.count()).select_from(User)),
            self._count(select(func.count()).select_from(User).where(User.role == UserRole.TEACHER)),
            self._count(select(func.count()).select_from(User).where(User.role == UserRole.ADMIN)),
            self._count(select(func.count()).select_from(Subject)),
            self._count(select(func.count()).select_from(Department)),
            self._count(select(func.count()).select_from(Class)),
        )
        return OverviewStats(
            users=users,
            teachers=teachers,
            admins=admins,
            subjects=subjects,
            departments=departments,
            classes=classes,
        )

    async def get_latest(self, limit: int = DEFAULT_LATEST_LIMIT) -> LatestStats:
        """Most recently created classes and teachers.

        Args:
            limit: Rows per list, floored at 1.

        Returns:
            Latest classes (with subject and teacher) and latest teachers.
        """
        limit = max(1, limit)

        classes_stmt = (
            select(Class, Subject, User)
            .outerjoin(Subject, Class.subject_id == Subject.id)
            .outerjoin(User, Class.teacher_id == User.id)
            .order_by(Class.created_at.desc(), Class.id.desc())
            .limit(limit)
        )
        teachers_stmt = (
            select(User)
            .where(User.role == UserRole.TEACHER)
            .order_by(User.created_at.desc(), User.id.desc())
            .limit(limit)
        )

        class_rows, teacher_rows = await asyncio.gather(
            self._rows(classes_stmt),
            self._rows(teachers_stmt),
        )

        return LatestStats(
            latest_classes=[ClassListItem.from_row(c, s, t) for c, s, t in class_rows],
            latest_teachers=[UserRead.model_validate(user) for (user,) in teacher_rows],
        )

    async def get_charts(self) -> ChartStats:
        """Users per role, subjects per department and classes per subject."""
        users_by_role_stmt = select(User.role, func.count().label("total")).group_by(User.role)
        subjects_by_department_stmt = (
            select(Department.id, Department.name, func.count(Subject.id))
            .outerjoin(Subject, Subject.department_id == Department.id)
            .group_by(Department.id, Department.name)
        )
        classes_by_subject_stmt = (
            select(Subject.id, Subject.name, func.count(Class.id))
            .outerjoin(Class, Class.subject_id == Subject.id)
            .group_by(Subject.id, Subject.name)
        )

        roles, departments, subjects = await asyncio.gather(
            self._rows(users_by_role_stmt),
            self._rows(subjects_by_department_stmt),
            self._rows(classes_by_subject_stmt),
        )

        return ChartStats(
            users_by_role=[RoleTotal(role=role, total=total) for role, total in roles],
            subjects_by_department=[
                DepartmentSubjectTotal(department_id=dept_id, department_name=name, total_subjects=total)
                for dept_id, name, total in departments
            ],
            classes_by_subject=[
                SubjectClassTotal(subject_id=subject_id, subject_name=name, total_classes=total)
                for subject_id, name, total in subjects
            ],
        )

    async def _count(self, stmt: Select) -> int:
        async with self.db.session() as session:
            return (await session.execute(stmt)).scalar_one() or 0

    async def _rows(self, stmt: Select) -> list:
        async with self.db.session() as session:
            return list((await session.execute(stmt)).all())
