# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject service for listing subjects with their departments."""

import logging

from sqlalchemy import func, select

from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.models import Department, Subject
from classroom.infrastructure.database.query import (
    PageParams,
    combine_filters,
    contains,
    paginate,
    search_any,
)
from classroom.models.common import PaginatedResponse
from classroom.models.department import DepartmentRead
from classroom.models.subject import SubjectListItem, SubjectRead

logger = logging.getLogger(__name__)


class SubjectService:
    """Service for subject queries.

    Attributes:
        db: Injected database access.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_subjects(
        self,
        params: PageParams,
        search: str | None = None,
        department: str | None = None,
    ) -> PaginatedResponse[SubjectListItem]:
        """List subjects with their department embedded.

        Args:
            params: Normalized page parameters.
            search: Optional text matched against subject name and code.
            department: Optional text matched against the department name.

        Returns:
            Page of subjects with pagination metadata.
        """
        where = combine_filters(
            search_any(search, Subject.name, Subject.code) if search else None,
            contains(Department.name, department) if department else None,
        )

        count_stmt = (
            select(func.count())
            .select_from(Subject)
            .outerjoin(Department, Subject.department_id == Department.id)
            .where(where)
        )
        page_stmt = (
            select(Subject, Department)
            .outerjoin(Department, Subject.department_id == Department.id)
            .where(where)
            .order_by(Subject.created_at.desc(), Subject.id.desc())
        )

        async with self.db.session() as session:
            rows, pagination = await paginate(session, count_stmt, page_stmt, params)

        data = [
            SubjectListItem(
                **SubjectRead.model_validate(subject).model_dump(),
                department=DepartmentRead.model_validate(dept) if dept is not None else None,
            )
            for subject, dept in rows
        ]
        return PaginatedResponse[SubjectListItem](data=data, pagination=pagination)
