# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard statistics models."""

from classroom.infrastructure.database.models.auth import UserRole
from classroom.models.class_ import ClassListItem
from classroom.models.common import CamelModel
from classroom.models.user import UserRead


class OverviewStats(CamelModel):
    users: int
    teachers: int
    admins: int
    subjects: int
    departments: int
    classes: int


class LatestStats(CamelModel):
    latest_classes: list[ClassListItem]
    latest_teachers: list[UserRead]


class RoleTotal(CamelModel):
    role: UserRole
    total: int


class DepartmentSubjectTotal(CamelModel):
    department_id: int
    department_name: str
    total_subjects: int


class SubjectClassTotal(CamelModel):
    subject_id: int
    subject_name: str
    total_classes: int


class ChartStats(CamelModel):
    users_by_role: list[RoleTotal]
    subjects_by_department: list[DepartmentSubjectTotal]
    classes_by_subject: list[SubjectClassTotal]
