# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment API models."""

from datetime import datetime

from pydantic import Field

from classroom.models.class_ import ClassRead
from classroom.models.common import BigInt, CamelModel
from classroom.models.department import DepartmentRead
from classroom.models.subject import SubjectRead
from classroom.models.user import UserRead


class EnrollStudentRequest(CamelModel):
    """Request body for enrolling a student by class id.

    Both fields are optional here so a missing one is reported as a 400
    with a readable message rather than a schema error.
    """

    class_id: BigInt | None = None
    student_id: str | None = None


class JoinClassRequest(CamelModel):
    """Request body for joining a class by invite code."""

    invite_code: str | None = None
    student_id: str | None = None


class EnrollmentDetail(CamelModel):
    """Enrollment with its class, subject, department and teacher."""

    id: int
    student_id: str
    class_id: int
    created_at: datetime
    updated_at: datetime
    class_: ClassRead | None = Field(default=None, alias="class")
    subject: SubjectRead | None = None
    department: DepartmentRead | None = None
    teacher: UserRead | None = None
