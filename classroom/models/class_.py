# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class API models.

ClassRead mirrors the classes table. ClassListItem and ClassDetail add the
rows reached through left joins; any of those may be null when the joined
row is missing.
"""

from datetime import datetime

from pydantic import Field

from classroom.infrastructure.database.models.academic import ClassStatus
from classroom.models.common import BigInt, CamelModel
from classroom.models.department import DepartmentRead
from classroom.models.subject import SubjectRead
from classroom.models.user import UserRead


class ScheduleSlot(CamelModel):
    """One weekly meeting of a class."""

    day: str
    start_time: str
    end_time: str


class ClassCreateRequest(CamelModel):
    """Request body for creating a class.

    The invite code and schedules are always generated server-side.
    """

    subject_id: BigInt
    teacher_id: str
    name: str = Field(max_length=255)
    description: str | None = None
    capacity: BigInt = 50
    status: ClassStatus = ClassStatus.ACTIVE
    banner_url: str | None = None
    banner_cld_pub_id: str | None = None


class ClassRead(CamelModel):
    id: int
    subject_id: int
    teacher_id: str
    invite_code: str
    name: str
    banner_cld_pub_id: str | None = None
    banner_url: str | None = None
    description: str | None = None
    capacity: int
    status: ClassStatus
    schedules: list[ScheduleSlot] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ClassListItem(ClassRead):
    """Class row with subject and teacher embedded."""

    subject: SubjectRead | None = None
    teacher: UserRead | None = None

    @classmethod
    def from_row(cls, class_: object, subject: object | None, teacher: object | None) -> "ClassListItem":
        """Build from a class row and its left-joined subject and teacher."""
        return cls(
            **ClassRead.model_validate(class_).model_dump(),
            subject=SubjectRead.model_validate(subject) if subject is not None else None,
            teacher=UserRead.model_validate(teacher) if teacher is not None else None,
        )


class ClassDetail(ClassListItem):
    """Class with subject, department and teacher embedded."""

    department: DepartmentRead | None = None

    @classmethod
    def from_row(
        cls,
        class_: object,
        subject: object | None,
        teacher: object | None,
        department: object | None = None,
    ) -> "ClassDetail":
        """Build from a class row and its left-joined rows."""
        return cls(
            **ClassRead.model_validate(class_).model_dump(),
            subject=SubjectRead.model_validate(subject) if subject is not None else None,
            teacher=UserRead.model_validate(teacher) if teacher is not None else None,
            department=DepartmentRead.model_validate(department) if department is not None else None,
        )
