# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic structure tables: departments, subjects, classes, enrollments.

Departments, subjects and classes each carry a unique natural key
(code / code / invite_code) next to their generated integer id.
"""

import enum
from typing import Any

from sqlalchemy import (
    JSON,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classroom.infrastructure.database.models.auth import User
from classroom.infrastructure.database.models.base import Base, TimestampMixin


class ClassStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class Department(TimestampMixin, Base):
    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    subjects: Mapped[list["Subject"]] = relationship(back_populates="department")


class Subject(TimestampMixin, Base):
    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    department_id: Mapped[int] = mapped_column(
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    department: Mapped[Department] = relationship(back_populates="subjects")
    classes: Mapped[list["Class"]] = relationship(back_populates="subject")


class Class(TimestampMixin, Base):
    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject_id: Mapped[int] = mapped_column(
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
    )
    teacher_id: Mapped[str] = mapped_column(
        ForeignKey("user.id", ondelete="RESTRICT"),
        nullable=False,
    )
    invite_code: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    banner_cld_pub_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    banner_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=50, server_default="50")
    status: Mapped[ClassStatus] = mapped_column(
        Enum(ClassStatus, name="class_status", values_callable=lambda items: [s.value for s in items]),
        nullable=False,
        default=ClassStatus.ACTIVE,
        server_default=ClassStatus.ACTIVE.value,
    )
    # List of {"day", "startTime", "endTime"} objects, order preserved as given
    schedules: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=list,
    )

    subject: Mapped[Subject] = relationship(back_populates="classes")
    teacher: Mapped[User] = relationship()
    enrollments: Mapped[list["Enrollment"]] = relationship(back_populates="class_")

    __table_args__ = (
        Index("classes_subject_id_idx", "subject_id"),
        Index("classes_teacher_id_idx", "teacher_id"),
    )


class Enrollment(TimestampMixin, Base):
    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[str] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    )
    class_id: Mapped[int] = mapped_column(
        ForeignKey("classes.id", ondelete="CASCADE"),
        nullable=False,
    )

    student: Mapped[User] = relationship()
    class_: Mapped[Class] = relationship(back_populates="enrollments")

    __table_args__ = (
        UniqueConstraint("student_id", "class_id", name="enrollments_student_id_class_id_unique"),
        Index("enrollments_student_id_idx", "student_id"),
        Index("enrollments_class_id_idx", "class_id"),
    )
