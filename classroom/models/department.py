# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Department API models."""

from datetime import datetime

from pydantic import Field

from classroom.models.common import CamelModel


class DepartmentCreateRequest(CamelModel):
    """Request body for creating a department."""

    code: str = Field(max_length=50)
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, max_length=255)


class DepartmentRead(CamelModel):
    id: int
    code: str
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class DepartmentListItem(DepartmentRead):
    """Department row with its number of subjects."""

    total_subjects: int = 0


class DepartmentTotals(CamelModel):
    subjects: int
    classes: int
    enrolled_students: int


class DepartmentDetail(CamelModel):
    """Department with derived counts."""

    department: DepartmentRead
    totals: DepartmentTotals
