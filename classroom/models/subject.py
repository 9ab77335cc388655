# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject API models."""

from datetime import datetime

from classroom.models.common import CamelModel
from classroom.models.department import DepartmentRead


class SubjectRead(CamelModel):
    id: int
    department_id: int
    name: str
    code: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class SubjectListItem(SubjectRead):
    """Subject row with its department embedded."""

    department: DepartmentRead | None = None
