# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User API models."""

from datetime import datetime

from classroom.infrastructure.database.models.auth import UserRole
from classroom.models.common import CamelModel


class UserRead(CamelModel):
    """User as exposed by list, detail and embedded responses."""

    id: str
    name: str
    email: str
    email_verified: bool
    image: str | None = None
    role: UserRole
    image_cld_pub_id: str | None = None
    created_at: datetime
    updated_at: datetime
