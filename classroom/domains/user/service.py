# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User service.

Users are created and authenticated by the external auth service; this
service only reads them.
"""

import logging

from sqlalchemy import func, select

from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.models import User, UserRole
from classroom.infrastructure.database.query import (
    PageParams,
    combine_filters,
    paginate,
    search_any,
)
from classroom.models.common import PaginatedResponse
from classroom.models.user import UserRead

logger = logging.getLogger(__name__)

_ROLE_VALUES = {role.value for role in UserRole}


class UserService:
    """Service for user queries.

    Attributes:
        db: Injected database access.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_users(
        self,
        params: PageParams,
        search: str | None = None,
        role: str | None = None,
    ) -> PaginatedResponse[UserRead]:
        """List users.

        Args:
            params: Normalized page parameters.
            search: Optional text matched against name and email.
            role: Optional exact role. Values outside the role enum are
                ignored.

        Returns:
            Page of users with pagination metadata.
        """
        role_filter = None
        if role:
            if role in _ROLE_VALUES:
                role_filter = User.role == UserRole(role)
            else:
                logger.debug("Ignoring unknown role filter: %s", role)

        where = combine_filters(
            search_any(search, User.name, User.email) if search else None,
            role_filter,
        )

        count_stmt = select(func.count()).select_from(User).where(where)
        page_stmt = (
            select(User)
            .where(where)
            .order_by(User.created_at.desc(), User.id.desc())
        )

        async with self.db.session() as session:
            rows, pagination = await paginate(session, count_stmt, page_stmt, params)

        data = [UserRead.model_validate(user) for (user,) in rows]
        return PaginatedResponse[UserRead](data=data, pagination=pagination)
