# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session resolution middleware.

Sessions are issued by the external auth service and stored in the shared
``session`` table. This middleware reads the session token from the auth
cookie or an ``Authorization: Bearer`` header, looks up the non-expired
session and its user, and populates request.state.user.

Example:
    GET /api/classes
    Cookie: better-auth.session_token=<token>.<signature>
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request, Response
from sqlalchemy import select
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from classroom.infrastructure.database.connection import Database, DatabaseError
from classroom.infrastructure.database.models import Session, User
from classroom.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

# Requests under this prefix belong to the auth service and are not resolved here
AUTH_PATH_PREFIX = "/api/auth"


@dataclass(frozen=True)
class CurrentUser:
    """User behind the session of the current request.

    Attributes:
        id: User id.
        role: One of "student", "teacher" or "admin".
    """

    id: str
    role: str


async def resolve_session_user(database: Database, token: str) -> CurrentUser | None:
    """Look up the user owning a non-expired session token.

    Args:
        database: Database to query.
        token: Raw session token.

    Returns:
        CurrentUser or None when the token is unknown or expired.
    """
    stmt = (
        select(User.id, User.role)
        .join(Session, Session.user_id == User.id)
        .where(
            Session.token == token,
            Session.expires_at > datetime.now(timezone.utc),
        )
    )
    async with database.session() as session:
        row = (await session.execute(stmt)).first()

    if row is None:
        return None
    user_id, role = row
    return CurrentUser(id=user_id, role=getattr(role, "value", role))


class SessionMiddleware(BaseHTTPMiddleware):
    """Resolve the session user for every non-auth request.

    Requests without a valid session continue with request.state.user = None;
    endpoints and the rate limiter decide what that means.

    Attributes:
        _cookie_name: Name of the session cookie.
    """

    def __init__(self, app: ASGIApp, cookie_name: str) -> None:
        """Initialize the session middleware.

        Args:
            app: ASGI application.
            cookie_name: Name of the cookie carrying the session token.
        """
        super().__init__(app)
        self._cookie_name = cookie_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Resolve the session user, then hand the request on.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler.

        Returns:
            HTTP response.
        """
        request.state.user = None
        clear_context()

        if not request.url.path.startswith(AUTH_PATH_PREFIX):
            token = self._extract_token(request)
            if token:
                try:
                    request.state.user = await resolve_session_user(
                        request.app.state.database, token
                    )
                except DatabaseError as e:
                    logger.warning("Session lookup failed: %s", str(e))

        user = request.state.user
        if user is not None:
            bind_context(user_id=user.id, role=user.role)
            logger.debug("Session resolved for user %s", user.id)

        try:
            return await call_next(request)
        finally:
            clear_context()

    def _extract_token(self, request: Request) -> str | None:
        """Extract the session token from the cookie or Authorization header.

        Signed cookies have the form ``<token>.<signature>``; only the token
        is looked up.

        Args:
            request: HTTP request.

        Returns:
            Token string or None if not found.
        """
        cookie = request.cookies.get(self._cookie_name)
        if cookie:
            return cookie.split(".", 1)[0] or None

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None

        return parts[1]


def get_current_user(request: Request) -> CurrentUser | None:
    """Get current user from request state.

    Args:
        request: HTTP request with state.

    Returns:
        CurrentUser or None if not authenticated.
    """
    return getattr(request.state, "user", None)
