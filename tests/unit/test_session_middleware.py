# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for session token extraction."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from classroom.api.middleware.session import CurrentUser, SessionMiddleware, get_current_user

COOKIE = "better-auth.session_token"


@pytest.fixture
def middleware() -> SessionMiddleware:
    """Create the middleware around a dummy app."""
    return SessionMiddleware(MagicMock(), cookie_name=COOKIE)


def _request(cookies: dict | None = None, headers: dict | None = None):
    request = MagicMock()
    request.cookies = cookies or {}
    request.headers = headers or {}
    return request


class TestExtractToken:
    """Tests for _extract_token."""

    def test_signed_cookie(self, middleware) -> None:
        """Only the token part of a signed cookie is used."""
        request = _request(cookies={COOKIE: "tok123.c2lnbmF0dXJl"})

        assert middleware._extract_token(request) == "tok123"

    def test_unsigned_cookie(self, middleware) -> None:
        """A cookie without a signature is used as is."""
        assert middleware._extract_token(_request(cookies={COOKIE: "tok123"})) == "tok123"

    def test_bearer_header(self, middleware) -> None:
        """A bearer token is accepted when no cookie is present."""
        request = _request(headers={"Authorization": "Bearer tok456"})

        assert middleware._extract_token(request) == "tok456"

    def test_cookie_takes_precedence(self, middleware) -> None:
        """The cookie wins over the Authorization header."""
        request = _request(cookies={COOKIE: "from-cookie.sig"}, headers={"Authorization": "Bearer from-header"})

        assert middleware._extract_token(request) == "from-cookie"

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer a b", ""])
    def test_malformed_header(self, middleware, header: str) -> None:
        """Anything but a single bearer token is ignored."""
        assert middleware._extract_token(_request(headers={"Authorization": header})) is None



class TestGetCurrentUser:
    """Tests for get_current_user."""

    def test_resolved_user(self) -> None:
        """The user stored by the middleware is returned."""
        user = CurrentUser(id="user_admin_01", role="admin")
        request = MagicMock()
        request.state = SimpleNamespace(user=user)

        assert get_current_user(request) is user

    def test_no_session(self) -> None:
        """Requests without a resolved session have no user."""
        request = MagicMock()
        request.state = SimpleNamespace()

        assert get_current_user(request) is None
