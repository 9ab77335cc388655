# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Trailing slash normalization.

Routes are declared without a trailing slash. This middleware strips a
single trailing slash from the request path before routing, so
"/api/classes/" and "/api/classes" reach the same handler instead of a 404
or a redirect.
"""

from starlette.types import ASGIApp, Receive, Scope, Send


class TrailingSlashMiddleware:
    """Strip one trailing slash from HTTP request paths.

    Attributes:
        _app: ASGI application.
        _skip_prefixes: Path prefixes left untouched.
    """

    def __init__(self, app: ASGIApp, skip_prefixes: tuple[str, ...] = ()) -> None:
        """Initialize the middleware.

        Args:
            app: ASGI application.
            skip_prefixes: Paths starting with any of these are passed
                through unchanged.
        """
        self._app = app
        self._skip_prefixes = skip_prefixes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path: str = scope["path"]
            if len(path) > 1 and path.endswith("/") and not path.startswith(self._skip_prefixes):
                scope = dict(scope)
                scope["path"] = path[:-1]
                raw_path = scope.get("raw_path")
                if raw_path and raw_path.endswith(b"/"):
                    scope["raw_path"] = raw_path[:-1]
        await self._app(scope, receive, send)
