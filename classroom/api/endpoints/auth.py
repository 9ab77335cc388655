# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication forwarding endpoint.

Sign-up, sign-in, sign-out and session management are owned by the
external auth service. Every request under /api/auth is forwarded to it
unchanged, and its response (status, headers including Set-Cookie, body)
is returned to the client as is.
"""

import logging

import httpx
from fastapi import APIRouter, HTTPException, Request, Response, status

logger = logging.getLogger(__name__)

router = APIRouter()

FORWARDED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# Connection-level headers that must not be copied between hops
HOP_BY_HOP_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
})

# Recomputed for the outgoing request
_DROPPED_REQUEST_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length"}

# httpx already decoded the body, so length and encoding no longer apply
_DROPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


@router.api_route(
    "/{path:path}",
    methods=FORWARDED_METHODS,
    summary="Forward to auth service",
    include_in_schema=False,
)
async def forward_auth(path: str, request: Request) -> Response:
    """Forward a request to the external auth service.

    Args:
        path: Path below /api/auth.
        request: Incoming HTTP request.

    Returns:
        The auth service's response.

    Raises:
        HTTPException: 502 if the auth service cannot be reached.
    """
    client: httpx.AsyncClient = request.app.state.auth_client

    headers = [
        (name, value)
        for name, value in request.headers.items()
        if name.lower() not in _DROPPED_REQUEST_HEADERS
    ]

    try:
        upstream = await client.request(
            request.method,
            f"/api/auth/{path}",
            params=list(request.query_params.multi_items()),
            headers=headers,
            content=await request.body(),
        )
    except httpx.RequestError as e:
        logger.error("Auth service request failed: %s %s: %s", request.method, path, str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Auth service unavailable",
        )

    response = Response(content=upstream.content, status_code=upstream.status_code)
    for name, value in upstream.headers.multi_items():
        if name.lower() not in _DROPPED_RESPONSE_HEADERS:
            response.headers.append(name, value)
    return response
