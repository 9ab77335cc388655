# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Role-tiered rate limiting using slowapi.

Every request under /api (except auth forwarding) is counted against a
per-minute moving window whose size depends on the caller's role:

- admin: 20 requests per minute
- teacher, student: 10 requests per minute
- guest (no session): 5 requests per minute

Clients are keyed by role and user id when a session is resolved, and by
role and IP address otherwise.

Example:
    router = APIRouter(prefix="/api", dependencies=[Depends(enforce_rate_limit)])
"""

import logging
import time

from fastapi import HTTPException, Request, status
from limits import RateLimitItem, parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from classroom.api.middleware.session import get_current_user
from classroom.core.config.settings import RateLimitSettings, Settings

logger = logging.getLogger(__name__)

GUEST_ROLE = "guest"

# Namespace for the per-role limits inside the limiter storage
RATE_LIMIT_SCOPE = "classroom-api"

ROLE_MESSAGES = {
    "admin": "Admin request limit exceeded ({limit} per minute). Slow down!",
    "teacher": "User request limit exceeded ({limit} per minute). Please wait.",
    "student": "User request limit exceeded ({limit} per minute). Please wait.",
    GUEST_ROLE: "Guest request limit exceeded ({limit} per minute). Please sign up for higher limits.",
}


def get_client_role(request: Request) -> str:
    """Role of the session user, or "guest" without a session."""
    user = get_current_user(request)
    if user is None:
        return GUEST_ROLE
    return user.role


def get_client_identifier(request: Request) -> str:
    """Get a unique identifier for the client.

    Uses role and user ID if a session was resolved, otherwise role and IP
    address.

    Args:
        request: HTTP request.

    Returns:
        Client identifier string.
    """
    user = get_current_user(request)
    if user is not None:
        return f"role:{user.role}:user:{user.id}"
    return f"role:{GUEST_ROLE}:ip:{get_remote_address(request)}"


def per_minute_limit(config: RateLimitSettings, role: str) -> int:
    """Requests per minute allowed for a role."""
    if role == "admin":
        return config.admin_per_minute
    if role in ("teacher", "student"):
        return config.user_per_minute
    return config.guest_per_minute


def create_limiter(settings: Settings) -> Limiter:
    """Create the slowapi limiter for the application.

    The limiter is disabled when rate limiting is switched off or the
    application runs in the test environment.

    Args:
        settings: Application settings.

    Returns:
        Configured Limiter instance.
    """
    return Limiter(
        key_func=get_client_identifier,
        storage_uri=settings.rate_limit.storage_uri,
        strategy="moving-window",
        enabled=settings.rate_limit.enabled and not settings.is_test,
        headers_enabled=False,
    )


async def enforce_rate_limit(request: Request) -> None:
    """Router dependency counting the request against the caller's limit.

    Args:
        request: HTTP request with the resolved session user on its state.

    Raises:
        HTTPException: 429 with Retry-After when the limit is exceeded.
    """
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return

    settings: Settings = request.app.state.settings
    role = get_client_role(request)
    limit = per_minute_limit(settings.rate_limit, role)
    item: RateLimitItem = parse(f"{limit}/minute")
    key = get_client_identifier(request)

    if limiter.limiter.hit(item, RATE_LIMIT_SCOPE, key):
        return

    reset_at, _ = limiter.limiter.get_window_stats(item, RATE_LIMIT_SCOPE, key)
    retry_after = max(1, int(reset_at - time.time()))

    logger.warning("Rate limit exceeded: %s for %s", item, key)

    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=ROLE_MESSAGES.get(role, ROLE_MESSAGES[GUEST_ROLE]).format(limit=limit),
        headers={"Retry-After": str(retry_after)},
    )
