# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rate limiting using slowapi.

Only the login endpoint is limited; it is keyed on the client IP
because the caller is not yet authenticated. The limiter is shared by
the route decorators, so create_app() applies the application's
settings to it through configure_limiter().

Example:
    # Limit login attempts
    @router.post("/login")
    @limiter.limit(login_limit)
    async def login(request: Request, ...):
        ...
"""

import logging
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from clientdesk.core.config.settings import RateLimitSettings
from clientdesk.models.common import ErrorResponse

if TYPE_CHECKING:
    from clientdesk.core.config.settings import Settings

logger = logging.getLogger(__name__)

_rate_limit_settings = RateLimitSettings()
_login_limit = _rate_limit_settings.login_limit

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=_rate_limit_settings.storage_uri,
    enabled=_rate_limit_settings.enabled,
)


def configure_limiter(settings: "Settings") -> Limiter:
    """Apply the application's rate limit settings to the shared limiter.

    Args:
        settings: Settings the application was created with.

    Returns:
        The configured limiter, for app.state.
    """
    global _login_limit
    _login_limit = settings.rate_limit.login_limit
    limiter.enabled = settings.rate_limit.enabled
    return limiter


def login_limit() -> str:
    """Current login rate limit string (e.g. "10/minute")."""
    return _login_limit


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> JSONResponse:
    """Handle rate limit exceeded errors.

    Returns a 429 Too Many Requests response in the error envelope.

    Args:
        request: HTTP request.
        exc: Rate limit exceeded exception.

    Returns:
        JSON response with error details.
    """
    logger.warning(
        "Rate limit exceeded: %s for %s",
        exc.detail,
        get_remote_address(request),
    )

    return JSONResponse(
        status_code=429,
        content=ErrorResponse(error="Too many requests. Please try again later.").model_dump(),
        headers={"Retry-After": "60"},
    )
