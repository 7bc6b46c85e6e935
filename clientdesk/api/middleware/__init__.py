# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

Exports:
    AuthMiddleware: Cookie session authentication middleware.
    CurrentUser: Identity attached to request.state.user.
    limiter: slowapi limiter for the login endpoint.
"""

from clientdesk.api.middleware.auth import AuthMiddleware, CurrentUser, get_current_user
from clientdesk.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    "AuthMiddleware",
    "CurrentUser",
    "get_current_user",
    "limiter",
    "rate_limit_exceeded_handler",
]
