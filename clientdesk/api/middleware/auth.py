# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cookie session authentication middleware.

This middleware reads the session token from the auth cookie and
populates request.state.user. A missing cookie is the normal anonymous
case. An invalid or expired token is treated the same way: the request
continues with request.state.user = None and the route's dependencies
decide whether an identity is required.

Example:
    # Request with the session cookie
    GET /api/clients
    Cookie: auth-token=eyJhbGciOiJIUzI1NiIs...
"""

import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from clientdesk.domains.auth.jwt import InvalidTokenError, JWTManager, TokenClaims, TokenExpiredError
from clientdesk.domains.auth.permissions import Permission, PermissionSet, Role
from clientdesk.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)


class CurrentUser:
    """Current authenticated user from the session token.

    Attributes:
        id: User identifier.
        username: Username.
        email: E-mail address, if present in the token.
        role: User role.
        permissions: Capability flags.
    """

    def __init__(self, claims: TokenClaims) -> None:
        """Initialize from verified token claims.

        Args:
            claims: Decoded token claims.
        """
        self.id = claims.user_id
        self.username = claims.username
        self.email = claims.email
        self.role = claims.role
        self.permissions = claims.permissions

    def has_permission(self, permission: Permission) -> bool:
        """Check if user holds a capability.

        Args:
            permission: Capability to check.

        Returns:
            True if granted.
        """
        return self.permissions.allows(permission)

    @property
    def is_admin(self) -> bool:
        """Check if user is an admin."""
        return self.role is Role.ADMIN

    @property
    def can_manage_users(self) -> bool:
        """Admins and holders of canManageUsers may manage accounts."""
        return self.is_admin or self.permissions.allows(Permission.MANAGE_USERS)


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware for cookie-based session authentication.

    Attributes:
        _jwt_manager: Session token verifier.
        _cookie_name: Name of the cookie carrying the token.
    """

    def __init__(self, app: ASGIApp, jwt_manager: JWTManager, cookie_name: str) -> None:
        """Initialize the auth middleware.

        Args:
            app: ASGI application.
            jwt_manager: The token manager login issues tokens with.
            cookie_name: Name of the cookie carrying the token.
        """
        super().__init__(app)
        self._jwt_manager = jwt_manager
        self._cookie_name = cookie_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Resolve the identity for the request, then continue.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler.

        Returns:
            HTTP response.
        """
        clear_context()
        request.state.user = None

        token = request.cookies.get(self._cookie_name)
        if token:
            try:
                claims = self._jwt_manager.verify(token)
                request.state.user = CurrentUser(claims)
                bind_context(user_id=claims.user_id, username=claims.username)
                logger.debug("User authenticated: %s", claims.user_id)

            except TokenExpiredError:
                logger.debug("Token expired")

            except InvalidTokenError as e:
                logger.debug("Invalid token: %s", str(e))

        return await call_next(request)


def get_current_user(request: Request) -> CurrentUser | None:
    """Get current user from request state.

    Args:
        request: HTTP request with state.

    Returns:
        CurrentUser or None if anonymous.
    """
    return getattr(request.state, "user", None)
