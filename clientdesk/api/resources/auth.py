# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication API endpoints.

This module provides endpoints for cookie-based sessions:
- POST /login - Verify credentials and set the auth cookie
- POST /logout - Clear the auth cookie
- GET /verify - Return the identity carried by the auth cookie

Example:
    POST /api/auth/login
    Body:
        {"username": "alice", "password": "secret"}
    Response:
        Set-Cookie: auth-token=eyJ...; HttpOnly; SameSite=lax
        {"success": true, "data": {"id": "...", "username": "alice", ...}}
"""

import logging

from fastapi import APIRouter, Request, Response

from clientdesk.api.dependencies import DB, JWT, AppSettings
from clientdesk.api.middleware.auth import get_current_user
from clientdesk.api.middleware.rate_limit import limiter, login_limit
from clientdesk.core.errors import UnauthenticatedError
from clientdesk.domains.auth.service import AuthService
from clientdesk.models.auth import LoginRequest, SessionUser
from clientdesk.models.common import DataResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=DataResponse[SessionUser],
    summary="Log in",
    description="Verify username and password and set the HTTP-only session cookie.",
)
@limiter.limit(login_limit)
async def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    db: DB,
    jwt_manager: JWT,
    settings: AppSettings,
) -> DataResponse[SessionUser]:
    """Log in with username and password."""
    auth_service = AuthService(db, jwt_manager)

    result = await auth_service.authenticate(data.username, data.password)

    response.set_cookie(
        key=settings.cookie.name,
        value=result.token,
        max_age=settings.cookie.max_age,
        path="/",
        httponly=True,
        secure=bool(settings.cookie.secure),
        samesite=settings.cookie.samesite,
    )

    claims = AuthService.claims_for(result.user)
    return DataResponse(
        data=SessionUser(
            id=claims.user_id,
            username=claims.username,
            email=claims.email,
            role=claims.role,
            permissions=claims.permissions,
        )
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
    description="Clear the session cookie.",
)
async def logout(response: Response, settings: AppSettings) -> MessageResponse:
    """Log out by clearing the auth cookie."""
    response.delete_cookie(
        key=settings.cookie.name,
        path="/",
        httponly=True,
        secure=bool(settings.cookie.secure),
        samesite=settings.cookie.samesite,
    )
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/verify",
    response_model=DataResponse[SessionUser],
    summary="Verify session",
    description="Return the identity carried by the session cookie.",
)
async def verify(request: Request, settings: AppSettings) -> DataResponse[SessionUser]:
    """Verify the session cookie.

    Raises:
        UnauthenticatedError: "No token found" without a cookie,
            "Invalid token" when the token fails verification.
    """
    if not request.cookies.get(settings.cookie.name):
        raise UnauthenticatedError("No token found")

    user = get_current_user(request)
    if user is None:
        raise UnauthenticatedError("Invalid token")

    return DataResponse(
        data=SessionUser(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            permissions=user.permissions,
        )
    )
