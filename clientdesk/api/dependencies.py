# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions from the connection cache on app.state
- Get the authenticated user and enforce capability gates
- Get service instances

Example:
    @router.get("/clients")
    async def list_clients(
        db: DB,
        current_user: CurrentUser = Depends(RequirePermission(Permission.VIEW_CLIENTS)),
    ):
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.api.middleware.auth import CurrentUser, get_current_user
from clientdesk.core.config import Settings
from clientdesk.core.errors import ForbiddenError, UnauthenticatedError
from clientdesk.domains.auth.jwt import JWTManager
from clientdesk.domains.auth.permissions import Permission
from clientdesk.infrastructure.database import DatabaseConnection

logger = logging.getLogger(__name__)

USER_MANAGER_REQUIRED = "Unauthorized - Admin access required"


# =========================================================================
# Database Dependencies
# =========================================================================


def get_database(request: Request) -> DatabaseConnection:
    """Get the connection cache created by the application lifespan.

    Args:
        request: HTTP request.

    Returns:
        DatabaseConnection.
    """
    return request.app.state.database


async def get_db(
    database: DatabaseConnection = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    Connects on first use. Connection failures surface as DatabaseError
    (500) through the error envelope.

    Yields:
        AsyncSession.
    """
    async with database.session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def get_optional_user(request: Request) -> CurrentUser | None:
    """Get current user if authenticated, None otherwise.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser or None.
    """
    return get_current_user(request)


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser.

    Raises:
        UnauthenticatedError: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise UnauthenticatedError()
    return user


class RequirePermission:
    """Dependency for requiring a capability flag.

    Example:
        @router.post("/hosting")
        async def create_hosting(
            user: CurrentUser = Depends(RequirePermission(Permission.EDIT_CLIENTS)),
        ):
            ...
    """

    def __init__(self, permission: Permission) -> None:
        """Initialize permission requirement.

        Args:
            permission: Required capability.
        """
        self.permission = permission

    def __call__(self, request: Request) -> CurrentUser:
        """Check the capability and return user.

        Args:
            request: HTTP request.

        Returns:
            CurrentUser.

        Raises:
            UnauthenticatedError: If not authenticated.
            ForbiddenError: If the capability is missing.
        """
        user = require_auth(request)

        if not user.has_permission(self.permission):
            logger.info("User %s lacks %s", user.id, self.permission.value)
            raise ForbiddenError()

        return user


class RequireAdmin:
    """Dependency for admin-only operations with a per-route message.

    Example:
        @router.delete("/{hosting_id}")
        async def delete_hosting(
            user: CurrentUser = Depends(
                RequireAdmin("Only administrators can delete hosting services")
            ),
        ):
            ...
    """

    def __init__(self, message: str = "Admin access required") -> None:
        """Initialize admin requirement.

        Args:
            message: Error message for non-admin callers.
        """
        self.message = message

    def __call__(self, request: Request) -> CurrentUser:
        """Check the admin role and return user.

        Raises:
            UnauthenticatedError: If not authenticated.
            ForbiddenError: If the user is not an admin.
        """
        user = require_auth(request)
        if not user.is_admin:
            raise ForbiddenError(self.message)
        return user


def require_user_manager(request: Request) -> CurrentUser:
    """Require an admin or a holder of canManageUsers.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser.

    Raises:
        UnauthenticatedError: If not authenticated.
        ForbiddenError: If the user cannot manage accounts.
    """
    user = require_auth(request)
    if not user.can_manage_users:
        raise ForbiddenError(USER_MANAGER_REQUIRED)
    return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with.

    Args:
        request: HTTP request.

    Returns:
        Settings stored on app.state by create_app().
    """
    return request.app.state.settings


def get_jwt_manager(request: Request) -> JWTManager:
    """Get the JWT manager shared with the auth middleware.

    Args:
        request: HTTP request.

    Returns:
        JWTManager stored on app.state by create_app().
    """
    return request.app.state.jwt_manager


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

DB = Annotated[AsyncSession, Depends(get_db)]
Database = Annotated[DatabaseConnection, Depends(get_database)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
JWT = Annotated[JWTManager, Depends(get_jwt_manager)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_optional_user)]
AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
UserManager = Annotated[CurrentUser, Depends(require_user_manager)]
ClientViewer = Annotated[CurrentUser, Depends(RequirePermission(Permission.VIEW_CLIENTS))]
ClientEditor = Annotated[CurrentUser, Depends(RequirePermission(Permission.EDIT_CLIENTS))]
TaskEditor = Annotated[CurrentUser, Depends(RequirePermission(Permission.EDIT_TASKS))]
