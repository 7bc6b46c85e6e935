# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User management API endpoints.

This module provides endpoints for account management:
- GET / - List users (full records for user managers, names otherwise)
- POST / - Create user
- PUT /{user_id} - Update username, email, role or permissions
- DELETE /{user_id} - Delete user
- POST /{user_id}/reset-password - Set a new password

All mutating endpoints require an admin or a holder of canManageUsers.
"""

import logging

from fastapi import APIRouter, status
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.api.dependencies import DB, AuthenticatedUser, UserManager
from clientdesk.domains.user import UserService
from clientdesk.models.common import DataResponse, MessageResponse
from clientdesk.models.user import (
    ResetPasswordRequest,
    UserCreateRequest,
    UserResponse,
    UserSummary,
    UserUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_user_service(db: AsyncSession) -> UserService:
    """Create UserService instance."""
    return UserService(db)


@router.get(
    "",
    response_model=DataResponse[list[UserResponse] | list[UserSummary]],
    summary="List users",
    description="Full records for user managers; id and username only for everyone else.",
)
async def list_users(
    current_user: AuthenticatedUser,
    db: DB,
) -> DataResponse[list[UserResponse] | list[UserSummary]]:
    """List users."""
    service = _get_user_service(db)
    users = await service.list_users(full=current_user.can_manage_users)
    return DataResponse(data=users)


@router.post(
    "",
    response_model=DataResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
async def create_user(
    current_user: UserManager,
    data: UserCreateRequest,
    db: DB,
) -> DataResponse[UserResponse]:
    """Create a new user account."""
    service = _get_user_service(db)
    user = await service.create_user(data)

    logger.info("User %s created by %s", user.id, current_user.id)

    return DataResponse(data=user)


@router.put(
    "/{user_id}",
    response_model=DataResponse[UserResponse],
    summary="Update user",
    description="Update profile, role or permissions. Passwords are ignored here.",
)
async def update_user(
    user_id: str,
    current_user: UserManager,
    data: UserUpdateRequest,
    db: DB,
) -> DataResponse[UserResponse]:
    """Update a user."""
    service = _get_user_service(db)
    user = await service.update_user(user_id, data)
    return DataResponse(data=user)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
)
async def delete_user(
    user_id: str,
    current_user: UserManager,
    db: DB,
) -> MessageResponse:
    """Delete a user. Users cannot delete their own account."""
    service = _get_user_service(db)
    await service.delete_user(user_id, acting_user_id=current_user.id)
    return MessageResponse(message="User deleted successfully")


@router.post(
    "/{user_id}/reset-password",
    response_model=MessageResponse,
    summary="Reset password",
)
async def reset_password(
    user_id: str,
    current_user: UserManager,
    data: ResetPasswordRequest,
    db: DB,
) -> MessageResponse:
    """Set a new password for a user."""
    service = _get_user_service(db)
    username = await service.reset_password(user_id, data.new_password)

    logger.info("Password for %s reset by %s", user_id, current_user.id)

    return MessageResponse(message=f"Password reset successfully for {username}")
