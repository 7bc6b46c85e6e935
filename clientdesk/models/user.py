# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User management schemas."""

from pydantic import ConfigDict

from clientdesk.domains.auth.permissions import PermissionSet, Role
from clientdesk.models.common import CamelModel, UTCDatetime


class UserCreateRequest(CamelModel):
    """Request to create a user account."""

    username: str | None = None
    email: str | None = None
    password: str | None = None
    role: Role | None = None
    permissions: PermissionSet | None = None


class UserUpdateRequest(CamelModel):
    """Request to update a user account.

    Unknown keys, including ``password``, are ignored; passwords change
    only through the reset-password endpoint.
    """

    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    email: str | None = None
    role: str | None = None
    permissions: PermissionSet | None = None


class ResetPasswordRequest(CamelModel):
    """Request to set a new password for a user."""

    new_password: str | None = None


class UserResponse(CamelModel):
    """Full user record. Never includes the password hash."""

    id: str
    username: str
    email: str
    role: Role
    permissions: PermissionSet
    created_at: UTCDatetime
    updated_at: UTCDatetime


class UserSummary(CamelModel):
    """Username-only listing for assignment pickers."""

    id: str
    username: str
