# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication request/response schemas."""

from clientdesk.domains.auth.permissions import PermissionSet, Role
from clientdesk.models.common import CamelModel


class LoginRequest(CamelModel):
    """Login credentials. Presence is checked by the endpoint."""

    username: str | None = None
    password: str | None = None


class SessionUser(CamelModel):
    """Identity returned by login and verify."""

    id: str
    username: str
    email: str | None = None
    role: Role
    permissions: PermissionSet
