# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication and authorization.

Exports:
    PasswordHasher: bcrypt password hashing.
    JWTManager: Session token issuing and verification.
    Permission, PermissionSet, Role: Capability model.

AuthService lives in clientdesk.domains.auth.service; it depends on the
database models, which themselves import the permission model.
"""

from clientdesk.domains.auth.jwt import JWTManager
from clientdesk.domains.auth.password import PasswordHasher
from clientdesk.domains.auth.permissions import Permission, PermissionSet, Role

__all__ = [
    "JWTManager",
    "PasswordHasher",
    "Permission",
    "PermissionSet",
    "Role",
]
