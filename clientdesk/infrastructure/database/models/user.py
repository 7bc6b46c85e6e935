# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User account model (the credential store)."""

from typing import Any

from sqlalchemy import JSON, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from clientdesk.domains.auth.permissions import PermissionSet, Role
from clientdesk.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Application user.

    Attributes:
        username: Unique login name.
        email: Unique e-mail address, stored lowercase.
        password_hash: bcrypt hash of the password.
        role: "admin" or "team_member".
        permissions: Capability flags keyed by wire name (canEditClients, ...).
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.TEAM_MEMBER.value)
    permissions: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'team_member')", name="valid_user_role"),
    )

    @property
    def is_admin(self) -> bool:
        """Check if user has the admin role."""
        return self.role == Role.ADMIN.value

    @property
    def permission_set(self) -> PermissionSet:
        """Stored permissions as a PermissionSet, falling back to role defaults."""
        return PermissionSet.from_claims(self.permissions, self.role)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
