# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Roles and capability flags.

Permissions are a fixed set of boolean capabilities rather than a free
form map. Every mutating route names the single Permission it requires,
and PermissionSet.allows() is an exhaustive lookup over that enum.

Example:
    >>> perms = PermissionSet.for_role(Role.TEAM_MEMBER)
    >>> perms.allows(Permission.EDIT_CLIENTS)
    True
    >>> perms.allows(Permission.MANAGE_USERS)
    False
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """User role."""

    ADMIN = "admin"
    TEAM_MEMBER = "team_member"


class Permission(str, Enum):
    """Capability flags carried in a user's permission set.

    Values are the wire names used in tokens and JSON bodies.
    """

    VIEW_TASKS = "canViewTasks"
    EDIT_TASKS = "canEditTasks"
    VIEW_CLIENTS = "canViewClients"
    EDIT_CLIENTS = "canEditClients"
    MANAGE_USERS = "canManageUsers"


class PermissionSet(BaseModel):
    """Immutable set of capability flags.

    Attributes:
        can_view_tasks: May list tasks.
        can_edit_tasks: May create, update and delete tasks.
        can_view_clients: May list clients.
        can_edit_clients: May create and edit clients, logins and hosting.
        can_manage_users: May manage user accounts.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    can_view_tasks: bool = Field(default=False, alias=Permission.VIEW_TASKS.value)
    can_edit_tasks: bool = Field(default=False, alias=Permission.EDIT_TASKS.value)
    can_view_clients: bool = Field(default=True, alias=Permission.VIEW_CLIENTS.value)
    can_edit_clients: bool = Field(default=True, alias=Permission.EDIT_CLIENTS.value)
    can_manage_users: bool = Field(default=False, alias=Permission.MANAGE_USERS.value)

    def allows(self, permission: Permission) -> bool:
        """Check whether the set grants a capability.

        Args:
            permission: Capability to check.

        Returns:
            True if granted.
        """
        flags = {
            Permission.VIEW_TASKS: self.can_view_tasks,
            Permission.EDIT_TASKS: self.can_edit_tasks,
            Permission.VIEW_CLIENTS: self.can_view_clients,
            Permission.EDIT_CLIENTS: self.can_edit_clients,
            Permission.MANAGE_USERS: self.can_manage_users,
        }
        return flags[permission]

    def to_claims(self) -> dict[str, bool]:
        """Serialize using wire names (canEditClients, ...)."""
        return self.model_dump(by_alias=True)

    @classmethod
    def for_role(cls, role: Role | str) -> "PermissionSet":
        """Default permission set for a role.

        Admins receive every capability; team members may view and edit
        clients only.

        Args:
            role: Role to build defaults for.

        Returns:
            PermissionSet with the role defaults.
        """
        if Role(role) is Role.ADMIN:
            return cls(
                can_view_tasks=True,
                can_edit_tasks=True,
                can_view_clients=True,
                can_edit_clients=True,
                can_manage_users=True,
            )
        return cls()

    @classmethod
    def from_claims(cls, claims: dict[str, Any] | None, role: Role | str) -> "PermissionSet":
        """Build a permission set from a token or document map.

        Missing maps fall back to the role defaults. Unknown keys are
        ignored and non-boolean values are rejected by validation.

        Args:
            claims: Map keyed by wire names, or None.
            role: Role used for the fallback.

        Returns:
            PermissionSet.
        """
        if not claims:
            return cls.for_role(role)
        return cls.model_validate(claims)
