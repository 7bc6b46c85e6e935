# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Group service.

Group names are unique regardless of case: "Acme" and "acme" cannot
both exist. Uniqueness is checked before writing and enforced by the
unique ``name_key`` column.

Example:
    >>> service = GroupService(db)
    >>> group = await service.create_group("Ops")
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import ConflictError, NotFoundError, ValidationError
from clientdesk.infrastructure.database.models.base import is_valid_id
from clientdesk.infrastructure.database.models.group import Group
from clientdesk.models.group import GroupResponse

logger = logging.getLogger(__name__)

MAX_GROUP_NAME_LENGTH = 100


class GroupNotFoundError(NotFoundError):
    """Raised when a group is not found."""

    default_message = "Group not found"


class GroupAlreadyExistsError(ConflictError):
    """Raised when a group with the same name (any case) exists."""

    default_message = "Group already exists"


class GroupService:
    """Service for managing client groups.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_groups(self) -> list[GroupResponse]:
        """List all groups sorted by name."""
        result = await self._db.execute(select(Group).order_by(Group.name))
        return [GroupResponse.model_validate(group) for group in result.scalars().all()]

    async def create_group(self, raw_name: Any) -> GroupResponse:
        """Create a group.

        Args:
            raw_name: Requested name; trimmed before use.

        Returns:
            Created group.

        Raises:
            ValidationError: If the name is missing, blank or too long.
            GroupAlreadyExistsError: If the name exists in any case.
        """
        name = self._clean_name(raw_name)

        if await self._find_by_name(name):
            raise GroupAlreadyExistsError()

        group = Group(name=name, name_key=name.lower())
        self._db.add(group)

        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise GroupAlreadyExistsError() from e

        logger.info("Group created: %s", group.id)

        return GroupResponse.model_validate(group)

    async def rename_group(self, group_id: str, raw_name: Any) -> GroupResponse:
        """Rename a group.

        Args:
            group_id: Group identifier.
            raw_name: New name; trimmed before use.

        Returns:
            Updated group.

        Raises:
            ValidationError: If the id or name is invalid.
            ConflictError: If another group already uses the name.
            GroupNotFoundError: If group not found.
        """
        self._check_id(group_id)
        name = self._clean_name(raw_name)

        duplicate = await self._find_by_name(name)
        if duplicate and duplicate.id != group_id:
            raise ConflictError("Group name already in use")

        group = await self._db.get(Group, group_id)
        if not group:
            raise GroupNotFoundError()

        group.name = name
        group.name_key = name.lower()

        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise ConflictError("Group name already in use") from e

        await self._db.refresh(group)

        logger.info("Group renamed: %s", group.id)

        return GroupResponse.model_validate(group)

    async def delete_group(self, group_id: str) -> GroupResponse:
        """Delete a group and return the deleted record.

        Raises:
            ValidationError: If the id is malformed.
            GroupNotFoundError: If group not found.
        """
        self._check_id(group_id)

        group = await self._db.get(Group, group_id)
        if not group:
            raise GroupNotFoundError()

        deleted = GroupResponse.model_validate(group)
        await self._db.delete(group)
        await self._db.commit()

        logger.info("Group deleted: %s", group_id)

        return deleted

    async def _find_by_name(self, name: str) -> Group | None:
        result = await self._db.execute(select(Group).where(Group.name_key == name.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    def _clean_name(raw_name: Any) -> str:
        if not isinstance(raw_name, str) or not raw_name.strip():
            raise ValidationError("Invalid group name", field="name")
        name = raw_name.strip()
        if len(name) > MAX_GROUP_NAME_LENGTH:
            raise ValidationError("Invalid group name", field="name")
        return name

    @staticmethod
    def _check_id(group_id: str) -> None:
        if not is_valid_id(group_id):
            raise ValidationError("Invalid group ID")
