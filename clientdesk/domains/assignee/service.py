# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignee name service.

The assignee list offered by the UI is the union of the assignees table
and every name already used on a task. Names are plain strings; tasks
do not reference assignee or user rows.
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import ConflictError, ValidationError
from clientdesk.infrastructure.database.models.assignee import Assignee
from clientdesk.infrastructure.database.models.task import Task
from clientdesk.models.assignee import AssigneeResponse

logger = logging.getLogger(__name__)

MAX_ASSIGNEE_NAME_LENGTH = 50


class AssigneeAlreadyExistsError(ConflictError):
    """Raised when an assignee with the same name (any case) exists."""

    default_message = "Assignee already exists"


class AssigneeService:
    """Service for the assignee name list.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_names(self) -> list[str]:
        """All known assignee names, sorted case-insensitively.

        Returns:
            Distinct names from the assignees table and from task
            assignments.
        """
        result = await self._db.execute(select(Assignee.name))
        names = set(result.scalars().all())

        # Task assignees are a JSON array per row, so they are flattened here.
        result = await self._db.execute(select(Task.assignees))
        for assignees in result.scalars().all():
            names.update(name for name in assignees or [] if name)

        return sorted(names, key=lambda name: (name.casefold(), name))

    async def add(self, raw_name: Any) -> AssigneeResponse:
        """Add an assignee name.

        Raises:
            ValidationError: If the name is missing, blank or too long.
            AssigneeAlreadyExistsError: If the name exists in any case.
        """
        if not raw_name or not isinstance(raw_name, str):
            raise ValidationError("Name is required", field="name")

        name = raw_name.strip()
        if not name:
            raise ValidationError("Name cannot be empty", field="name")
        if len(name) > MAX_ASSIGNEE_NAME_LENGTH:
            raise ValidationError("Name is too long", field="name")

        result = await self._db.execute(select(Assignee.id).where(Assignee.name_key == name.lower()))
        if result.scalar_one_or_none() is not None:
            raise AssigneeAlreadyExistsError()

        assignee = Assignee(name=name, name_key=name.lower())
        self._db.add(assignee)

        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise AssigneeAlreadyExistsError() from e

        logger.info("Assignee added: %s", name)

        return AssigneeResponse(id=assignee.id, name=assignee.name)

    async def remove(self, name: str | None) -> None:
        """Remove a name from the assignees table.

        Existing task assignments keep the name.

        Raises:
            ValidationError: If no name is given.
        """
        if not name:
            raise ValidationError("Name is required", field="name")

        await self._db.execute(delete(Assignee).where(Assignee.name == name))
        await self._db.commit()

        logger.info("Assignee removed: %s", name)
