# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Task manager service.

Example:
    >>> service = TaskService(db)
    >>> task = await service.create_task(request, username="alice")
    >>> tasks = await service.list_tasks()
"""

import logging
from enum import Enum

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import NotFoundError, ValidationError
from clientdesk.infrastructure.database.models.base import is_valid_id
from clientdesk.infrastructure.database.models.task import Task
from clientdesk.models.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = frozenset(
    {
        "title",
        "client_name",
        "client_group",
        "completed",
        "priority",
        "status",
        "web_url",
        "figma_url",
        "asset_url",
        "invoiced",
        "paid",
        "assignees",
    }
)


class TaskNotFoundError(NotFoundError):
    """Raised when a task is not found."""

    default_message = "Task not found"


class TaskService:
    """CRUD for task manager tasks.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_tasks(self) -> list[TaskResponse]:
        """List all tasks, newest first."""
        result = await self._db.execute(select(Task).order_by(Task.created_at.desc()))
        return [TaskResponse.model_validate(task) for task in result.scalars().all()]

    async def get_task(self, task_id: str) -> TaskResponse:
        """Get a task by ID.

        Raises:
            ValidationError: If the id is malformed.
            TaskNotFoundError: If task not found.
        """
        return TaskResponse.model_validate(await self._load(task_id))

    async def create_task(self, request: TaskCreateRequest, username: str) -> TaskResponse:
        """Create a task.

        Args:
            request: Task fields.
            username: Acting user, recorded as creator.

        Returns:
            Created task.
        """
        values = request.model_dump()
        values["priority"] = request.priority.value
        values["status"] = request.status.value
        values["cms"] = request.cms.value if request.cms else None

        task = Task(**values, created_by=username)
        self._db.add(task)
        await self._db.commit()

        logger.info("Task created: %s by %s", task.id, username)

        return TaskResponse.model_validate(task)

    async def update_task(self, task_id: str, request: TaskUpdateRequest) -> TaskResponse:
        """Apply a partial update.

        Args:
            task_id: Task identifier.
            request: Fields present in the body are applied; explicit nulls
                clear optional fields and are ignored for required ones.

        Returns:
            Updated task.

        Raises:
            ValidationError: If the id is malformed.
            TaskNotFoundError: If task not found.
        """
        task = await self._load(task_id)

        for field, value in request.model_dump(exclude_unset=True).items():
            if value is None and field in NON_NULLABLE_FIELDS:
                continue
            if isinstance(value, Enum):
                value = value.value
            setattr(task, field, value)

        await self._db.commit()
        await self._db.refresh(task)

        logger.info("Task updated: %s", task.id)

        return TaskResponse.model_validate(task)

    async def delete_task(self, task_id: str) -> TaskResponse:
        """Delete a task and return the deleted record.

        Raises:
            ValidationError: If the id is malformed.
            TaskNotFoundError: If task not found.
        """
        task = await self._load(task_id)
        deleted = TaskResponse.model_validate(task)

        await self._db.delete(task)
        await self._db.commit()

        logger.info("Task deleted: %s", task_id)

        return deleted

    async def _load(self, task_id: str) -> Task:
        if not is_valid_id(task_id):
            raise ValidationError("Invalid task ID")

        task = await self._db.get(Task, task_id)
        if not task:
            raise TaskNotFoundError()
        return task
