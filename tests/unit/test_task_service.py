# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for TaskService."""

import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import ValidationError
from clientdesk.domains.task import TaskNotFoundError, TaskService
from clientdesk.infrastructure.database.models import TaskCMS, TaskPriority, TaskStatus
from clientdesk.models.task import TaskCreateRequest, TaskUpdateRequest


@pytest.fixture
def service(db_session: AsyncSession) -> TaskService:
    return TaskService(db_session)


def _request(**overrides: object) -> TaskCreateRequest:
    fields = {"client_name": "Acme", "client_group": "Retail", **overrides}
    return TaskCreateRequest(**fields)


class TestTaskService:
    """Tests for TaskService."""

    async def test_create_applies_defaults(self, service: TaskService) -> None:
        task = await service.create_task(_request(title="Homepage"), username="alice")

        assert task.title == "Homepage"
        assert task.priority is TaskPriority.LOW
        assert task.status is TaskStatus.WAITING_FOR_QUOTE
        assert task.cms is None
        assert task.assignees == []
        assert task.created_by == "alice"
        assert task.completed is False

    async def test_create_accepts_wire_names(self, service: TaskService) -> None:
        """Test camelCase input and enum values."""
        request = TaskCreateRequest.model_validate(
            {
                "clientName": "Acme",
                "clientGroup": "Retail",
                "priority": "Urgent",
                "status": "InProcess",
                "cms": "Shopify",
                "totalPrice": 1200.5,
                "dueDate": "2025-07-01T00:00:00Z",
                "assignees": ["carol", "dan"],
            }
        )

        task = await service.create_task(request, username="alice")

        assert task.priority is TaskPriority.URGENT
        assert task.status is TaskStatus.IN_PROCESS
        assert task.cms is TaskCMS.SHOPIFY
        assert task.total_price == 1200.5
        assert task.due_date == datetime(2025, 7, 1, tzinfo=timezone.utc)
        assert task.assignees == ["carol", "dan"]

    async def test_partial_update_keeps_other_fields(self, service: TaskService) -> None:
        task = await service.create_task(_request(title="Homepage", deposit=100.0), username="alice")

        updated = await service.update_task(
            task.id,
            TaskUpdateRequest(status=TaskStatus.COMPLETED, completed=True),
        )

        assert updated.status is TaskStatus.COMPLETED
        assert updated.completed is True
        assert updated.title == "Homepage"
        assert updated.deposit == 100.0

    async def test_null_clears_optional_and_skips_required(self, service: TaskService) -> None:
        task = await service.create_task(_request(cms=TaskCMS.WORDPRESS, deposit=50.0), username="alice")

        updated = await service.update_task(
            task.id,
            TaskUpdateRequest.model_validate({"cms": None, "deposit": None, "clientName": None}),
        )

        assert updated.cms is None
        assert updated.deposit is None
        assert updated.client_name == "Acme"

    async def test_delete_returns_record(self, service: TaskService) -> None:
        task = await service.create_task(_request(title="Old"), username="alice")

        deleted = await service.delete_task(task.id)

        assert deleted.title == "Old"
        assert await service.list_tasks() == []

    async def test_invalid_id(self, service: TaskService) -> None:
        with pytest.raises(ValidationError, match="Invalid task ID"):
            await service.get_task("123")

    async def test_missing_task(self, service: TaskService) -> None:
        with pytest.raises(TaskNotFoundError):
            await service.get_task(str(uuid.uuid4()))
