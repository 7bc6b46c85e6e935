# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Task manager schemas."""

from datetime import datetime

from pydantic import Field

from clientdesk.infrastructure.database.models.task import TaskCMS, TaskPriority, TaskStatus
from clientdesk.models.common import CamelModel, UTCDatetime


class TaskCreateRequest(CamelModel):
    """Request to create a task."""

    title: str = Field(default="", max_length=200)
    description: str | None = None
    client_name: str = Field(min_length=1, max_length=200)
    client_group: str = Field(min_length=1, max_length=100)
    completed: bool = False
    priority: TaskPriority = TaskPriority.LOW
    status: TaskStatus = TaskStatus.WAITING_FOR_QUOTE
    cms: TaskCMS | None = None
    web_url: str = Field(default="", max_length=500)
    figma_url: str = Field(default="", max_length=500)
    asset_url: str = Field(default="", max_length=500)
    total_price: float | None = None
    deposit: float | None = None
    due_date: datetime | None = None
    invoiced: bool = False
    paid: bool = False
    assignees: list[str] = []
    assigned_to: str | None = Field(default=None, max_length=100)


class TaskUpdateRequest(CamelModel):
    """Partial task update. Only fields present in the body are applied."""

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    client_name: str | None = Field(default=None, min_length=1, max_length=200)
    client_group: str | None = Field(default=None, min_length=1, max_length=100)
    completed: bool | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    cms: TaskCMS | None = None
    web_url: str | None = Field(default=None, max_length=500)
    figma_url: str | None = Field(default=None, max_length=500)
    asset_url: str | None = Field(default=None, max_length=500)
    total_price: float | None = None
    deposit: float | None = None
    due_date: datetime | None = None
    invoiced: bool | None = None
    paid: bool | None = None
    assignees: list[str] | None = None
    assigned_to: str | None = Field(default=None, max_length=100)


class TaskResponse(CamelModel):
    """Task record."""

    id: str
    title: str
    description: str | None = None
    client_name: str
    client_group: str
    completed: bool
    priority: TaskPriority
    status: TaskStatus
    cms: TaskCMS | None = None
    web_url: str
    figma_url: str
    asset_url: str
    total_price: float | None = None
    deposit: float | None = None
    due_date: UTCDatetime | None = None
    invoiced: bool
    paid: bool
    assignees: list[str]
    assigned_to: str | None = None
    created_by: str | None = None
    created_at: UTCDatetime
    updated_at: UTCDatetime
