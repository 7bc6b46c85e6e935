# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Task manager model."""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Boolean, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from clientdesk.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class TaskStatus(str, Enum):
    COMPLETED = "Completed"
    IN_PROCESS = "InProcess"
    WAITING_FOR_QUOTE = "Waiting for Quote"


class TaskCMS(str, Enum):
    WORDPRESS = "Wordpress"
    SHOPIFY = "Shopify"
    DESIGNING = "Designing"
    SEO = "SEO"
    MARKETING = "Marketing"


class Task(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Client work item tracked by the task manager.

    ``assigned_to`` and ``created_by`` hold usernames as free text, and
    ``assignees`` is a list of assignee names. None of them reference
    the users table.
    """

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    client_group: Mapped[str] = mapped_column(String(100), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    priority: Mapped[str] = mapped_column(String(10), nullable=False, default=TaskPriority.LOW.value)
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=TaskStatus.WAITING_FOR_QUOTE.value,
    )
    cms: Mapped[str | None] = mapped_column(String(20), nullable=True)
    web_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    figma_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    asset_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    total_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    deposit: Mapped[float | None] = mapped_column(Float, nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    invoiced: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assignees: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    assigned_to: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, client='{self.client_name}', status='{self.status}')>"
