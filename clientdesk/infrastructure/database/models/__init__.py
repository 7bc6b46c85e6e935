# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models.

Importing this package registers every table on Base.metadata.
"""

from clientdesk.infrastructure.database.models.assignee import Assignee
from clientdesk.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    is_valid_id,
    new_id,
)
from clientdesk.infrastructure.database.models.client import Client
from clientdesk.infrastructure.database.models.group import Group
from clientdesk.infrastructure.database.models.hosting import HostingService, HostingStatus, status_for_end_date
from clientdesk.infrastructure.database.models.task import Task, TaskCMS, TaskPriority, TaskStatus
from clientdesk.infrastructure.database.models.user import User

__all__ = [
    "Assignee",
    "Base",
    "Client",
    "Group",
    "HostingService",
    "HostingStatus",
    "Task",
    "TaskCMS",
    "TaskPriority",
    "TaskStatus",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "User",
    "is_valid_id",
    "new_id",
    "status_for_end_date",
]
