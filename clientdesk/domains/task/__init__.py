# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Task manager."""

from clientdesk.domains.task.service import TaskNotFoundError, TaskService

__all__ = [
    "TaskNotFoundError",
    "TaskService",
]
