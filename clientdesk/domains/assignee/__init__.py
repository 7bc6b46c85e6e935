# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignee names for task assignment."""

from clientdesk.domains.assignee.service import AssigneeAlreadyExistsError, AssigneeService

__all__ = [
    "AssigneeAlreadyExistsError",
    "AssigneeService",
]
