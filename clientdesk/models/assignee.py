# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignee schemas."""

from typing import Any

from clientdesk.models.common import CamelModel


class AssigneeRequest(CamelModel):
    """Add an assignee name. Validated by AssigneeService."""

    name: Any = None


class AssigneeResponse(CamelModel):
    """Created assignee."""

    id: str
    name: str
