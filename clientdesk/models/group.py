# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Group schemas."""

from typing import Any

from clientdesk.models.common import CamelModel, UTCDatetime


class GroupRequest(CamelModel):
    """Create or rename a group. Validated by GroupService."""

    name: Any = None


class GroupResponse(CamelModel):
    """Group record."""

    id: str
    name: str
    created_at: UTCDatetime
    updated_at: UTCDatetime
