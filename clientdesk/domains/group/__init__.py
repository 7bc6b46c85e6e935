# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client group labels."""

from clientdesk.domains.group.service import (
    GroupAlreadyExistsError,
    GroupNotFoundError,
    GroupService,
)

__all__ = [
    "GroupAlreadyExistsError",
    "GroupNotFoundError",
    "GroupService",
]
