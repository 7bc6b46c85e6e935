# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User account management."""

from clientdesk.domains.user.service import (
    UserAlreadyExistsError,
    UserNotFoundError,
    UserService,
)

__all__ = [
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserService",
]
