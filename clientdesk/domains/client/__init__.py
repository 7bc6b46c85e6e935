# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Clients with their notes, tasks and login details."""

from clientdesk.domains.client.service import (
    ClientAlreadyExistsError,
    ClientNotFoundError,
    ClientService,
)

__all__ = [
    "ClientAlreadyExistsError",
    "ClientNotFoundError",
    "ClientService",
]
