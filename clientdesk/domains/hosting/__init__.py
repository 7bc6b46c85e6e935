# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Hosting renewal tracking."""

from clientdesk.domains.hosting.service import HostingNotFoundError, HostingServiceManager

__all__ = [
    "HostingNotFoundError",
    "HostingServiceManager",
]
