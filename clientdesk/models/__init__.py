# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response schemas for the HTTP API."""

from clientdesk.models.common import (
    CamelModel,
    DataResponse,
    ErrorResponse,
    MessageResponse,
    UTCDatetime,
)

__all__ = [
    "CamelModel",
    "DataResponse",
    "ErrorResponse",
    "MessageResponse",
    "UTCDatetime",
]
