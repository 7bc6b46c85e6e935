# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application error taxonomy.

Services raise these exceptions; the API layer renders them as the
response envelope ``{"success": false, "error": message}`` with the
carried HTTP status code.

Hierarchy:
    ClientDeskError (base, 500)
    ├── UnauthenticatedError  → 401 (no, invalid or expired token)
    ├── ForbiddenError        → 403 (identity lacks a capability)
    ├── ValidationError       → 400 (missing or malformed input)
    ├── NotFoundError         → 404 (missing entity)
    ├── ConflictError         → 409 (duplicate unique field)
    └── InternalError         → 500 (database or connection failure)
"""

from typing import Any


class ClientDeskError(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Client-facing error description.
        status_code: HTTP status code the error maps to.
        context: Extra debug information. Logged, never returned.
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Client-facing error description.
            context: Extra debug information.
        """
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)


class UnauthenticatedError(ClientDeskError):
    """Raised when a request carries no valid identity."""

    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(ClientDeskError):
    """Raised when a valid identity lacks the required capability."""

    status_code = 403
    default_message = "Insufficient permissions"


class ValidationError(ClientDeskError):
    """Raised when client input fails validation.

    Attributes:
        field: Name of the offending field, if known.
    """

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message, ctx)
        self.field = field


class NotFoundError(ClientDeskError):
    """Raised when a requested entity does not exist."""

    status_code = 404
    default_message = "Not found"


class ConflictError(ClientDeskError):
    """Raised when a unique field would be duplicated."""

    status_code = 409
    default_message = "Conflict"


class InternalError(ClientDeskError):
    """Raised when an operation fails for server-side reasons."""

    status_code = 500
    default_message = "Internal server error"
