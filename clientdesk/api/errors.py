# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception handlers rendering every failure as the error envelope.

Handler mapping:
    ClientDeskError         → its status_code (401/403/400/404/409/500)
    HTTPException           → its status_code, detail as the message
    RequestValidationError  → 400, first validation problem as the message
    Exception (fallback)    → 500 "Internal server error"

Response bodies never carry stack traces, SQL or error context. Those
are logged server-side.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from clientdesk.core.errors import ClientDeskError
from clientdesk.models.common import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    """Build an error envelope response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize the first request validation problem."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"

    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid value")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers for consistent error responses.

    Args:
        app: FastAPI application.
    """

    @app.exception_handler(ClientDeskError)
    async def handle_application_error(request: Request, exc: ClientDeskError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s %s",
                request.method,
                request.url.path,
                exc.message,
                exc.context,
                exc_info=exc.__cause__,
            )
        else:
            logger.info(
                "%s %s rejected (%d): %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.message,
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_validation_error(exc)
        logger.info("%s %s invalid request: %s", request.method, request.url.path, message)
        return error_response(400, message)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error")
