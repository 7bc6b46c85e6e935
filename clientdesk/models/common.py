# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared schema building blocks.

Every endpoint answers with the envelope ``{"success": ..., "data": ...}``
on success or ``{"success": false, "error": ...}`` on failure. Field
names travel in camelCase on the wire and snake_case in Python.
"""

from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from clientdesk.utils.datetime import ensure_utc

T = TypeVar("T")

# SQLite hands back naive datetimes; everything leaving the API is UTC-aware.
UTCDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class CamelModel(BaseModel):
    """Base model with camelCase aliases that also accepts snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(BaseModel, Generic[T]):
    """Successful response carrying a payload."""

    success: bool = True
    data: T


class MessageResponse(BaseModel):
    """Successful response carrying only a message."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Failed response."""

    success: bool = False
    error: str


class DeletedResponse(DataResponse[T], Generic[T]):
    """Successful deletion carrying a message and the removed record."""

    message: str
