# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client, note, client task and login detail schemas.

Request bodies keep loosely typed fields; ClientService applies the
required-field and length checks so each failure has its own message.
"""

from typing import Any

from clientdesk.models.common import CamelModel, UTCDatetime


class ClientRequest(CamelModel):
    """Create or rename a client."""

    name: Any = None


class NoteRequest(CamelModel):
    """Create or edit a note."""

    title: Any = None
    content: Any = None


class ClientTaskRequest(CamelModel):
    """Create or edit a client task."""

    title: Any = None
    content: Any = None
    assigned_to: str | None = None
    completed: bool = False


class LoginDetailRequest(CamelModel):
    """Create or edit stored website credentials."""

    website: Any = None
    url: Any = None
    username: Any = None
    password: Any = None


class NoteResponse(CamelModel):
    id: str
    title: str
    content: str
    created_by: str | None = None
    edited_by: str | None = None
    created_at: UTCDatetime
    updated_at: UTCDatetime


class ClientTaskResponse(CamelModel):
    id: str
    title: str
    content: str
    assigned_to: str | None = None
    completed: bool = False
    completed_by: str | None = None
    completed_at: UTCDatetime | None = None
    created_by: str | None = None
    edited_by: str | None = None
    created_at: UTCDatetime
    updated_at: UTCDatetime


class LoginDetailResponse(CamelModel):
    id: str
    website: str
    url: str
    username: str
    password: str
    created_by: str | None = None
    edited_by: str | None = None
    created_at: UTCDatetime
    updated_at: UTCDatetime


class ClientResponse(CamelModel):
    """Client with its embedded notes, tasks and login details."""

    id: str
    name: str
    notes: list[NoteResponse] = []
    tasks: list[ClientTaskResponse] = []
    login_details: list[LoginDetailResponse] = []
    created_at: UTCDatetime
    updated_at: UTCDatetime
