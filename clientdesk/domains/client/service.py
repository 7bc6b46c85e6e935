# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client service.

This module provides the ClientService that handles:
- Client CRUD with case-insensitive unique names
- Notes embedded in a client
- Client tasks with completion tracking
- Stored website login details

Notes, tasks and login details live in JSON arrays on the client row.
Every change copies the array, edits the copy and assigns it back, so
the row is rewritten as a whole. Concurrent edits to the same client
are last-write-wins.

Example:
    >>> service = ClientService(db)
    >>> client = await service.create_client("Acme Ltd")
    >>> note = await service.add_note(client.id, NoteRequest(title="Kickoff", content="..."), "alice")
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import ConflictError, NotFoundError, ValidationError
from clientdesk.infrastructure.database.models.base import new_id
from clientdesk.infrastructure.database.models.client import Client
from clientdesk.models.client import (
    ClientRequest,
    ClientResponse,
    ClientTaskRequest,
    ClientTaskResponse,
    LoginDetailRequest,
    LoginDetailResponse,
    NoteRequest,
    NoteResponse,
)
from clientdesk.utils.datetime import format_iso, utc_now

logger = logging.getLogger(__name__)

MAX_CLIENT_NAME_LENGTH = 200
MAX_TITLE_LENGTH = 100
MAX_CONTENT_LENGTH = 5000
MAX_WEBSITE_LENGTH = 100
MAX_URL_LENGTH = 500


class ClientNotFoundError(NotFoundError):
    """Raised when a client is not found."""

    default_message = "Client not found"


class ClientAlreadyExistsError(ConflictError):
    """Raised when a client with the same name (any case) exists."""

    default_message = "A client with this name already exists"


def _require_text(
    value: Any,
    label: str,
    max_length: int | None = None,
    length_label: str | None = None,
) -> str:
    """Validate a required free-text field and return it trimmed."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{length_label or label} cannot be more than {max_length} characters")
    return value.strip()


def _new_item(**fields: Any) -> dict[str, Any]:
    """Build an embedded item with its own id and timestamps."""
    now = format_iso(utc_now())
    return {"id": new_id(), **fields, "created_at": now, "updated_at": now}


def _copy_items(items: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    # Items are copied too: editing a shared dict would hide the change from the flush.
    return [dict(item) for item in items or []]


def _find_index(items: list[dict[str, Any]], item_id: str, error: NotFoundError) -> int:
    for index, item in enumerate(items):
        if item.get("id") == item_id:
            return index
    raise error


class ClientService:
    """Service for clients and their embedded records.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the client service.

        Args:
            db: Async database session.
        """
        self._db = db

    # =========================================================================
    # Clients
    # =========================================================================

    async def list_clients(self) -> list[ClientResponse]:
        """List all clients sorted by name."""
        result = await self._db.execute(select(Client).order_by(Client.name))
        return [ClientResponse.model_validate(client) for client in result.scalars().all()]

    async def get_client(self, client_id: str) -> ClientResponse:
        """Get a client by ID.

        Raises:
            ClientNotFoundError: If client not found.
        """
        return ClientResponse.model_validate(await self._load(client_id))

    async def create_client(self, raw_name: Any) -> ClientResponse:
        """Create a client with no notes, tasks or logins.

        Args:
            raw_name: Client name; trimmed before use.

        Returns:
            Created client.

        Raises:
            ValidationError: If the name is missing or too long.
            ClientAlreadyExistsError: If the name exists in any case.
        """
        name = _require_text(raw_name, "Client name", MAX_CLIENT_NAME_LENGTH)

        if await self._find_by_name(name):
            raise ClientAlreadyExistsError()

        client = Client(name=name, name_key=name.lower(), notes=[], tasks=[], login_details=[])
        self._db.add(client)
        await self._commit_unique()

        logger.info("Client created: %s", client.id)

        return ClientResponse.model_validate(client)

    async def update_client(self, client_id: str, request: ClientRequest) -> ClientResponse:
        """Rename a client. A body without ``name`` leaves it unchanged.

        Raises:
            ValidationError: If the name is blank or too long.
            ClientNotFoundError: If client not found.
            ClientAlreadyExistsError: If another client has the name.
        """
        name = None
        if "name" in request.model_fields_set:
            name = _require_text(request.name, "Client name", MAX_CLIENT_NAME_LENGTH)

        client = await self._load(client_id)

        if name is not None and name.lower() != client.name_key:
            duplicate = await self._find_by_name(name)
            if duplicate and duplicate.id != client.id:
                raise ClientAlreadyExistsError()

        if name is not None:
            client.name = name
            client.name_key = name.lower()
            await self._commit_unique()
            await self._db.refresh(client)

        return ClientResponse.model_validate(client)

    async def delete_client(self, client_id: str) -> None:
        """Delete a client with everything embedded in it.

        Raises:
            ClientNotFoundError: If client not found.
        """
        client = await self._load(client_id)
        await self._db.delete(client)
        await self._db.commit()

        logger.info("Client deleted: %s", client_id)

    # =========================================================================
    # Notes
    # =========================================================================

    async def add_note(self, client_id: str, request: NoteRequest, username: str) -> NoteResponse:
        """Append a note to a client.

        Raises:
            ValidationError: If title or content is missing or too long.
            ClientNotFoundError: If client not found.
        """
        title, content = self._note_fields(request)
        client = await self._load(client_id)

        note = _new_item(title=title, content=content, created_by=username, edited_by=username)
        client.notes = [*_copy_items(client.notes), note]
        await self._db.commit()

        logger.info("Note added to client %s by %s", client_id, username)

        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        client_id: str,
        note_id: str,
        request: NoteRequest,
        username: str,
    ) -> NoteResponse:
        """Edit a note's title and content.

        Raises:
            ValidationError: If title or content is missing or too long.
            NotFoundError: If the client or note does not exist.
        """
        title, content = self._note_fields(request)
        client = await self._load(client_id)

        notes = _copy_items(client.notes)
        index = _find_index(notes, note_id, NotFoundError("Note not found"))
        notes[index].update(
            title=title,
            content=content,
            edited_by=username,
            updated_at=format_iso(utc_now()),
        )
        client.notes = notes
        await self._db.commit()

        return NoteResponse.model_validate(notes[index])

    async def delete_note(self, client_id: str, note_id: str) -> None:
        """Remove a note.

        Raises:
            NotFoundError: If the client or note does not exist.
        """
        client = await self._load(client_id)

        notes = _copy_items(client.notes)
        index = _find_index(notes, note_id, NotFoundError("Note not found"))
        del notes[index]
        client.notes = notes
        await self._db.commit()

    # =========================================================================
    # Client tasks
    # =========================================================================

    async def add_task(
        self,
        client_id: str,
        request: ClientTaskRequest,
        username: str,
    ) -> ClientTaskResponse:
        """Append a task to a client.

        A task created as completed records the creator as completer.

        Raises:
            ValidationError: If title or content is missing or too long.
            ClientNotFoundError: If client not found.
        """
        title, content = self._task_fields(request)
        client = await self._load(client_id)

        now = format_iso(utc_now())
        task = _new_item(
            title=title,
            content=content,
            assigned_to=self._clean_assignee(request.assigned_to),
            completed=request.completed,
            completed_by=username if request.completed else None,
            completed_at=now if request.completed else None,
            created_by=username,
            edited_by=username,
        )
        client.tasks = [*_copy_items(client.tasks), task]
        await self._db.commit()

        logger.info("Task added to client %s by %s", client_id, username)

        return ClientTaskResponse.model_validate(task)

    async def update_task(
        self,
        client_id: str,
        task_id: str,
        request: ClientTaskRequest,
        username: str,
    ) -> ClientTaskResponse:
        """Edit a client task.

        Completion fields change only when ``completed`` flips.

        Raises:
            ValidationError: If title or content is missing or too long.
            NotFoundError: If the client or task does not exist.
        """
        title, content = self._task_fields(request)
        client = await self._load(client_id)

        tasks = _copy_items(client.tasks)
        index = _find_index(tasks, task_id, NotFoundError("Task not found"))
        task = tasks[index]
        now = format_iso(utc_now())

        task.update(
            title=title,
            content=content,
            edited_by=username,
            assigned_to=self._clean_assignee(request.assigned_to),
            updated_at=now,
        )
        if request.completed != bool(task.get("completed")):
            self._set_completion(task, request.completed, username, now)

        client.tasks = tasks
        await self._db.commit()

        return ClientTaskResponse.model_validate(task)

    async def toggle_task_completion(
        self,
        client_id: str,
        task_id: str,
        username: str,
    ) -> ClientTaskResponse:
        """Flip a client task between completed and open.

        Raises:
            NotFoundError: If the client or task does not exist.
        """
        client = await self._load(client_id)

        tasks = _copy_items(client.tasks)
        index = _find_index(tasks, task_id, NotFoundError("Task not found"))
        task = tasks[index]
        now = format_iso(utc_now())

        self._set_completion(task, not task.get("completed", False), username, now)
        task["updated_at"] = now

        client.tasks = tasks
        await self._db.commit()

        logger.info(
            "Task %s on client %s marked %s by %s",
            task_id,
            client_id,
            "completed" if task["completed"] else "open",
            username,
        )

        return ClientTaskResponse.model_validate(task)

    async def delete_task(self, client_id: str, task_id: str) -> None:
        """Remove a client task.

        Raises:
            NotFoundError: If the client or task does not exist.
        """
        client = await self._load(client_id)

        tasks = _copy_items(client.tasks)
        index = _find_index(tasks, task_id, NotFoundError("Task not found"))
        del tasks[index]
        client.tasks = tasks
        await self._db.commit()

    # =========================================================================
    # Login details
    # =========================================================================

    async def add_login(
        self,
        client_id: str,
        request: LoginDetailRequest,
        username: str,
    ) -> LoginDetailResponse:
        """Store website credentials on a client.

        Raises:
            ValidationError: If a field is missing or too long.
            ClientNotFoundError: If client not found.
        """
        fields = self._login_fields(request)
        client = await self._load(client_id)

        login = _new_item(**fields, created_by=username, edited_by=username)
        client.login_details = [*_copy_items(client.login_details), login]
        await self._db.commit()

        logger.info("Login detail added to client %s by %s", client_id, username)

        return LoginDetailResponse.model_validate(login)

    async def update_login(
        self,
        client_id: str,
        login_id: str,
        request: LoginDetailRequest,
        username: str,
    ) -> LoginDetailResponse:
        """Replace stored website credentials.

        Raises:
            ValidationError: If a field is missing or too long.
            NotFoundError: If the client or login detail does not exist.
        """
        fields = self._login_fields(request)
        client = await self._load(client_id)

        logins = _copy_items(client.login_details)
        index = _find_index(logins, login_id, NotFoundError("Login detail not found"))
        logins[index].update(**fields, edited_by=username, updated_at=format_iso(utc_now()))
        client.login_details = logins
        await self._db.commit()

        return LoginDetailResponse.model_validate(logins[index])

    async def delete_login(self, client_id: str, login_id: str) -> None:
        """Remove stored website credentials.

        Raises:
            NotFoundError: If the client or login detail does not exist.
        """
        client = await self._load(client_id)

        logins = _copy_items(client.login_details)
        index = _find_index(logins, login_id, NotFoundError("Login detail not found"))
        del logins[index]
        client.login_details = logins
        await self._db.commit()

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _load(self, client_id: str) -> Client:
        client = await self._db.get(Client, client_id)
        if not client:
            raise ClientNotFoundError()
        return client

    async def _find_by_name(self, name: str) -> Client | None:
        result = await self._db.execute(select(Client).where(Client.name_key == name.lower()))
        return result.scalar_one_or_none()

    async def _commit_unique(self) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise ClientAlreadyExistsError() from e

    @staticmethod
    def _note_fields(request: NoteRequest) -> tuple[str, str]:
        title = _require_text(request.title, "Note title")
        content = _require_text(request.content, "Note content")
        _require_text(request.title, "Note title", MAX_TITLE_LENGTH)
        _require_text(request.content, "Note content", MAX_CONTENT_LENGTH)
        return title, content

    @staticmethod
    def _task_fields(request: ClientTaskRequest) -> tuple[str, str]:
        title = _require_text(request.title, "Task title")
        content = _require_text(request.content, "Task content")
        _require_text(request.title, "Task title", MAX_TITLE_LENGTH)
        _require_text(request.content, "Task content", MAX_CONTENT_LENGTH)
        return title, content

    @staticmethod
    def _login_fields(request: LoginDetailRequest) -> dict[str, str]:
        fields = {
            "website": _require_text(request.website, "Website name"),
            "url": _require_text(request.url, "Website URL"),
            "username": _require_text(request.username, "Username"),
            "password": _require_text(request.password, "Password"),
        }
        _require_text(request.website, "Website name", MAX_WEBSITE_LENGTH)
        _require_text(request.url, "Website URL", MAX_URL_LENGTH, length_label="URL")
        return fields

    @staticmethod
    def _clean_assignee(assigned_to: str | None) -> str | None:
        if assigned_to and assigned_to.strip():
            return assigned_to.strip()
        return None

    @staticmethod
    def _set_completion(task: dict[str, Any], completed: bool, username: str, now: str) -> None:
        task["completed"] = completed
        task["completed_by"] = username if completed else None
        task["completed_at"] = now if completed else None
