# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for ClientService and its embedded records."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import NotFoundError, ValidationError
from clientdesk.domains.client import ClientAlreadyExistsError, ClientNotFoundError, ClientService
from clientdesk.models.client import (
    ClientRequest,
    ClientTaskRequest,
    LoginDetailRequest,
    NoteRequest,
)


@pytest.fixture
def service(db_session: AsyncSession) -> ClientService:
    return ClientService(db_session)


class TestClients:
    """Tests for client CRUD."""

    async def test_create_client_starts_empty(self, service: ClientService) -> None:
        client = await service.create_client(" Acme Ltd ")

        assert client.name == "Acme Ltd"
        assert client.notes == []
        assert client.tasks == []
        assert client.login_details == []

    async def test_duplicate_name_any_case(self, service: ClientService) -> None:
        """Test case-insensitive client name uniqueness."""
        await service.create_client("Acme")

        with pytest.raises(ClientAlreadyExistsError, match="A client with this name already exists"):
            await service.create_client("ACME")

    async def test_name_required_and_bounded(self, service: ClientService) -> None:
        with pytest.raises(ValidationError, match="Client name is required"):
            await service.create_client("  ")
        with pytest.raises(ValidationError, match="cannot be more than 200 characters"):
            await service.create_client("x" * 201)

    async def test_update_without_name_is_noop(self, service: ClientService) -> None:
        """Test that a body without name leaves the client unchanged."""
        client = await service.create_client("Acme")

        updated = await service.update_client(client.id, ClientRequest())

        assert updated.name == "Acme"

    async def test_rename_conflict(self, service: ClientService) -> None:
        await service.create_client("Acme")
        other = await service.create_client("Globex")

        with pytest.raises(ClientAlreadyExistsError):
            await service.update_client(other.id, ClientRequest(name="acme"))

    async def test_list_sorted(self, service: ClientService) -> None:
        await service.create_client("Globex")
        await service.create_client("Acme")

        assert [client.name for client in await service.list_clients()] == ["Acme", "Globex"]

    async def test_missing_client(self, service: ClientService) -> None:
        with pytest.raises(ClientNotFoundError):
            await service.get_client(str(uuid.uuid4()))

    async def test_delete_client(self, service: ClientService) -> None:
        client = await service.create_client("Acme")

        await service.delete_client(client.id)

        with pytest.raises(ClientNotFoundError):
            await service.get_client(client.id)


class TestNotes:
    """Tests for notes embedded in a client."""

    async def test_add_update_delete_note(self, service: ClientService) -> None:
        client = await service.create_client("Acme")

        note = await service.add_note(client.id, NoteRequest(title="Kickoff", content="Agenda"), "alice")
        assert note.created_by == "alice"
        assert uuid.UUID(note.id)

        edited = await service.update_note(
            client.id, note.id, NoteRequest(title="Kickoff call", content="Notes"), "bob"
        )
        assert edited.title == "Kickoff call"
        assert edited.created_by == "alice"
        assert edited.edited_by == "bob"

        reloaded = await service.get_client(client.id)
        assert [n.title for n in reloaded.notes] == ["Kickoff call"]

        await service.delete_note(client.id, note.id)
        assert (await service.get_client(client.id)).notes == []

    async def test_note_validation(self, service: ClientService) -> None:
        client = await service.create_client("Acme")

        with pytest.raises(ValidationError, match="Note title is required"):
            await service.add_note(client.id, NoteRequest(content="x"), "alice")
        with pytest.raises(ValidationError, match="Note title cannot be more than 100 characters"):
            await service.add_note(client.id, NoteRequest(title="t" * 101, content="x"), "alice")
        with pytest.raises(ValidationError, match="Note content cannot be more than 5000 characters"):
            await service.add_note(client.id, NoteRequest(title="t", content="c" * 5001), "alice")

    async def test_unknown_note(self, service: ClientService) -> None:
        client = await service.create_client("Acme")

        with pytest.raises(NotFoundError, match="Note not found"):
            await service.delete_note(client.id, str(uuid.uuid4()))


class TestClientTasks:
    """Tests for client tasks and completion tracking."""

    async def test_toggle_sets_and_clears_completion(self, service: ClientService) -> None:
        client = await service.create_client("Acme")
        task = await service.add_task(
            client.id,
            ClientTaskRequest(title="Launch", content="Go live", assigned_to=" carol "),
            "alice",
        )
        assert task.completed is False
        assert task.assigned_to == "carol"

        done = await service.toggle_task_completion(client.id, task.id, "bob")
        assert done.completed is True
        assert done.completed_by == "bob"
        assert done.completed_at is not None

        reopened = await service.toggle_task_completion(client.id, task.id, "bob")
        assert reopened.completed is False
        assert reopened.completed_by is None
        assert reopened.completed_at is None

    async def test_update_only_touches_completion_when_flipped(self, service: ClientService) -> None:
        client = await service.create_client("Acme")
        task = await service.add_task(
            client.id, ClientTaskRequest(title="A", content="B", completed=True), "alice"
        )
        assert task.completed_by == "alice"

        edited = await service.update_task(
            client.id, task.id, ClientTaskRequest(title="A2", content="B", completed=True), "bob"
        )

        assert edited.completed_by == "alice"
        assert edited.edited_by == "bob"

    async def test_delete_task(self, service: ClientService) -> None:
        client = await service.create_client("Acme")
        task = await service.add_task(client.id, ClientTaskRequest(title="A", content="B"), "alice")

        await service.delete_task(client.id, task.id)

        assert (await service.get_client(client.id)).tasks == []


class TestLoginDetails:
    """Tests for stored website credentials."""

    async def test_add_and_update_login(self, service: ClientService) -> None:
        client = await service.create_client("Acme")
        login = await service.add_login(
            client.id,
            LoginDetailRequest(website="WP", url="https://acme.test/wp-admin", username="admin", password="pw"),
            "alice",
        )

        updated = await service.update_login(
            client.id,
            login.id,
            LoginDetailRequest(website="WP", url="https://acme.test/wp-admin", username="admin", password="new"),
            "bob",
        )

        assert updated.password == "new"
        assert updated.edited_by == "bob"

    async def test_url_length_message(self, service: ClientService) -> None:
        client = await service.create_client("Acme")

        with pytest.raises(ValidationError, match="URL cannot be more than 500 characters"):
            await service.add_login(
                client.id,
                LoginDetailRequest(website="WP", url="u" * 501, username="a", password="b"),
                "alice",
            )

    async def test_delete_unknown_login(self, service: ClientService) -> None:
        client = await service.create_client("Acme")

        with pytest.raises(NotFoundError, match="Login detail not found"):
            await service.delete_login(client.id, str(uuid.uuid4()))
