# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for clients and their notes, tasks and login details."""

import uuid
from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from clientdesk.domains.auth.jwt import SessionClaims
from clientdesk.domains.auth.permissions import PermissionSet, Role


@pytest.fixture
def client_id(client: TestClient, as_member: SessionClaims) -> str:
    response = client.post("/api/clients", json={"name": "Acme"})
    return response.json()["data"]["id"]


class TestClientsAPI:
    """Tests for /api/clients."""

    def test_list_requires_login(self, client: TestClient) -> None:
        assert client.get("/api/clients").status_code == 401

    def test_list_requires_view_clients(
        self, client: TestClient, login_as: Callable[..., SessionClaims]
    ) -> None:
        login_as(permissions=PermissionSet(can_view_clients=False))

        assert client.get("/api/clients").status_code == 403

    def test_create_starts_empty(self, client: TestClient, as_member: SessionClaims) -> None:
        response = client.post("/api/clients", json={"name": "  Acme  "})

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Acme"
        assert data["notes"] == []
        assert data["tasks"] == []
        assert data["loginDetails"] == []

    def test_duplicate_name_any_case(self, client: TestClient, client_id: str) -> None:
        response = client.post("/api/clients", json={"name": "ACME"})

        assert response.status_code == 409
        assert response.json()["error"] == "A client with this name already exists"

    def test_missing_name(self, client: TestClient, as_member: SessionClaims) -> None:
        response = client.post("/api/clients", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Client name is required"

    def test_list_sorted_by_name(self, client: TestClient, as_member: SessionClaims) -> None:
        client.post("/api/clients", json={"name": "Zenith"})
        client.post("/api/clients", json={"name": "Beacon"})

        names = [item["name"] for item in client.get("/api/clients").json()["data"]]

        assert names == ["Beacon", "Zenith"]

    def test_rename_and_delete(self, client: TestClient, client_id: str) -> None:
        renamed = client.put(f"/api/clients/{client_id}", json={"name": "Acme Ltd"})
        deleted = client.delete(f"/api/clients/{client_id}")

        assert renamed.json()["data"]["name"] == "Acme Ltd"
        assert deleted.json() == {"success": True, "message": "Client deleted successfully"}
        assert client.get(f"/api/clients/{client_id}").status_code == 404

    def test_unknown_client(self, client: TestClient, as_member: SessionClaims) -> None:
        response = client.get(f"/api/clients/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Client not found"


class TestNotesAPI:
    """Tests for /api/clients/{id}/notes."""

    def test_add_edit_delete(self, client: TestClient, client_id: str) -> None:
        note = client.post(
            f"/api/clients/{client_id}/notes",
            json={"title": "Kickoff", "content": "Met the team"},
        ).json()["data"]

        edited = client.put(
            f"/api/clients/{client_id}/notes/{note['id']}",
            json={"title": "Kickoff", "content": "Met the whole team"},
        )
        deleted = client.delete(f"/api/clients/{client_id}/notes/{note['id']}")

        assert note["createdBy"] == "member"
        assert edited.json()["data"]["content"] == "Met the whole team"
        assert deleted.json()["message"] == "Note deleted successfully"
        assert client.get(f"/api/clients/{client_id}").json()["data"]["notes"] == []

    def test_title_too_long(self, client: TestClient, client_id: str) -> None:
        response = client.post(
            f"/api/clients/{client_id}/notes",
            json={"title": "x" * 101, "content": "body"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Note title cannot be more than 100 characters"

    def test_unknown_note(self, client: TestClient, client_id: str) -> None:
        response = client.delete(f"/api/clients/{client_id}/notes/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Note not found"


class TestClientTasksAPI:
    """Tests for /api/clients/{id}/tasks."""

    def test_toggle_completion_records_user(self, client: TestClient, client_id: str) -> None:
        task = client.post(
            f"/api/clients/{client_id}/tasks",
            json={"title": "Renew SSL", "content": "Before Friday", "assignedTo": "Dana"},
        ).json()["data"]

        done = client.patch(f"/api/clients/{client_id}/tasks/{task['id']}/toggle-completion")
        reopened = client.patch(f"/api/clients/{client_id}/tasks/{task['id']}/toggle-completion")

        assert task["completed"] is False
        assert done.json()["data"]["completed"] is True
        assert done.json()["data"]["completedBy"] == "member"
        assert reopened.json()["data"]["completedBy"] is None

    def test_member_cannot_delete_task(self, client: TestClient, client_id: str) -> None:
        task = client.post(
            f"/api/clients/{client_id}/tasks",
            json={"title": "Renew SSL", "content": "Before Friday"},
        ).json()["data"]

        response = client.delete(f"/api/clients/{client_id}/tasks/{task['id']}")

        assert response.status_code == 403
        assert response.json()["error"] == "Only administrators can delete tasks"

    def test_admin_deletes_task(
        self,
        client: TestClient,
        client_id: str,
        login_as: Callable[..., SessionClaims],
    ) -> None:
        task = client.post(
            f"/api/clients/{client_id}/tasks",
            json={"title": "Renew SSL", "content": "Before Friday"},
        ).json()["data"]
        login_as(username="admin", role=Role.ADMIN)

        response = client.delete(f"/api/clients/{client_id}/tasks/{task['id']}")

        assert response.json()["message"] == "Task deleted successfully"


class TestLoginDetailsAPI:
    """Tests for /api/clients/{id}/logins."""

    LOGIN = {
        "website": "WP Admin",
        "url": "https://acme.com/wp-admin",
        "username": "acme",
        "password": "hunter2",
    }

    def test_add_and_update(self, client: TestClient, client_id: str) -> None:
        login = client.post(f"/api/clients/{client_id}/logins", json=self.LOGIN)

        updated = client.put(
            f"/api/clients/{client_id}/logins/{login.json()['data']['id']}",
            json={**self.LOGIN, "password": "correct-horse"},
        )

        assert login.status_code == 201
        assert updated.json()["data"]["password"] == "correct-horse"

    def test_missing_url(self, client: TestClient, client_id: str) -> None:
        response = client.post(
            f"/api/clients/{client_id}/logins",
            json={**self.LOGIN, "url": ""},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Website URL is required"

    def test_member_cannot_delete(self, client: TestClient, client_id: str) -> None:
        login = client.post(f"/api/clients/{client_id}/logins", json=self.LOGIN).json()["data"]

        response = client.delete(f"/api/clients/{client_id}/logins/{login['id']}")

        assert response.status_code == 403
        assert response.json()["error"] == "Only administrators can delete login details"
