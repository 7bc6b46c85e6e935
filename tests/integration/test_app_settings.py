# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for an app built with explicitly passed settings.

The settings given to create_app differ from the environment, so every
route and the auth middleware must agree on the injected values.
"""

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from clientdesk.core.config import Settings, get_settings
from clientdesk.domains.auth.jwt import JWTManager, SessionClaims
from clientdesk.domains.auth.permissions import PermissionSet, Role
from clientdesk.infrastructure.database.models import User

INJECTED_SECRET = "secret-passed-to-create-app"


@pytest.fixture
def settings(settings: Settings) -> Settings:
    """Environment settings with a different JWT secret and no debug route."""
    injected = settings.model_copy(deep=True)
    injected.jwt.secret_key = SecretStr(INJECTED_SECRET)
    injected.diagnostics.expose_debug_endpoint = False
    return injected


class TestInjectedSettings:
    """Tests that create_app(settings) wins over the process environment."""

    def test_login_then_verify_with_injected_secret(
        self, client: TestClient, create_user: Callable[..., User]
    ) -> None:
        create_user("alice")

        login = client.post(
            "/api/auth/login",
            json={"username": "alice", "password": "password123"},
        )
        verify = client.get("/api/auth/verify")

        assert login.status_code == 200
        assert verify.status_code == 200
        assert verify.json()["data"]["username"] == "alice"

    def test_token_signed_with_environment_secret_is_rejected(
        self, client: TestClient, settings: Settings
    ) -> None:
        assert get_settings().jwt.secret_key.get_secret_value() != INJECTED_SECRET
        token = JWTManager(get_settings().jwt).issue(
            SessionClaims(
                user_id="00000000-0000-4000-8000-000000000001",
                username="mallory",
                email="mallory@example.com",
                role=Role.ADMIN,
                permissions=PermissionSet.for_role(Role.ADMIN),
            )
        )
        client.cookies.set(settings.cookie.name, token)

        response = client.get("/api/auth/verify")

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_debug_route_follows_injected_flag(self, client: TestClient) -> None:
        response = client.get("/api/debug")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not found"}

    def test_jwt_manager_is_built_once(self, client: TestClient, settings: Settings) -> None:
        jwt_manager = client.app.state.jwt_manager

        assert client.app.state.settings is settings
        assert jwt_manager.verify(
            jwt_manager.issue(
                SessionClaims(
                    user_id="00000000-0000-4000-8000-000000000002",
                    username="bob",
                    email="bob@example.com",
                    role=Role.TEAM_MEMBER,
                    permissions=PermissionSet.for_role(Role.TEAM_MEMBER),
                )
            )
        ).username == "bob"
