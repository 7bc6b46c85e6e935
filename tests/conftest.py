# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (services against an in-memory SQLite database)
- Integration tests (the full app through FastAPI's TestClient)

The environment is configured before any clientdesk import so the
cached settings and the rate limiter see test values.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.api.app import create_app
from clientdesk.core.config import DatabaseSettings, Settings, clear_settings_cache, get_settings
from clientdesk.domains.auth.jwt import JWTManager, SessionClaims
from clientdesk.domains.auth.password import PasswordHasher
from clientdesk.domains.auth.permissions import PermissionSet, Role
from clientdesk.infrastructure.database import DatabaseConnection
from clientdesk.infrastructure.database.models import User

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Low bcrypt cost keeps the suite fast.
TEST_HASHER = PasswordHasher(rounds=4)


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Iterator[Settings]:
    """Provide freshly loaded test settings."""
    clear_settings_cache()
    yield get_settings()
    clear_settings_cache()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def database() -> AsyncIterator[DatabaseConnection]:
    """Provide a connected in-memory database with all tables created."""
    database = DatabaseConnection(DatabaseSettings(url=TEST_DATABASE_URL))
    await database.create_schema()
    yield database
    await database.close()


@pytest.fixture
async def db_session(database: DatabaseConnection) -> AsyncIterator[AsyncSession]:
    """Provide a session on the in-memory database."""
    async with database.session() as session:
        yield session


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create the application with test settings."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Provide a TestClient with the lifespan running.

    Each test gets its own in-memory database.
    """
    with TestClient(app) as test_client:
        yield test_client


async def _insert_user(database: DatabaseConnection, **fields: Any) -> User:
    async with database.session() as session:
        user = User(**fields)
        session.add(user)
        await session.flush()
        return user


@pytest.fixture
def create_user(client: TestClient, app: FastAPI) -> Callable[..., User]:
    """Factory inserting a user row directly into the app's database."""

    def factory(
        username: str,
        password: str = "password123",
        role: Role = Role.TEAM_MEMBER,
        permissions: PermissionSet | None = None,
        email: str | None = None,
    ) -> User:
        permissions = permissions or PermissionSet.for_role(role)
        return client.portal.call(
            lambda: _insert_user(
                app.state.database,
                username=username,
                email=email or f"{username}@example.com",
                password_hash=TEST_HASHER.hash(password),
                role=role.value,
                permissions=permissions.to_claims(),
            )
        )

    return factory


@pytest.fixture
def login_as(client: TestClient, settings: Settings) -> Callable[..., SessionClaims]:
    """Factory setting the auth cookie for a token-only identity.

    No user row is created; the middleware trusts the signed token.
    """
    jwt_manager = JWTManager(settings.jwt)

    def factory(
        username: str = "member",
        role: Role = Role.TEAM_MEMBER,
        permissions: PermissionSet | None = None,
        user_id: str = "00000000-0000-4000-8000-000000000001",
    ) -> SessionClaims:
        claims = SessionClaims(
            user_id=user_id,
            username=username,
            email=f"{username}@example.com",
            role=role,
            permissions=permissions or PermissionSet.for_role(role),
        )
        client.cookies.set(settings.cookie.name, jwt_manager.issue(claims))
        return claims

    return factory


@pytest.fixture
def as_admin(login_as: Callable[..., SessionClaims]) -> SessionClaims:
    """Authenticate the client as an administrator."""
    return login_as(username="admin", role=Role.ADMIN)


@pytest.fixture
def as_member(login_as: Callable[..., SessionClaims]) -> SessionClaims:
    """Authenticate the client as a team member with default permissions."""
    return login_as(username="member", role=Role.TEAM_MEMBER)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
