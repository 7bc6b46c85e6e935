# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the database connection cache.

Engine creation and the connectivity check are replaced with mocks so
the attempt coalescing, failure recovery and timeout can be observed.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import text

from clientdesk.core.config import DatabaseSettings
from clientdesk.core.errors import InternalError
from clientdesk.infrastructure.database import DatabaseConnection, DatabaseError
from clientdesk.infrastructure.database.models import User


class FakeConnection(DatabaseConnection):
    """DatabaseConnection whose engine and ping are controlled by the test."""

    def __init__(self, settings: DatabaseSettings, ping: AsyncMock) -> None:
        super().__init__(settings)
        self.ping = ping
        self.engines: list[MagicMock] = []

    def _open_engine(self) -> MagicMock:
        engine = MagicMock(name=f"engine-{len(self.engines)}")
        engine.dispose = AsyncMock()
        self.engines.append(engine)
        return engine

    async def _ping(self, engine: MagicMock) -> None:
        await self.ping(engine)


@pytest.fixture
def db_settings() -> DatabaseSettings:
    """Database settings with a short connect timeout."""
    return DatabaseSettings(url="postgresql+asyncpg://u:p@localhost/db", connect_timeout=0.2)


class TestEnsureConnection:
    """Tests for DatabaseConnection.ensure_connection."""

    async def test_concurrent_callers_share_one_attempt(self, db_settings: DatabaseSettings) -> None:
        """Test that simultaneous first calls resolve to the same engine."""

        async def slow_ping(engine: MagicMock) -> None:
            await asyncio.sleep(0.01)

        connection = FakeConnection(db_settings, AsyncMock(side_effect=slow_ping))

        engines = await asyncio.gather(*(connection.ensure_connection() for _ in range(10)))

        assert len(connection.engines) == 1
        assert all(engine is connection.engines[0] for engine in engines)
        assert connection.ping.await_count == 1

    async def test_success_is_cached(self, db_settings: DatabaseSettings) -> None:
        """Test that later calls reuse the engine without checking again."""
        connection = FakeConnection(db_settings, AsyncMock())

        first = await connection.ensure_connection()
        second = await connection.ensure_connection()

        assert first is second
        assert connection.is_connected
        assert connection.ping.await_count == 1

    async def test_failed_attempt_does_not_poison_later_calls(self, db_settings: DatabaseSettings) -> None:
        """Test that a failure is cleared so the next call retries."""
        connection = FakeConnection(
            db_settings,
            AsyncMock(side_effect=[ConnectionRefusedError("down"), None]),
        )

        with pytest.raises(DatabaseError):
            await connection.ensure_connection()

        assert not connection.is_connected
        connection.engines[0].dispose.assert_awaited_once()

        engine = await connection.ensure_connection()

        assert engine is connection.engines[1]
        assert connection.is_connected

    async def test_concurrent_callers_all_see_the_failure(self, db_settings: DatabaseSettings) -> None:
        """Test that every caller waiting on a failed attempt gets the error."""

        async def failing_ping(engine: MagicMock) -> None:
            await asyncio.sleep(0.01)
            raise OSError("unreachable")

        connection = FakeConnection(db_settings, AsyncMock(side_effect=failing_ping))

        results = await asyncio.gather(
            *(connection.ensure_connection() for _ in range(3)),
            return_exceptions=True,
        )

        assert all(isinstance(result, DatabaseError) for result in results)
        assert len(connection.engines) == 1

    async def test_hanging_connect_times_out(self, db_settings: DatabaseSettings) -> None:
        """Test that an unresponsive database fails fast."""

        async def hang(engine: MagicMock) -> None:
            await asyncio.sleep(10)

        connection = FakeConnection(db_settings, AsyncMock(side_effect=hang))

        with pytest.raises(DatabaseError, match="timed out"):
            await connection.ensure_connection()

        assert not connection.is_connected
        connection.engines[0].dispose.assert_awaited_once()

    async def test_database_error_maps_to_internal_error(self, db_settings: DatabaseSettings) -> None:
        """Test that connection failures render as 500s."""
        connection = FakeConnection(db_settings, AsyncMock(side_effect=OSError("down")))

        with pytest.raises(InternalError) as exc_info:
            await connection.ensure_connection()

        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.original_error, OSError)

    async def test_close_allows_reconnect(self, db_settings: DatabaseSettings) -> None:
        """Test that close disposes the engine and a later call reconnects."""
        connection = FakeConnection(db_settings, AsyncMock())
        first = await connection.ensure_connection()

        await connection.close()

        first.dispose.assert_awaited_once()
        assert not connection.is_connected

        second = await connection.ensure_connection()
        assert second is not first

    async def test_close_during_connect_discards_engine(self, db_settings: DatabaseSettings) -> None:
        """Test that close cancels an in-flight attempt and disposes its engine."""
        started = asyncio.Event()

        async def hang(engine: MagicMock) -> None:
            started.set()
            await asyncio.sleep(10)

        connection = FakeConnection(db_settings, AsyncMock(side_effect=hang))
        caller = asyncio.create_task(connection.ensure_connection())
        await started.wait()

        await connection.close()

        with pytest.raises(DatabaseError, match="closed"):
            await caller

        connection.engines[0].dispose.assert_awaited_once()
        assert not connection.is_connected
        assert connection._pending is None


class TestSession:
    """Tests against a real in-memory SQLite database."""

    async def test_session_commits_on_success(self, database: DatabaseConnection) -> None:
        """Test that work inside the session is committed."""
        async with database.session() as session:
            session.add(
                User(
                    username="carol",
                    email="carol@example.com",
                    password_hash="$2b$04$hash",
                    role="team_member",
                    permissions={},
                )
            )

        async with database.session() as session:
            result = await session.execute(text("SELECT username FROM users"))
            assert result.scalars().all() == ["carol"]

    async def test_session_rolls_back_on_error(self, database: DatabaseConnection) -> None:
        """Test that an exception discards the session's work."""
        with pytest.raises(RuntimeError):
            async with database.session() as session:
                session.add(
                    User(
                        username="dave",
                        email="dave@example.com",
                        password_hash="$2b$04$hash",
                        role="team_member",
                        permissions={},
                    )
                )
                await session.flush()
                raise RuntimeError("boom")

        async with database.session() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM users"))
            assert result.scalar_one() == 0

    async def test_check_connection(self, database: DatabaseConnection) -> None:
        """Test the SELECT 1 check on a live database."""
        assert await database.check_connection() is True

    async def test_check_connection_before_connect(self) -> None:
        """Test that an unconnected holder reports not connected."""
        connection = DatabaseConnection(DatabaseSettings(url="sqlite+aiosqlite:///:memory:"))

        assert await connection.check_connection() is False
