# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database connection management using SQLAlchemy async.

A single DatabaseConnection is constructed at application startup and
stored on ``app.state``. It opens the engine lazily: the first call to
ensure_connection() starts one connection attempt, bounded by
``connect_timeout``, and every concurrent caller awaits that same
attempt. A failed attempt is discarded so the next call retries; a
successful one is cached until close().

Example:
    database = DatabaseConnection(settings.database)
    await database.ensure_connection()

    async with database.session() as session:
        result = await session.execute(select(User))
        users = result.scalars().all()
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Optional

from sqlalchemy import make_url, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from clientdesk.core.errors import InternalError
from clientdesk.infrastructure.database.models import Base

if TYPE_CHECKING:
    from clientdesk.core.config.settings import DatabaseSettings

logger = logging.getLogger(__name__)


class DatabaseError(InternalError):
    """Raised when the database is unreachable or an operation fails.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or driver error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize the database error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class DatabaseConnection:
    """Process-wide database handle with a coalesced connection attempt.

    Attributes:
        _settings: Database settings.
        _engine: Cached engine once a connection attempt succeeded.
        _sessionmaker: Session factory bound to the cached engine.
        _pending: In-flight connection attempt shared by concurrent callers.
    """

    def __init__(self, settings: "DatabaseSettings") -> None:
        """Initialize the connection holder. No I/O happens here.

        Args:
            settings: Database settings (url, connect_timeout, pool sizing).
        """
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None
        self._pending: Optional[asyncio.Future[AsyncEngine]] = None

    @property
    def is_connected(self) -> bool:
        """Whether a connection attempt has succeeded."""
        return self._engine is not None

    async def ensure_connection(self) -> AsyncEngine:
        """Return the live engine, connecting on first use.

        Returns:
            The cached AsyncEngine.

        Raises:
            DatabaseError: If the connection attempt fails or times out.
        """
        if self._engine is not None:
            return self._engine

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._connect())

        # A cancelled caller must not cancel the attempt other callers share.
        return await asyncio.shield(self._pending)

    async def _connect(self) -> AsyncEngine:
        engine: Optional[AsyncEngine] = None
        timeout = self._settings.connect_timeout

        try:
            engine = self._open_engine()
            await asyncio.wait_for(self._ping(engine), timeout=timeout)
        except asyncio.CancelledError as e:
            await self._discard(engine)
            logger.info("Database connection attempt abandoned by close()")
            raise DatabaseError("Database connection closed", e) from e
        except asyncio.TimeoutError as e:
            await self._discard(engine)
            logger.warning("Database connection timed out after %.1fs", timeout)
            raise DatabaseError("Database connection timed out", e) from e
        except Exception as e:
            await self._discard(engine)
            logger.warning("Database connection failed: %s", type(e).__name__)
            raise DatabaseError("Failed to connect to database", e) from e
        else:
            self._engine = engine
            self._sessionmaker = async_sessionmaker(
                bind=engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.info("Database connection established")
            return engine
        finally:
            if self._pending is asyncio.current_task():
                self._pending = None

    def _open_engine(self) -> AsyncEngine:
        url = make_url(self._settings.resolved_url)
        options: dict = {"echo": self._settings.echo, "pool_pre_ping": True}

        if url.get_backend_name() != "sqlite":
            options.update(
                pool_size=self._settings.pool_size,
                max_overflow=self._settings.max_overflow,
                pool_recycle=1800,
            )

        return create_async_engine(url, **options)

    async def _ping(self, engine: AsyncEngine) -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def _discard(self, engine: Optional[AsyncEngine]) -> None:
        if engine is None:
            return
        try:
            await engine.dispose()
        except Exception as e:
            logger.debug("Ignoring error while disposing failed engine: %s", e)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Get an async session, connecting first if needed.

        The session is committed on success and rolled back on exception.

        Yields:
            AsyncSession for database operations.

        Raises:
            DatabaseError: If the database is unreachable or a database
                operation fails.
        """
        await self.ensure_connection()
        assert self._sessionmaker is not None

        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError("Database operation failed", e) from e
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if the database is reachable.

        Returns:
            True if a cached engine answers SELECT 1, False otherwise.
        """
        if self._engine is None:
            return False

        try:
            await self._ping(self._engine)
            return True
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return False

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet.

        Used by tests and local bootstrap; deployed databases are managed
        by Alembic migrations.
        """
        engine = await self.ensure_connection()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Dispose the engine. A later ensure_connection() reconnects.

        An attempt still in flight is cancelled and its engine discarded;
        callers waiting on it receive DatabaseError.
        """
        pending, self._pending = self._pending, None
        if pending is not None:
            if not pending.done():
                pending.cancel()
                await asyncio.wait([pending])
            if not pending.cancelled() and pending.exception() is not None:
                logger.debug("Pending connection attempt ended: %s", pending.exception())

        engine = self._engine
        self._engine = None
        self._sessionmaker = None

        if engine is not None:
            await engine.dispose()
            logger.info("Database connection closed")
