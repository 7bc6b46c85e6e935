# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Alembic environment for the ClientDesk schema.

The target URL comes from DatabaseSettings (DATABASE_URL or DATABASE_URI),
so migrations run without the JWT secret the API needs. SQLite targets use
batch mode because ALTER TABLE support there is limited.

Usage:
    DATABASE_URL=postgresql+asyncpg://... alembic upgrade head
    alembic upgrade head --sql > schema.sql
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import make_url, pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from clientdesk.core.config.settings import DatabaseSettings
from clientdesk.infrastructure.database.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def resolve_url() -> str:
    """Pick the migration target, ignoring the placeholder in alembic.ini."""
    return DatabaseSettings().resolved_url


def _configure(**options: object) -> None:
    url = resolve_url()
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=make_url(url).get_backend_name() == "sqlite",
        **options,
    )


def run_offline() -> None:
    """Emit the migration SQL without connecting."""
    _configure(
        url=resolve_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    """Apply migrations over a short-lived async engine."""
    engine = create_async_engine(resolve_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
