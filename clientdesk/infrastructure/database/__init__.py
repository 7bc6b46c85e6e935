# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure.

Example:
    from clientdesk.infrastructure.database import DatabaseConnection

    database = DatabaseConnection(settings.database)
    async with database.session() as session:
        result = await session.execute(select(Client))
"""

from clientdesk.infrastructure.database.connection import (
    DatabaseConnection,
    DatabaseError,
)

__all__ = [
    "DatabaseConnection",
    "DatabaseError",
]
