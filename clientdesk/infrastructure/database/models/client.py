# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client model with embedded notes, tasks and login details.

A client row is one document: its notes, tasks and login details are
JSON arrays on the row. Each embedded item is a dict carrying its own
``id``, ``createdAt`` and ``updatedAt``. Mutations must assign a new
list to the attribute so the change is flushed.
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from clientdesk.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Client(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Client record.

    Attributes:
        name: Display name.
        name_key: Lowercased name, unique.
        notes: Embedded notes.
        tasks: Embedded client tasks.
        login_details: Embedded website credentials.
    """

    __tablename__ = "clientsv2"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    name_key: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    notes: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    tasks: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    login_details: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}')>"
