# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client group label model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from clientdesk.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Group(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Named label used to classify clients and tasks.

    ``name_key`` holds the lowercased name; its unique constraint makes
    names unique regardless of case.
    """

    __tablename__ = "groups"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name='{self.name}')>"
