# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignee name model."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from clientdesk.infrastructure.database.models.base import Base, UUIDPrimaryKeyMixin
from clientdesk.utils.datetime import utc_now


class Assignee(UUIDPrimaryKeyMixin, Base):
    """Free-text assignee name offered when assigning tasks.

    Task rows store assignee names as plain strings, so deleting an
    Assignee leaves existing assignments untouched.
    """

    __tablename__ = "assignees"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    name_key: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Assignee(name='{self.name}')>"
