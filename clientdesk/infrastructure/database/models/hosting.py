# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Hosting service model used for renewal tracking."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from clientdesk.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from clientdesk.utils.datetime import days_until

EXPIRING_SOON_DAYS = 30


class HostingStatus(str, Enum):
    """Renewal status derived from the end date."""

    ACTIVE = "active"
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"


def status_for_end_date(end_date: datetime, now: datetime | None = None) -> HostingStatus:
    """Derive the renewal status of a hosting service.

    Args:
        end_date: When the hosting period ends.
        now: Reference time. Defaults to the current UTC time.

    Returns:
        EXPIRED when the end date has passed, EXPIRING_SOON within 30
        days, ACTIVE otherwise.
    """
    remaining = days_until(end_date, now)
    if remaining < 0:
        return HostingStatus.EXPIRED
    if remaining <= EXPIRING_SOON_DAYS:
        return HostingStatus.EXPIRING_SOON
    return HostingStatus.ACTIVE


class HostingService(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A client's hosting package with its billing period."""

    __tablename__ = "hosting_services"

    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    website_name: Mapped[str] = mapped_column(String(200), nullable=False)
    website_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    hosting_provider: Mapped[str] = mapped_column(String(200), nullable=False)
    package_type: Mapped[str] = mapped_column(String(100), nullable=False)
    cost: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default="GBP")
    billing_cycle: Mapped[str] = mapped_column(String(20), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    auto_renew: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=HostingStatus.ACTIVE.value)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "billing_cycle IN ('monthly', 'yearly', 'one-time')",
            name="valid_billing_cycle",
        ),
        CheckConstraint(
            "status IN ('active', 'expired', 'expiring_soon')",
            name="valid_hosting_status",
        ),
    )

    def refresh_status(self, now: datetime | None = None) -> None:
        """Recompute status from end_date. Called on every save."""
        self.status = status_for_end_date(self.end_date, now).value

    def __repr__(self) -> str:
        return f"<HostingService(id={self.id}, website='{self.website_name}', status='{self.status}')>"
