# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Hosting service schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from clientdesk.infrastructure.database.models.hosting import HostingStatus
from clientdesk.models.common import CamelModel, UTCDatetime

BillingCycle = Literal["monthly", "yearly", "one-time"]


class HostingCreateRequest(CamelModel):
    """Request to create a hosting service.

    ``status`` is not accepted; it is derived from ``end_date``.
    """

    client_name: str = Field(min_length=1, max_length=200)
    website_name: str = Field(min_length=1, max_length=200)
    website_url: str | None = Field(default=None, max_length=500)
    hosting_provider: str = Field(min_length=1, max_length=200)
    package_type: str = Field(min_length=1, max_length=100)
    cost: float = Field(ge=0)
    currency: str = Field(default="GBP", max_length=10)
    billing_cycle: BillingCycle
    start_date: datetime
    end_date: datetime
    auto_renew: bool = False
    contact_email: str = Field(min_length=1, max_length=255)
    notes: str | None = None


class HostingUpdateRequest(CamelModel):
    """Partial update of a hosting service."""

    client_name: str | None = Field(default=None, min_length=1, max_length=200)
    website_name: str | None = Field(default=None, min_length=1, max_length=200)
    website_url: str | None = Field(default=None, max_length=500)
    hosting_provider: str | None = Field(default=None, min_length=1, max_length=200)
    package_type: str | None = Field(default=None, min_length=1, max_length=100)
    cost: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, max_length=10)
    billing_cycle: BillingCycle | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    auto_renew: bool | None = None
    contact_email: str | None = Field(default=None, min_length=1, max_length=255)
    notes: str | None = None


class HostingResponse(CamelModel):
    """Hosting service record."""

    id: str
    client_name: str
    website_name: str
    website_url: str | None = None
    hosting_provider: str
    package_type: str
    cost: float
    currency: str
    billing_cycle: str
    start_date: UTCDatetime
    end_date: UTCDatetime
    auto_renew: bool
    status: HostingStatus
    contact_email: str
    notes: str | None = None
    created_by: str | None = None
    updated_by: str | None = None
    created_at: UTCDatetime
    updated_at: UTCDatetime
