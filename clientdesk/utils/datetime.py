# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for ClientDesk.

All timestamps are stored in UTC and all Python datetimes are
timezone-aware. Values read back from drivers that drop tzinfo
(SQLite) are normalised with ensure_utc().

Usage:
------
    from clientdesk.utils.datetime import utc_now

    # For SQLAlchemy model defaults
    created_at = mapped_column(DateTime(timezone=True), default=utc_now)
"""

import math
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def format_iso(dt: datetime | None) -> str | None:
    """Format a datetime as an ISO 8601 UTC string.

    Args:
        dt: Datetime to format, or None.

    Returns:
        ISO string or None.
    """
    if dt is None:
        return None
    return ensure_utc(dt).isoformat()


def days_until(target: datetime, reference: datetime | None = None) -> int:
    """Whole days from reference (default now) until target, rounded up.

    A target 1 second in the future counts as 1 day; a target in the
    past yields zero or a negative number.

    Args:
        target: Future (or past) datetime.
        reference: Point to measure from. Defaults to utc_now().

    Returns:
        Ceiling of the remaining days.
    """
    start = ensure_utc(reference) if reference else utc_now()
    delta = ensure_utc(target) - start
    return math.ceil(delta.total_seconds() / 86400)
