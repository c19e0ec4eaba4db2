# wheelbot/utils/dates.py
from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Naive UTC, matching DateTime(timezone=False) columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)
