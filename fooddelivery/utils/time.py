"""Timestamp helpers for UTC-stored order dates."""

from __future__ import annotations

from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Order timestamps are written in UTC. SQLite keeps only the clock time, so
    rows read back are naive and are taken as UTC here. Caller-supplied bounds
    with an offset are shifted to UTC before they are compared with stored rows.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
