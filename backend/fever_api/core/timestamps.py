"""Timestamps: conversions between Fever unix seconds and aware datetimes.

Invariants:
    - Naive datetimes are treated as UTC (SQLite drops tzinfo on the way back)
    - from_unix() returns None for anything that is not an integer string
      or falls outside the datetime range
"""

from datetime import datetime, timezone


def to_unix(value: datetime | None) -> int:
    """Seconds since epoch; 0 for a missing datetime."""
    if value is None:
        return 0
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def from_unix(raw: str | None) -> datetime | None:
    """Parse a Fever `before` value ("1375080946") into an aware UTC datetime."""
    if raw is None:
        return None
    try:
        return datetime.fromtimestamp(int(raw.strip()), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
