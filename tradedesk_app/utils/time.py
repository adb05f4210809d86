"""
Time utilities for quote timestamps.

The simulator stamps every quote with wall-clock UTC time; these helpers
keep that handling in one place so tests can patch it.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get the current wall-clock time.

    Returns:
        Timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)


def ensure_utc(ts: datetime) -> datetime:
    """
    Normalize a timestamp to UTC.

    Naive datetimes are assumed to already be in UTC.

    Args:
        ts: Timestamp to normalize

    Returns:
        Timezone-aware UTC datetime
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def format_timestamp(ts: Optional[datetime]) -> Optional[str]:
    """
    Format a timestamp for serialization.

    Args:
        ts: Timestamp to format, may be None

    Returns:
        ISO8601 formatted string, or None when no timestamp is given
    """
    if ts is None:
        return None
    return ensure_utc(ts).isoformat()

