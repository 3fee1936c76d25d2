"""
Core Utilities.

Shared utility functions used across the backend.
"""

from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    """Return current UTC time as timezone-naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso_now() -> str:
    """
    Return the current UTC time as a note timestamp string.

    Timestamps are stored as text, so the format is fixed width with
    microsecond precision: lexicographic order is chronological order.

    Returns:
        e.g. "2024-05-01T09:30:12.123456Z"
    """
    return utc_now().strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse a stored note timestamp back into a naive UTC datetime."""
    return datetime.strptime(value, TIMESTAMP_FORMAT)
