from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    # Python's fromisoformat doesn't accept 'Z' in 3.9/3.10, so normalize.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    dt = normalize_dt(dt)
    return dt.astimezone(timezone.utc)


def to_rfc3339(dt: datetime) -> str:
    """
    Convert tz-aware datetime to RFC3339 (UTC, with 'Z').

    Keeps microseconds if present.
    """
    dt = normalize_dt(dt).astimezone(timezone.utc)
    s = dt.isoformat(timespec="microseconds")
    return s.replace("+00:00", "Z")


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt


def to_epoch_millis(value: Optional[str]) -> Optional[int]:
    """
    Best-effort conversion of an RFC3339 string to epoch milliseconds.

    Returns None for missing or unparsable values instead of raising.
    """
    if not value:
        return None
    try:
        dt = parse_rfc3339(value)
    except (TypeError, ValueError):
        return None
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def from_timestamp(value: Union[int, float, datetime]) -> str:
    """Convert epoch milliseconds or an aware datetime to RFC3339 (UTC)."""
    if isinstance(value, datetime):
        return to_rfc3339(value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError("timestamp must be epoch milliseconds or a datetime")
    return to_rfc3339(_EPOCH + timedelta(milliseconds=value))
