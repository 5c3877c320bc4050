from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_aware(dt: datetime) -> datetime:
    # Naive values are read as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


# PUBLIC_INTERFACE
def to_timestamp(dt: datetime) -> int:
    """Convert a datetime to Unix epoch seconds (naive input is treated as UTC)."""
    return int((_as_aware(dt) - _EPOCH).total_seconds())


# PUBLIC_INTERFACE
def to_timestamp_ms(dt: datetime) -> int:
    """Convert a datetime to Unix epoch milliseconds."""
    delta = _as_aware(dt) - _EPOCH
    return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000


# PUBLIC_INTERFACE
def from_timestamp(ts: int | float, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert Unix epoch seconds to an aware datetime.

    Parameters:
        ts: seconds since the epoch
        tz: target timezone; UTC when omitted
    """
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.astimezone(tz) if tz is not None else dt


# PUBLIC_INTERFACE
def from_timestamp_ms(ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """Convert Unix epoch milliseconds to an aware datetime."""
    return from_timestamp(ms / 1000, tz=tz)


# PUBLIC_INTERFACE
def now_timestamp() -> int:
    """Current time as Unix epoch seconds."""
    return to_timestamp(datetime.now(tz=timezone.utc))


# PUBLIC_INTERFACE
def now_timestamp_ms() -> int:
    """Current time as Unix epoch milliseconds."""
    return to_timestamp_ms(datetime.now(tz=timezone.utc))
