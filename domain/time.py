"""
Domain time utilities (pure).

Leads carry their creation time as integer epoch milliseconds, which is also
the storage and wire format. These helpers convert between that
representation and UTC datetimes.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def to_epoch_ms(value: datetime) -> int:
    """Convert a UTC datetime to whole epoch milliseconds."""

    require_utc_timestamp("value", value)
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    """Convert epoch milliseconds to a UTC datetime."""

    if value < 0:
        raise ValueError("epoch milliseconds must be >= 0")
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def now_epoch_ms(clock: Optional[Callable[[], datetime]] = None) -> int:
    """Current time in epoch milliseconds. `clock` must return a UTC datetime."""

    now = clock() if clock is not None else datetime.now(timezone.utc)
    return to_epoch_ms(now)
