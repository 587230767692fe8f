"""
Time source for the tracker.

Every temporal decision (reclassification, countdowns, today/this-week
windows) reads the current instant from a Clock. Instants are naive
local datetimes, the same way the user enters scheduled times.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Supplies the current instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in local time, without tzinfo."""

    def now(self) -> datetime:
        return datetime.now()


class FrozenClock:
    """Manually driven clock for tests and replays.

    Usage:
        clock = FrozenClock(datetime(2026, 10, 18, 9, 0))
        clock.advance(minutes=10)
    """

    def __init__(self, instant: datetime) -> None:
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant

    def advance(self, **delta: float) -> datetime:
        """Move the clock forward by a timedelta built from keyword args."""
        self._instant = self._instant + timedelta(**delta)
        return self._instant


def parse_local_instant(value: str) -> datetime:
    """Parse an ISO-8601 string into a naive local datetime.

    Offset-aware strings (including a trailing "Z") are converted to local
    time first. Raises ValueError for anything that is not ISO-8601.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_local_instant(instant: datetime) -> str:
    """Serialize a naive local datetime to ISO-8601 with second precision."""
    return instant.isoformat(timespec="seconds")
