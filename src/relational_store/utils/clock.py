"""
Clock abstraction for timestamp and id generation.

Factories take an optional clock so tests can pin "now" instead of relying
on the wall clock.
"""
from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current UTC time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Clock backed by the system wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Clock that always returns the same instant until advanced.

    Usage:
        clock = FixedClock(datetime(2024, 1, 15, 10, 30, 45, 123000, tzinfo=timezone.utc))
        clock.advance(milliseconds=1)
    """

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant.astimezone(timezone.utc)

    def now(self) -> datetime:
        return self._instant

    def advance(self, milliseconds: int = 0, seconds: int = 0) -> datetime:
        self._instant = self._instant + timedelta(milliseconds=milliseconds, seconds=seconds)
        return self._instant


system_clock = SystemClock()

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def epoch_milliseconds(clock: Clock) -> int:
    """Current time of the clock as milliseconds since the Unix epoch."""
    return (clock.now() - _EPOCH) // timedelta(milliseconds=1)
