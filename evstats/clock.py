"""Time sources consumed by :class:`evstats.core.statistic.EventCounter`.

The counter never reads wall-clock time itself; it asks a *clock* for the
current instant.  Production code passes :class:`SystemClock`, tests and
replays pass :class:`ManualClock` (or any object exposing ``now()``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Union

from evstats.errors import ClockError

Instant = Union[datetime, int, float]
Delta = Union[timedelta, int, float]


def to_datetime(instant: Instant) -> datetime:
    """Return *instant* as an aware UTC datetime.

    Numbers are read as seconds since the Unix epoch.  Naive datetimes are
    rejected because they cannot be ordered against aware ones, and so are
    numbers outside the platform's timestamp range (``nan``, ``inf``, ``1e20``).
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            raise ClockError("naive datetime has no timezone", data={"instant": instant.isoformat()})
        return instant
    try:
        return datetime.fromtimestamp(instant, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        raise ClockError(f"{instant!r} is not a representable instant", data={"instant": repr(instant)}) from exc


class Clock(ABC):
    """Capability returning the current instant."""

    @abstractmethod
    def now(self) -> datetime:  # pragma: no cover – interface
        """Return the current, timezone-aware instant."""


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(Clock):
    """Clock that only moves when told to.

    >>> clock = ManualClock(1)
    >>> clock.advance(3600)
    >>> clock.now().timestamp()
    3601.0
    """

    def __init__(self, start: Instant = 0) -> None:
        self._now = to_datetime(start)

    def now(self) -> datetime:
        return self._now

    def set(self, instant: Instant) -> None:
        target = to_datetime(instant)
        if target < self._now:
            raise ClockError(
                "clock cannot move backwards",
                data={"now": self._now.isoformat(), "requested": target.isoformat()},
            )
        self._now = target

    def advance(self, delta: Delta) -> None:
        try:
            if not isinstance(delta, timedelta):
                delta = timedelta(seconds=delta)
            target = self._now + delta
        except (ValueError, OverflowError) as exc:
            raise ClockError(f"cannot advance by {delta!r}", data={"delta": repr(delta)}) from exc
        self.set(target)
