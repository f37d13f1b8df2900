"""Sliding-window event statistics.

Key concepts
------------
1. **EventsStatistic** – abstract interface: record an event, read one rate,
   list all rates, print a report.
2. **EventCounter** – in-memory implementation over a trailing one-hour
   window with *lazy* eviction (no background timer).

The counter keeps two structures:

* an occurrence log (``deque`` of ``(timestamp, name)``, oldest first) used
  only to decide what falls out of the window next, and
* an aggregate table (``dict``, insertion ordered) mapping each name to its
  lifetime total and its count inside the window.

Every public operation first evicts occurrences whose timestamp is not after
``now - 1h``, so the window is the half-open interval ``(now - 1h, now]``.

Usage::

    counter = EventCounter(SystemClock())
    counter.record_event("login")
    counter.get_rate("login")  # 1 / 60
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections import deque
from datetime import datetime, timedelta
from typing import Deque, Dict, List, NamedTuple, Optional, TextIO, Tuple

from loguru import logger

from evstats.clock import Clock, SystemClock

WINDOW = timedelta(hours=1)
MINUTES_IN_HOUR = 60


class EventStat(NamedTuple):
    """Snapshot row produced by :meth:`EventCounter.stats`."""

    name: str
    total: int
    in_last_hour: int


class _Occurrence(NamedTuple):
    timestamp: datetime
    name: str


class _Aggregate:
    __slots__ = ("total", "in_window")

    def __init__(self) -> None:
        self.total = 0
        self.in_window = 0


def format_stat(stat: EventStat) -> str:
    return f"{stat.name} | total = {stat.total} | in last hour = {stat.in_last_hour}"


def write_report(rows: List[EventStat], stream: Optional[TextIO] = None) -> List[EventStat]:
    """Render *rows* one per line; *stream* defaults to the current ``sys.stdout``."""
    out = stream if stream is not None else sys.stdout
    for row in rows:
        out.write(format_stat(row) + "\n")
    return rows


# ---------------------------------------------------------------------------
# Abstract base class
# ---------------------------------------------------------------------------


class EventsStatistic(ABC):
    """Interface shared by the plain and the synchronised counter."""

    @abstractmethod
    def record_event(self, name: str) -> None:  # pragma: no cover – interface
        """Register one occurrence of *name* at the clock's current instant."""

    @abstractmethod
    def get_rate(self, name: str) -> float:  # pragma: no cover – interface
        """Return the per-minute rate of *name* over the last hour."""

    @abstractmethod
    def list_rates(self) -> List[Tuple[str, float]]:  # pragma: no cover – interface
        """Return ``(name, rate)`` for every known name, first-seen first."""

    @abstractmethod
    def report(self, stream: Optional[TextIO] = None) -> List[EventStat]:  # pragma: no cover – interface
        """Write one human-readable line per known name to *stream*."""

    # Legacy names, kept for callers written against the first interface.
    def inc_event(self, name: str) -> None:
        self.record_event(name)

    def get_event_statistic_by_name(self, name: str) -> float:
        return self.get_rate(name)

    def get_all_event_statistic(self) -> List[Tuple[str, float]]:
        return self.list_rates()

    def print_statistic(self, stream: Optional[TextIO] = None) -> List[EventStat]:
        return self.report(stream)


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------


class EventCounter(EventsStatistic):
    """Counts named events and derives per-minute rates from the last hour.

    Not thread-safe; wrap it in
    :class:`evstats.core.synchronized.SynchronizedEventCounter` when several
    threads share one instance.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock if clock is not None else SystemClock()
        self._log: Deque[_Occurrence] = deque()
        self._counts: Dict[str, _Aggregate] = {}

    def _evict(self) -> datetime:
        """Drop occurrences older than the window; return the instant used."""
        now = self.clock.now()
        cutoff = now - WINDOW
        evicted = 0
        while self._log and self._log[0].timestamp <= cutoff:
            occurrence = self._log.popleft()
            self._counts[occurrence.name].in_window -= 1
            evicted += 1
        if evicted:
            logger.debug("Evicted {} event(s) recorded at or before {}", evicted, cutoff.isoformat())
        return now

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def record_event(self, name: str) -> None:
        now = self._evict()
        self._log.append(_Occurrence(now, name))
        aggregate = self._counts.get(name)
        if aggregate is None:
            aggregate = self._counts[name] = _Aggregate()
            logger.debug("First occurrence of event {!r}", name)
        aggregate.total += 1
        aggregate.in_window += 1

    def get_rate(self, name: str) -> float:
        self._evict()
        aggregate = self._counts.get(name)
        if aggregate is None:
            return 0.0
        return aggregate.in_window / MINUTES_IN_HOUR

    def list_rates(self) -> List[Tuple[str, float]]:
        self._evict()
        return [(name, agg.in_window / MINUTES_IN_HOUR) for name, agg in self._counts.items()]

    def stats(self) -> List[EventStat]:
        """Return ``(name, total, in_last_hour)`` rows in first-seen order."""
        self._evict()
        return [EventStat(name, agg.total, agg.in_window) for name, agg in self._counts.items()]

    def report(self, stream: Optional[TextIO] = None) -> List[EventStat]:
        return write_report(self.stats(), stream)

    def total(self, name: str) -> int:
        """Lifetime count for *name* (``0`` when never recorded)."""
        aggregate = self._counts.get(name)
        return aggregate.total if aggregate is not None else 0

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, name: object) -> bool:
        return name in self._counts
