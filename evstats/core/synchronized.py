"""Thread-safe facade over :class:`EventCounter`.

The plain counter assumes single-threaded access.  This wrapper serialises
every operation behind one re-entrant lock so a single instance can be shared
by worker threads of the embedding service.
"""

from __future__ import annotations

import threading
from typing import List, Optional, TextIO, Tuple

from evstats.clock import Clock
from evstats.core.statistic import EventCounter, EventsStatistic, EventStat, write_report


class SynchronizedEventCounter(EventsStatistic):
    def __init__(self, counter: Optional[EventCounter] = None, clock: Optional[Clock] = None) -> None:
        if counter is not None and clock is not None:
            raise ValueError("pass either an existing counter or a clock, not both")
        self._counter = counter if counter is not None else EventCounter(clock)
        self._lock = threading.RLock()

    @property
    def counter(self) -> EventCounter:
        return self._counter

    def record_event(self, name: str) -> None:
        with self._lock:
            self._counter.record_event(name)

    def get_rate(self, name: str) -> float:
        with self._lock:
            return self._counter.get_rate(name)

    def list_rates(self) -> List[Tuple[str, float]]:
        with self._lock:
            return self._counter.list_rates()

    def stats(self) -> List[EventStat]:
        with self._lock:
            return self._counter.stats()

    def report(self, stream: Optional[TextIO] = None) -> List[EventStat]:
        with self._lock:
            rows = self._counter.stats()
        # Render outside the lock; rows are a snapshot.
        return write_report(rows, stream)

    def total(self, name: str) -> int:
        with self._lock:
            return self._counter.total(name)
