"""Counting primitives (no I/O besides the optional report stream)."""

from .statistic import (  # noqa: F401
    MINUTES_IN_HOUR,
    WINDOW,
    EventCounter,
    EventsStatistic,
    EventStat,
    format_stat,
    write_report,
)
from .synchronized import SynchronizedEventCounter  # noqa: F401
