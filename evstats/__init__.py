# ---------------------------------------------------------------------------
# Public library API – import-light facade
# ---------------------------------------------------------------------------

# Time sources
from .clock import Clock, ManualClock, SystemClock  # noqa: F401

# Counters
from .core.statistic import EventCounter, EventsStatistic, EventStat  # noqa: F401
from .core.synchronized import SynchronizedEventCounter  # noqa: F401

# Errors
from .errors import ClockError, EvstatsError, ReplayError  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "EventCounter",
    "EventsStatistic",
    "EventStat",
    "SynchronizedEventCounter",
    "ClockError",
    "EvstatsError",
    "ReplayError",
]
