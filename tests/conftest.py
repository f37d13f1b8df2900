import pytest

from evstats.clock import ManualClock
from evstats.core.statistic import EventCounter
from evstats.logging import reset_logger


@pytest.fixture(autouse=True)
def _fresh_logger():
    # Sinks bound to captured streams must not outlive the test that created them.
    yield
    reset_logger()


@pytest.fixture
def clock():
    return ManualClock(0)


@pytest.fixture
def counter(clock):
    return EventCounter(clock)
