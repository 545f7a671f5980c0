"""Shared fixtures for timeq tests."""

from datetime import datetime, timezone

import pytest
from dateutil import tz

from timeq.core.clock import FixedClock

# 2024-06-15T12:00:00.123456Z, during US daylight saving time
NOW = datetime(2024, 6, 15, 12, 0, 0, 123456, tzinfo=timezone.utc)
NOW_EPOCH = 1718452800
NOW_MILLIS = 1718452800123


@pytest.fixture
def new_york():
    return tz.gettz("America/New_York")


@pytest.fixture
def ny_clock(new_york):
    """Clock fixed at NOW with New York as the local zone (offset -04:00)."""
    return FixedClock(NOW, new_york)


@pytest.fixture
def utc_clock():
    return FixedClock(NOW)
