"""Injectable time source.

Everything that reads "now" or the local UTC offset goes through a clock so
tests can pin both.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

from dateutil import tz


def offset_at(zone: tzinfo, moment: datetime) -> timezone:
    """Return the fixed UTC offset ``zone`` has at ``moment``."""
    offset = moment.astimezone(zone).utcoffset() or timedelta(0)
    return timezone(offset)


class SystemClock:
    """Wall clock of the running process."""

    def __init__(self, local_zone: Optional[tzinfo] = None):
        self.local_zone = local_zone or tz.tzlocal()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def local_offset(self) -> timezone:
        return offset_at(self.local_zone, self.now())


class FixedClock:
    """Clock frozen at a single instant, for tests and reproducible runs."""

    def __init__(self, now: datetime, local_zone: Optional[tzinfo] = None):
        if now.tzinfo is None:
            raise ValueError("FixedClock requires a timezone-aware datetime")
        self._now = now.astimezone(timezone.utc)
        self.local_zone = local_zone or timezone.utc

    def now(self) -> datetime:
        return self._now

    def local_offset(self) -> timezone:
        return offset_at(self.local_zone, self._now)
