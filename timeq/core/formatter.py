"""Render a resolved instant in the requested output mode."""

from datetime import datetime, timedelta, timezone

from timeq.core.clock import SystemClock
from timeq.core.errors import TruncationError
from timeq.core.modes import ModeKind, OutputMode, TimeZoneChoice
from timeq.core.resolver import ResolvedInstant

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
READABLE_RESOLUTION = timedelta(milliseconds=100)


def epoch_seconds(moment: datetime) -> int:
    """Whole seconds since the Unix epoch, floored."""
    return (moment - UNIX_EPOCH) // timedelta(seconds=1)


def epoch_millis(moment: datetime) -> int:
    """Whole milliseconds since the Unix epoch, floored."""
    return (moment - UNIX_EPOCH) // timedelta(milliseconds=1)


def truncate(moment: datetime, unit: timedelta) -> datetime:
    """Round ``moment`` down to a multiple of ``unit`` counted from the epoch.

    Raises:
        TruncationError: If ``unit`` is not positive or the result is out of range
    """
    if unit <= timedelta(0):
        raise TruncationError(f"Truncation unit must be positive, got {unit}")
    try:
        return moment - (moment - UNIX_EPOCH) % unit
    except OverflowError:
        raise TruncationError(f"Cannot truncate {moment.isoformat()} to {unit}")


def _format_offset(offset: timedelta) -> str:
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_rfc3339(moment: datetime) -> str:
    """Render e.g. '2022-02-02T01:00:00+00:00', or '...:00.300+00:00' with a fraction."""
    timespec = "milliseconds" if moment.microsecond else "seconds"
    if moment.microsecond % 1000:
        timespec = "microseconds"
    wall = moment.replace(tzinfo=None).isoformat(timespec=timespec)
    return wall + _format_offset(moment.utcoffset() or timedelta(0))


def readable_offset(zone: TimeZoneChoice, clock=None, utc_uses_local_offset: bool = True) -> timezone:
    """Offset applied to readable output.

    Local output uses the clock's current local offset. UTC output does the
    same unless ``utc_uses_local_offset`` is turned off in the settings.
    """
    clock = clock or SystemClock()
    if zone is TimeZoneChoice.UTC and not utc_uses_local_offset:
        return timezone.utc
    return clock.local_offset()


def format_instant(
    instant: ResolvedInstant,
    mode: OutputMode,
    clock=None,
    utc_uses_local_offset: bool = True,
) -> str:
    """Format ``instant`` as epoch seconds, epoch millis or RFC3339 text."""
    moment = instant.moment
    if mode.kind is ModeKind.EPOCH:
        return str(epoch_seconds(moment))
    if mode.kind is ModeKind.MILLIS:
        return str(epoch_millis(moment))

    offset = readable_offset(mode.zone, clock, utc_uses_local_offset)
    try:
        shifted = moment.astimezone(offset)
    except OverflowError:
        raise TruncationError(f"{instant.utc.isoformat()} cannot be shown at offset {offset}")
    return format_rfc3339(truncate(shifted, READABLE_RESOLUTION))
