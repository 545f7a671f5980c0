"""Turn a time expression into an instant.

Resolution order: no input means "now"; otherwise a relative phrase
("<duration> ago|later") is tried, then an absolute timestamp (strict
RFC3339, then local "YYYY-MM-DD HH:MM:SS").
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import ciso8601
from dateutil import tz

from timeq.core.clock import SystemClock
from timeq.core.errors import InputParseError
from timeq.utils.time_helpers import parse_duration

LOCAL_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_RELATIVE = re.compile(r"^(?P<duration>.*?)\s+(?P<qualifier>ago|later)$", re.DOTALL)

# Seconds field of the fixed-width "YYYY-MM-DDTHH:MM:SS" prefix
_SECONDS_FIELD = slice(16, 19)


@dataclass(frozen=True)
class ResolvedInstant:
    """A resolved, timezone-aware point in time."""
    moment: datetime
    source: str  # now, relative, rfc3339, local

    @property
    def utc(self) -> datetime:
        return self.moment.astimezone(timezone.utc)


def parse_relative(text: str, now: datetime) -> Optional[datetime]:
    """Evaluate '<duration> ago' or '<duration> later' against ``now``.

    Returns None when the text is not a relative phrase or its duration part
    does not parse. Raises InputParseError when the result falls outside the
    representable range.
    """
    match = _RELATIVE.match(text.strip())
    if not match:
        return None

    try:
        delta = parse_duration(match.group("duration"))
    except ValueError:
        return None
    except OverflowError:
        raise InputParseError(text, "duration is too large")

    try:
        if match.group("qualifier") == "ago":
            return now - delta
        return now + delta
    except OverflowError:
        raise InputParseError(text, "result is outside the supported date range")


def parse_rfc3339(text: str) -> Optional[datetime]:
    """Strict RFC3339 parse; None if ``text`` is not a valid RFC3339 timestamp.

    A leap second (``:60``) resolves to the last microsecond of the
    preceding second.
    """
    leap = text[_SECONDS_FIELD] == ":60"
    if leap:
        text = text[:17] + "59" + text[19:]
    try:
        parsed = ciso8601.parse_rfc3339(text)
    except ValueError:
        return None
    if leap:
        parsed = parsed.replace(microsecond=999999)
    return parsed


def parse_local(text: str, local_zone) -> Optional[datetime]:
    """Parse 'YYYY-MM-DD HH:MM:SS' as a wall-clock time in ``local_zone``.

    Returns None if the text does not have that shape. Raises
    InputParseError if the wall-clock time is skipped or repeated by a DST
    transition, rather than guessing which instant was meant.
    """
    try:
        naive = datetime.strptime(text, LOCAL_DATETIME_FORMAT)
    except ValueError:
        return None

    if not tz.datetime_exists(naive, local_zone):
        raise InputParseError(text, "local time does not exist (DST gap)")
    if tz.datetime_ambiguous(naive, local_zone):
        raise InputParseError(text, "local time is ambiguous (DST overlap)")
    return naive.replace(tzinfo=local_zone)


def parse_absolute(text: str, clock=None) -> Optional[ResolvedInstant]:
    """Parse an RFC3339 or local timestamp.

    The result carries the local offset of the clock's current instant, not
    the offset in force at the parsed instant. Around DST changes the
    rendered offset can therefore differ from the historical one.
    """
    clock = clock or SystemClock()
    source = "rfc3339"
    parsed = parse_rfc3339(text)
    if parsed is None:
        source = "local"
        parsed = parse_local(text, clock.local_zone)
    if parsed is None:
        return None
    try:
        return ResolvedInstant(parsed.astimezone(clock.local_offset()), source)
    except OverflowError:
        raise InputParseError(text, "result is outside the supported date range")


def resolve(text: Optional[str] = None, clock=None) -> ResolvedInstant:
    """Resolve an optional time expression to an instant.

    Raises:
        InputParseError: If no grammar accepts ``text``, or it matched but is
            invalid (DST-ambiguous local time, out-of-range duration).
    """
    clock = clock or SystemClock()
    now = clock.now()
    if text is None:
        return ResolvedInstant(now, "now")

    relative = parse_relative(text, now)
    if relative is not None:
        return ResolvedInstant(relative, "relative")

    absolute = parse_absolute(text, clock)
    if absolute is not None:
        return absolute

    raise InputParseError(text)
