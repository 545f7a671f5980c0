"""Duration parsing helpers for timeq."""

import re
from datetime import timedelta
from decimal import Decimal

# Microseconds per unit. Months and years are fixed averages of the
# Gregorian calendar, not calendar arithmetic.
_SECOND = Decimal(1_000_000)
UNIT_MICROSECONDS = {
    "nanosecond": Decimal("0.001"),
    "microsecond": Decimal(1),
    "millisecond": Decimal(1_000),
    "second": _SECOND,
    "minute": 60 * _SECOND,
    "hour": 3_600 * _SECOND,
    "day": 86_400 * _SECOND,
    "week": 604_800 * _SECOND,
    "month": 2_629_746 * _SECOND,
    "year": 31_556_952 * _SECOND,
}

UNIT_ALIASES = {
    "ns": "nanosecond", "nsec": "nanosecond", "nanos": "nanosecond",
    "nanosecond": "nanosecond", "nanoseconds": "nanosecond",
    "us": "microsecond", "µs": "microsecond", "usec": "microsecond",
    "micros": "microsecond", "microsecond": "microsecond", "microseconds": "microsecond",
    "ms": "millisecond", "msec": "millisecond", "millis": "millisecond",
    "millisecond": "millisecond", "milliseconds": "millisecond",
    "s": "second", "sec": "second", "secs": "second",
    "second": "second", "seconds": "second",
    "m": "minute", "min": "minute", "mins": "minute",
    "minute": "minute", "minutes": "minute",
    "h": "hour", "hr": "hour", "hrs": "hour", "hour": "hour", "hours": "hour",
    "d": "day", "day": "day", "days": "day",
    "w": "week", "wk": "week", "wks": "week", "week": "week", "weeks": "week",
    "mo": "month", "month": "month", "months": "month",
    "y": "year", "yr": "year", "yrs": "year", "year": "year", "years": "year",
}

_TERM = re.compile(r"(?P<value>\d+(?:\.\d*)?|\.\d+)\s*(?P<unit>[^\W\d_]+)?")
_SEPARATOR = re.compile(r"\s*(?:,|\band\b)?\s*")


def parse_duration(text: str) -> timedelta:
    """Parse a duration phrase like '2 hours' or '1h 30m' to a timedelta.

    Terms are ``<number><unit>`` pairs separated by whitespace, commas or
    "and". A number without a unit counts as seconds.

    Args:
        text: Duration text (e.g., '90s', '2 hours', '1.5 days', '1h30m')

    Returns:
        timedelta with the summed magnitude of all terms

    Raises:
        ValueError: If the text is not a duration
        OverflowError: If the duration exceeds what timedelta can hold

    Examples:
        >>> parse_duration('30m')              # 30 minutes
        >>> parse_duration('2 hours and 5 s')  # 2 hours 5 seconds
        >>> parse_duration('1.5 weeks')        # 10 days 12 hours
    """
    text = text.strip()
    if not text:
        raise ValueError("Empty duration")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        term = _TERM.match(text, pos)
        if not term:
            raise ValueError(f"Invalid duration: '{text}'")

        unit_name = (term.group("unit") or "s").lower()
        if unit_name not in UNIT_ALIASES:
            raise ValueError(f"Unknown duration unit '{unit_name}' in '{text}'")
        total += Decimal(term.group("value")) * UNIT_MICROSECONDS[UNIT_ALIASES[unit_name]]

        separator = _SEPARATOR.match(text, term.end())
        pos = separator.end()
        if pos == len(text) and separator.group().strip():
            raise ValueError(f"Dangling separator in duration: '{text}'")

    # timedelta raises OverflowError beyond +/-999999999 days
    return timedelta(microseconds=int(total))
