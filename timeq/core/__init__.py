"""Time resolution core: parsing, dispatch and formatting."""

from timeq.core.clock import FixedClock, SystemClock
from timeq.core.errors import (
    ConfigurationError,
    InputParseError,
    TimeqError,
    TruncationError,
)
from timeq.core.formatter import format_instant
from timeq.core.modes import OutputMode, TimeZoneChoice
from timeq.core.resolver import ResolvedInstant, resolve

__all__ = [
    "ConfigurationError",
    "FixedClock",
    "InputParseError",
    "OutputMode",
    "ResolvedInstant",
    "SystemClock",
    "TimeZoneChoice",
    "TimeqError",
    "TruncationError",
    "format_instant",
    "resolve",
]
