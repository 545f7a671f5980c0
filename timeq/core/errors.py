"""Exceptions raised by the timeq core."""

ACCEPTED_FORMATS = (
    "RFC3339 (e.g. 2022-02-02T01:00:00Z), "
    "local 'YYYY-MM-DD HH:MM:SS', "
    "or '<duration> ago|later' (e.g. '2 hours ago')"
)


class TimeqError(Exception):
    """Base class for all timeq failures."""


class InputParseError(TimeqError, ValueError):
    """The time expression could not be turned into an instant."""

    def __init__(self, expression: str, reason: str = ""):
        self.expression = expression
        self.reason = reason
        message = f"Unable to parse '{expression}'"
        if reason:
            message += f": {reason}"
        message += f". Input must be {ACCEPTED_FORMATS}"
        super().__init__(message)


class TruncationError(TimeqError):
    """Rounding an instant down to the display resolution failed."""


class ConfigurationError(TimeqError, ValueError):
    """Output flags or configuration values are invalid."""
