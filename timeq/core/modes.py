"""Output mode selection."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from timeq.core.errors import ConfigurationError


class TimeZoneChoice(str, Enum):
    """Zone used by readable output."""
    UTC = "UTC"
    LOCAL = "Local"


class ModeKind(Enum):
    """Kind of rendering requested."""
    EPOCH = "epoch"
    MILLIS = "millis"
    READABLE = "readable"


@dataclass(frozen=True)
class OutputMode:
    """Exactly one output mode; ``zone`` is set only for readable output."""
    kind: ModeKind
    zone: Optional[TimeZoneChoice] = None

    def __post_init__(self):
        if self.kind is ModeKind.READABLE and self.zone is None:
            raise ConfigurationError("--readable requires --output UTC|Local")
        if self.kind is not ModeKind.READABLE and self.zone is not None:
            raise ConfigurationError("--output is only valid together with --readable")

    @classmethod
    def epoch(cls) -> "OutputMode":
        return cls(ModeKind.EPOCH)

    @classmethod
    def millis(cls) -> "OutputMode":
        return cls(ModeKind.MILLIS)

    @classmethod
    def readable(cls, zone: TimeZoneChoice) -> "OutputMode":
        return cls(ModeKind.READABLE, zone)

    @classmethod
    def from_flags(
        cls,
        epoch: bool = False,
        millis: bool = False,
        readable: bool = False,
        output: Optional[TimeZoneChoice] = None,
    ) -> "OutputMode":
        """Build the mode from the three CLI switches and ``--output``.

        Raises:
            ConfigurationError: If not exactly one switch is set, or ``output``
                is missing for readable / present for the other modes.
        """
        selected = [
            kind
            for kind, flag in (
                (ModeKind.EPOCH, epoch),
                (ModeKind.MILLIS, millis),
                (ModeKind.READABLE, readable),
            )
            if flag
        ]
        if not selected:
            raise ConfigurationError(
                "One of --epoch, --millis or --readable is required"
            )
        if len(selected) > 1:
            raise ConfigurationError(
                "--epoch, --millis and --readable are mutually exclusive"
            )
        return cls(selected[0], output)
