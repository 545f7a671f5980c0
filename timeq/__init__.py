"""timeq - resolve human time expressions to epoch or RFC3339 output."""

__version__ = "0.1.0"
