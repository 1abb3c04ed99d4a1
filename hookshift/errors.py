"""
Errors raised by hookshift's outer layers.

The grouping engine itself never raises; these cover configuration and
source parsing, which can fail on user input.
"""


class HookshiftError(Exception):
    """Base class for hookshift errors."""


class ConfigError(HookshiftError):
    """Configuration could not be loaded or is invalid."""


class ParseError(HookshiftError):
    """Source text could not be parsed into statements."""

    def __init__(self, message: str, line: int = 0):
        super().__init__(message)
        self.line = line
