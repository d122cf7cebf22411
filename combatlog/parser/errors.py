"""
Exceptions raised while reading and decomposing combat log files.
"""

from typing import Optional


class CombatLogError(Exception):
    """Base class for combat log reader errors."""


class SourceUnavailableError(CombatLogError):
    """The combat log file could not be opened, read or decoded."""

    def __init__(self, path, message: Optional[str] = None):
        self.path = str(path)
        super().__init__(message or f"Combat log file unavailable: {self.path}")


class MalformedLineError(CombatLogError):
    """A line does not have the expected `<timestamp>  <event>,<params>` shape."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line[:100]!r}")
