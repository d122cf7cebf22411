"""
Event records produced by the combat log reader.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

# Converts the raw timestamp text of a line into whatever the consumer wants
TimeConverter = Callable[[str], Any]


def passthrough_time(timestamp: str) -> str:
    """Default time converter: the timestamp text is handed over unchanged."""
    return timestamp


@dataclass(frozen=True)
class ParsedEvent:
    """
    A single decomposed combat log line.

    ``line_number`` counts emitted lines starting at 1 after any offset was
    applied; ``file_line_number`` is the 1-based position in the file.
    """

    event_name: str
    parameters: List[str] = field(default_factory=list)
    line_number: int = 0
    timestamp: Any = ""
    file_line_number: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for serialization."""
        return {
            "event_name": self.event_name,
            "parameters": list(self.parameters),
            "line_number": self.line_number,
            "file_line_number": self.file_line_number,
            "timestamp": self.timestamp if isinstance(self.timestamp, str) else str(self.timestamp),
        }
