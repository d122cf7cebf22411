"""
Read timing and completion reporting for combat log reads.

These handlers sit next to the consumer, they are not part of the reader.
"""

import time
import logging
from typing import List, Optional

from ..parser.reader import ReaderHandler

logger = logging.getLogger(__name__)


class ReadTimer(ReaderHandler):
    """Measures how long a read takes and logs the line count when it ends."""

    def __init__(self, label: str = "read"):
        self.label = label
        self.started_at: Optional[float] = None
        self.elapsed: Optional[float] = None
        self.total_lines = 0
        self.failed = False

    def began(self) -> None:
        self.started_at = time.perf_counter()
        self.elapsed = None
        self.total_lines = 0
        self.failed = False

    def record(self, event_name, parameters, line_number, timestamp) -> None:
        self.total_lines = line_number

    def finished(self, total_lines: int) -> None:
        self.total_lines = total_lines
        self._stop()
        logger.info(f"Read entire file. {total_lines} lines ({self.label}: {self.elapsed:.3f}s)")

    def error(self, cause: Exception) -> None:
        self.failed = True
        self._stop()
        logger.error(f"Read failed after {self.total_lines} lines ({self.label}: {self.elapsed:.3f}s): {cause}")

    def stop(self, total_lines: int) -> None:
        """End timing for a read the consumer abandoned before the end of the file."""
        self.total_lines = total_lines
        self._stop()
        logger.info(f"Read stopped after {total_lines} lines ({self.label}: {self.elapsed:.3f}s)")

    def _stop(self):
        if self.started_at is not None:
            self.elapsed = time.perf_counter() - self.started_at
        else:
            self.elapsed = 0.0

    @property
    def lines_per_second(self) -> float:
        """Throughput of the last read."""
        if not self.elapsed:
            return 0.0
        return self.total_lines / max(self.elapsed, 0.000001)


class CompositeHandler(ReaderHandler):
    """Forwards every signal to several handlers, in order."""

    def __init__(self, *handlers: ReaderHandler):
        self.handlers: List[ReaderHandler] = list(handlers)

    def add(self, handler: ReaderHandler) -> "CompositeHandler":
        self.handlers.append(handler)
        return self

    def began(self) -> None:
        for handler in self.handlers:
            handler.began()

    def record(self, event_name, parameters, line_number, timestamp) -> None:
        for handler in self.handlers:
            handler.record(event_name, parameters, line_number, timestamp)

    def finished(self, total_lines: int) -> None:
        for handler in self.handlers:
            handler.finished(total_lines)

    def error(self, cause: Exception) -> None:
        for handler in self.handlers:
            handler.error(cause)
