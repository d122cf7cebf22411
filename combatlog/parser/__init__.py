"""
Combat log reader module for splitting WoW combat log lines into events.
"""

from .errors import CombatLogError, SourceUnavailableError, MalformedLineError
from .events import ParsedEvent, passthrough_time
from .reader import CombatLogFileReader, ReaderHandler
from .tokenizer import DecomposedLine, LineDecomposer, LineSplitter, split_line

__all__ = [
    "CombatLogError",
    "SourceUnavailableError",
    "MalformedLineError",
    "ParsedEvent",
    "passthrough_time",
    "CombatLogFileReader",
    "ReaderHandler",
    "DecomposedLine",
    "LineDecomposer",
    "LineSplitter",
    "split_line",
]
