"""
Streaming reader for WoW combat log files.

Reads a log file line by line and turns each line into a
:class:`~combatlog.parser.events.ParsedEvent`. Events can be pulled with
:meth:`CombatLogFileReader.iter_events`, awaited with
:meth:`CombatLogFileReader.astream`, or pushed to a :class:`ReaderHandler`
with :meth:`CombatLogFileReader.start`.
"""

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Iterator, List, Optional

from ..config.settings import ReaderSettings, get_settings
from .errors import CombatLogError, SourceUnavailableError
from .events import ParsedEvent, TimeConverter, passthrough_time
from .tokenizer import LineDecomposer, LineSplitter

logger = logging.getLogger(__name__)


class ReaderHandler:
    """
    Receives the signals of a single :meth:`CombatLogFileReader.start` pass.

    ``began`` comes first, then one ``record`` per line, then exactly one of
    ``finished`` or ``error``. All methods are no-ops by default.
    """

    def began(self) -> None:
        pass

    def record(self, event_name: str, parameters: List[str], line_number: int, timestamp) -> None:
        pass

    def finished(self, total_lines: int) -> None:
        pass

    def error(self, cause: Exception) -> None:
        pass


class CombatLogFileReader:
    """
    Reads a combat log file and decomposes every line into an event.

    Only minimal parsing happens here: the timestamp is separated from the
    event and the event is split into its parameters. Interpretation of the
    parameters is left to the consumer.

    The file is read as bytes and every line is decoded on its own, so a
    line that cannot be decoded never hides the lines before it.
    """

    def __init__(
        self,
        path,
        settings: Optional[ReaderSettings] = None,
        time_converter: Optional[TimeConverter] = None,
    ):
        """
        Initialize the reader.

        Args:
            path: Path to the combat log file
            settings: Reader settings (defaults to the global settings)
            time_converter: Callable applied to each timestamp text
        """
        self.path = Path(path)
        self.settings = settings or get_settings()
        self.time_converter = time_converter or passthrough_time
        self.decomposer = LineDecomposer(
            time_separator=self.settings.time_separator,
            part_separator=self.settings.part_separator,
            strict=self.settings.strict,
        )
        self.splitter = LineSplitter(self.settings.part_separator)

    def parse_line(self, line: str, line_number: int = 1, file_line_number: Optional[int] = None) -> ParsedEvent:
        """
        Decompose and tokenize a single raw line.

        Args:
            line: Raw line without its terminator
            line_number: Emission-order line number to attach
            file_line_number: Absolute file position (defaults to line_number)
        """
        decomposed = self.decomposer.decompose(line)
        parameters = self.splitter.split(decomposed.parameter_text) if decomposed.has_parameters else []
        if not decomposed.has_parameters:
            logger.debug(f"Line {line_number} has no parameters: {line[:100]!r}")

        return ParsedEvent(
            event_name=decomposed.event_name,
            parameters=parameters,
            line_number=line_number,
            timestamp=self.time_converter(decomposed.timestamp),
            file_line_number=file_line_number if file_line_number is not None else line_number,
        )

    def _resolve_offset(self, offset: Optional[int]) -> int:
        if offset is None:
            offset = self.settings.offset
        if offset < 0:
            raise ValueError(f"Offset must be non-negative, got {offset}")
        return offset

    def _open(self):
        try:
            return open(self.path, "rb")
        except OSError as e:
            logger.error(f"Cannot open combat log {self.path}: {e}")
            raise SourceUnavailableError(self.path, f"Cannot open combat log {self.path}: {e}") from e

    def _read_chunk(self, f, position: int) -> bytes:
        """Read up to and including the next b"\\n"; empty at end of file."""
        try:
            return f.readline()
        except OSError as e:
            logger.error(f"Read failed after line {position} of {self.path}: {e}")
            raise SourceUnavailableError(self.path, f"Read failed after line {position} of {self.path}: {e}") from e

    def _decode(self, raw: bytes, position: int) -> str:
        try:
            return raw.decode(self.settings.encoding, self.settings.errors)
        except UnicodeDecodeError as e:
            logger.error(f"Cannot decode line {position} of {self.path}: {e}")
            raise SourceUnavailableError(self.path, f"Cannot decode line {position} of {self.path}: {e}") from e

    def iter_events(self, offset: Optional[int] = None) -> Iterator[ParsedEvent]:
        """
        Lazily yield events in file order.

        The sequence is single-pass; calling again reopens the file. Closing
        the generator early releases the file handle. Lines end at ``\\n``,
        ``\\r\\n`` or ``\\r``; skipped offset lines are never decoded.

        Args:
            offset: Number of leading lines to skip (defaults to settings.offset)

        Yields:
            ParsedEvent objects

        Raises:
            SourceUnavailableError: The file could not be opened, read or decoded
            MalformedLineError: A line is malformed and settings.strict is set
        """
        offset = self._resolve_offset(offset)
        logger.info(f"Reading {self.path.name} (offset={offset})")

        with self._open() as f:
            position = 0
            line_number = 0
            while True:
                chunk = self._read_chunk(f, position)
                if not chunk:
                    break

                # bytes.splitlines only breaks on \n, \r and \r\n
                for raw in chunk.splitlines():
                    position += 1
                    if position <= offset:
                        continue

                    line = self._decode(raw, position)
                    line_number += 1
                    yield self.parse_line(line, line_number, position)

        logger.info(f"Finished reading {self.path.name}: {line_number} lines")

    def start(self, offset: Optional[int] = None, handler: Optional[ReaderHandler] = None) -> Optional[int]:
        """
        Read the whole file, pushing signals to a handler.

        Args:
            offset: Number of leading lines to skip
            handler: Receiver of began/record/finished/error signals

        Returns:
            Number of emitted lines, or None when the stream failed
        """
        handler = handler or ReaderHandler()
        offset = self._resolve_offset(offset)

        handler.began()
        total = 0
        events = self.iter_events(offset)
        try:
            while True:
                try:
                    event = next(events)
                except StopIteration:
                    break
                except CombatLogError as e:
                    handler.error(e)
                    return None
                total = event.line_number
                handler.record(event.event_name, event.parameters, event.line_number, event.timestamp)
        finally:
            events.close()

        handler.finished(total)
        return total

    async def astream(self, offset: Optional[int] = None) -> AsyncIterator[ParsedEvent]:
        """
        Asynchronously yield events in file order.

        Each line is read in the default executor so the event loop keeps
        running while waiting on the disk.

        Args:
            offset: Number of leading lines to skip

        Raises:
            SourceUnavailableError: The file could not be opened, read or decoded
        """
        offset = self._resolve_offset(offset)
        loop = asyncio.get_event_loop()
        logger.info(f"Streaming {self.path.name} (offset={offset})")

        f = await loop.run_in_executor(None, self._open)
        try:
            position = 0
            line_number = 0
            while True:
                chunk = await loop.run_in_executor(None, self._read_chunk, f, position)
                if not chunk:
                    break

                for raw in chunk.splitlines():
                    position += 1
                    if position <= offset:
                        continue

                    line = self._decode(raw, position)
                    line_number += 1
                    yield self.parse_line(line, line_number, position)
        finally:
            f.close()

        logger.info(f"Finished streaming {self.path.name}: {line_number} lines")
