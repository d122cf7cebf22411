"""
Line tokenizer for WoW combat log lines.

A combat log line looks like::

    9/15/2025 21:30:21.463-4  ZONE_CHANGE,2649,"Hallowfall",23

The timestamp is terminated by two spaces, the event name by the first comma,
and the remaining parameters are comma separated with optional double quoted
values (``\\"`` inside a quoted value is a literal quote).
"""

from dataclasses import dataclass
from typing import List

from .errors import MalformedLineError

TIME_SEPARATOR = "  "
PART_SEPARATOR = ","
QUOTE = '"'
ESCAPE = "\\"


@dataclass(frozen=True)
class DecomposedLine:
    """A raw line split into its timestamp, event name and parameter text."""

    timestamp: str
    event_name: str
    parameter_text: str
    has_parameters: bool = True


class LineSplitter:
    """
    Splits the parameter portion of a combat log line into tokens.

    Only the quoting rules used by the game client are supported: a token is
    quoted if its first character is a double quote, separators inside a
    quoted token are content, and a quoted token ends at a quote followed by
    the separator unless that quote is escaped with a backslash. Quotes that
    are never closed swallow the rest of the line.
    """

    def __init__(self, separator: str = PART_SEPARATOR, quote: str = QUOTE, escape: str = ESCAPE):
        if len(separator) != 1:
            raise ValueError(f"Parameter separator must be a single character, got {separator!r}")
        self.separator = separator
        self.quote = quote
        self.escape = escape
        self._escaped_quote = escape + quote

    def split(self, text: str) -> List[str]:
        """
        Split a parameter string into tokens.

        Args:
            text: Parameter text, i.e. everything after the event name

        Returns:
            List of tokens, always at least one (possibly empty) token
        """
        separator = self.separator
        quote = self.quote
        escape = self.escape

        parts = []
        start = 0
        in_string = False

        for i, char in enumerate(text):
            if i == start and char == quote:
                in_string = True

            if char != separator:
                continue

            if in_string:
                # Still inside the string unless the previous character is an unescaped closing quote
                if text[i - 1] != quote:
                    continue
                if i - 2 >= start and text[i - 2] == escape:
                    continue
                parts.append(self._unwrap(text[start + 1 : i - 1]))
            else:
                parts.append(text[start:i])

            start = i + 1
            in_string = False

        # The last part isn't followed by a separator
        parts.append(self._finish(text[start:]))
        return parts

    def _finish(self, part: str) -> str:
        """Unwrap the trailing part when it is a closed quoted string."""
        quote = self.quote
        if (
            len(part) >= 2
            and part[0] == quote
            and part[-1] == quote
            and not (len(part) >= 3 and part[-2] == self.escape)
        ):
            return self._unwrap(part[1:-1])
        return part

    def _unwrap(self, part: str) -> str:
        # Only pay for the replace when a backslash is present
        if self.escape in part:
            return part.replace(self._escaped_quote, self.quote)
        return part


class LineDecomposer:
    """
    Separates a raw line into timestamp, event name and parameter text.

    Lines missing a separator degrade to a best-effort result unless
    ``strict`` is set, in which case :class:`MalformedLineError` is raised.
    """

    def __init__(
        self,
        time_separator: str = TIME_SEPARATOR,
        part_separator: str = PART_SEPARATOR,
        strict: bool = False,
    ):
        if not time_separator:
            raise ValueError("Timestamp separator must not be empty")
        if not part_separator:
            raise ValueError("Parameter separator must not be empty")
        self.time_separator = time_separator
        self.part_separator = part_separator
        self.strict = strict

    def decompose(self, line: str) -> DecomposedLine:
        """
        Decompose a single raw line.

        Args:
            line: Raw line without its line terminator

        Returns:
            DecomposedLine with the three text fields
        """
        time_end = line.find(self.time_separator)
        if time_end == -1:
            if self.strict:
                raise MalformedLineError(line, "Missing timestamp separator")
            timestamp = ""
            event = line
        else:
            timestamp = line[:time_end]
            event = line[time_end + len(self.time_separator) :]

        name_end = event.find(self.part_separator)
        if name_end == -1:
            if self.strict:
                raise MalformedLineError(line, "Missing parameter separator")
            return DecomposedLine(timestamp, event, "", has_parameters=False)

        return DecomposedLine(
            timestamp=timestamp,
            event_name=event[:name_end],
            parameter_text=event[name_end + len(self.part_separator) :],
        )


_default_splitter = LineSplitter()


def split_line(text: str, separator: str = PART_SEPARATOR) -> List[str]:
    """Split a parameter string using the default quoting rules."""
    if separator == PART_SEPARATOR:
        return _default_splitter.split(text)
    return LineSplitter(separator).split(text)
