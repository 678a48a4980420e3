"""Line scanner for Duke Script source text.

Script source is plain text in which only lines starting with the
comment marker ``//`` are commands; everything else is prose and gets
skipped. This module provides:

    - SourceCursor: position in the whole source, with save/restore so
      a parser can look one line ahead and rewind
    - FieldReader: reads numbers, words and raw payloads from the
      remainder of one command line
    - iter_commands: yields the commands of one construct up to its
      end marker
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from src.duke_script.exceptions import UnterminatedConstructError

# ASCII whitespace only. High bytes like 0xA0 are payload.
WHITESPACE = " \t\n\r\v\f"

COMMAND_PREFIX = "//"
COMMAND_MARKER = "/"

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_leading_int(text: str) -> int | None:
    """Parse the decimal integer at the start of text.

    Leading whitespace is skipped and anything after the digits is
    ignored, so "1_2" reads as 1.

    Returns:
        The integer, or None if text does not start with one.
    """
    match = _INTEGER_PATTERN.match(text.lstrip(WHITESPACE))
    if not match:
        return None
    return int(match.group())


@dataclass(frozen=True)
class CursorPosition:
    """Saved cursor position, see SourceCursor.tell()."""

    offset: int
    line_number: int


class SourceCursor:
    """Read position within the full source text.

    Attributes:
        line_number: 1-based number of the line the cursor is on.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._offset = 0
        self.line_number = 1

    @property
    def at_end(self) -> bool:
        """Whether all input has been consumed."""
        return self._offset >= len(self._text)

    def tell(self) -> CursorPosition:
        return CursorPosition(self._offset, self.line_number)

    def seek(self, position: CursorPosition) -> None:
        self._offset = position.offset
        self.line_number = position.line_number

    def skip_whitespace(self) -> None:
        """Skip whitespace, including newlines."""
        text = self._text
        while self._offset < len(text) and text[self._offset] in WHITESPACE:
            if text[self._offset] == "\n":
                self.line_number += 1
            self._offset += 1

    def read_token(self) -> str:
        """Read one whitespace-delimited token.

        Returns:
            The token, or "" at end of input.
        """
        self.skip_whitespace()
        start = self._offset
        text = self._text
        while self._offset < len(text) and text[self._offset] not in WHITESPACE:
            self._offset += 1
        return text[start : self._offset]

    def read_line(self) -> str | None:
        """Read up to and including the next newline.

        Returns:
            The line without its newline, or None at end of input.
        """
        if self.at_end:
            return None

        end = self._text.find("\n", self._offset)
        if end == -1:
            line = self._text[self._offset :]
            self._offset = len(self._text)
        else:
            line = self._text[self._offset : end]
            self._offset = end + 1
            self.line_number += 1
        return line


class FieldReader:
    """Reads structured fields from the remainder of a command line.

    Reads behave like formatted stream extraction: once a field cannot
    be read, the reader is failed and every later read fails too.
    Failed numeric reads yield 0, failed string reads yield "".
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._offset = 0
        self.failed = False

    def _skip_whitespace(self) -> None:
        while self._offset < len(self._text) and self._text[self._offset] in WHITESPACE:
            self._offset += 1

    def read_int(self) -> int:
        """Read an optionally signed decimal integer."""
        if self.failed:
            return 0
        self._skip_whitespace()
        match = _INTEGER_PATTERN.match(self._text, self._offset)
        if not match:
            self.failed = True
            return 0
        self._offset = match.end()
        return int(match.group())

    def read_word(self) -> str:
        """Read one whitespace-delimited word."""
        if self.failed:
            return ""
        self._skip_whitespace()
        start = self._offset
        while self._offset < len(self._text) and self._text[self._offset] not in WHITESPACE:
            self._offset += 1
        if start == self._offset:
            self.failed = True
        return self._text[start : self._offset]

    def read_payload(self) -> str:
        """Read a raw text payload.

        Consumes exactly one separator character, then returns the rest
        of the line up to the first carriage return.
        """
        if self.failed or self._offset >= len(self._text):
            self.failed = True
            return ""
        self._offset += 1

        end = self._text.find("\r", self._offset)
        if end == -1:
            end = len(self._text)
        payload = self._text[self._offset : end]
        self._offset = end
        return payload


@dataclass
class CommandLine:
    """One command line split into its command token and arguments.

    Attributes:
        command: Command token, e.g. "DELAY".
        args: Reader positioned right after the command token.
        line_number: 1-based source line of the command.
    """

    command: str
    args: FieldReader
    line_number: int


def strip_command_prefix(line: str) -> str:
    """Strip every leading comment marker character.

    Examples:
        >>> strip_command_prefix("////FADEIN")
        'FADEIN'
    """
    return line.lstrip(COMMAND_MARKER)


def read_command_line(cursor: SourceCursor) -> CommandLine | None:
    """Read lines until the next command line.

    Prose lines are skipped.

    Returns:
        The next command, or None at end of input.
    """
    while True:
        line_number = cursor.line_number
        line = cursor.read_line()
        if line is None:
            return None

        line = line.strip(WHITESPACE)
        if not line.startswith(COMMAND_PREFIX):
            continue

        args = FieldReader(strip_command_prefix(line))
        command = args.read_word()
        return CommandLine(command=command, args=args, line_number=line_number)


def iter_commands(cursor: SourceCursor, end_marker: str) -> Iterator[CommandLine]:
    """Yield command lines until the end marker.

    The end marker line is consumed but not yielded. The cursor stays
    shared with the caller, so consumers may read further raw lines
    between two commands.

    Args:
        cursor: Source cursor to read from.
        end_marker: Command token terminating the construct ("END").

    Raises:
        UnterminatedConstructError: If input ends before the end marker.
    """
    cursor.skip_whitespace()
    while True:
        command_line = read_command_line(cursor)
        if command_line is None:
            raise UnterminatedConstructError(end_marker)
        if command_line.command == end_marker:
            return
        yield command_line
