"""Parsers for the multi-line Duke Script constructs.

Two constructs span several command lines:

    - Message boxes (CENTERWINDOW followed by CWTEXT/SKLINE lines). There
      is no end marker; the box ends at the first command that is not
      part of it, and that command is left for the caller to parse.
    - Pages (PAGESSTART ... PAGESEND), a list of alternative scripts
      separated by APAGE.
"""

import logging

from src.duke_script.action_parser import parse_one_line_action
from src.duke_script.action_types import Action, PagesDefinition, ShowMessageBox
from src.duke_script.exceptions import CorruptPayloadError
from src.duke_script.scanner import (
    WHITESPACE,
    CommandLine,
    SourceCursor,
    iter_commands,
    read_command_line,
)

logger = logging.getLogger(__name__)

PAGES_END_MARKER = "PAGESEND"


def parse_message_box_text(cursor: SourceCursor) -> tuple[str, ...]:
    """Parse the text lines of a message box.

    Reads one command line ahead at a time. If it belongs to the message
    box it is consumed, otherwise the cursor is rewound to just before it.

    Args:
        cursor: Cursor positioned after the CENTERWINDOW line.

    Returns:
        Message lines in source order. SKLINE yields an empty line.

    Raises:
        CorruptPayloadError: If a CWTEXT line has no text.
    """
    message_lines: list[str] = []

    while True:
        start_of_line = cursor.tell()
        line = read_command_line(cursor)
        if line is None:
            break

        if line.command == "CWTEXT":
            text = line.args.read_payload()
            if not text:
                raise CorruptPayloadError(
                    "Corrupt Duke Script file: empty CWTEXT payload",
                    line.command,
                    line.line_number,
                )
            message_lines.append(text.rstrip(WHITESPACE))
        elif line.command == "SKLINE":
            message_lines.append("")
        else:
            logger.debug(
                f"Message box ends before '{line.command}' on line {line.line_number}"
            )
            cursor.seek(start_of_line)
            break

    return tuple(message_lines)


def parse_message_box(line: CommandLine, cursor: SourceCursor) -> ShowMessageBox:
    """Parse a CENTERWINDOW command and the message box text after it.

    The CENTERWINDOW line holds y, height and width, in that order.
    """
    y = line.args.read_int()
    height = line.args.read_int()
    width = line.args.read_int()

    cursor.skip_whitespace()
    return ShowMessageBox(
        y=y,
        width=width,
        height=height,
        message_lines=parse_message_box_text(cursor),
    )


def parse_pages_definition(cursor: SourceCursor) -> PagesDefinition:
    """Parse the pages between PAGESSTART and PAGESEND.

    Commands before the first APAGE go to an implicit first page. Each
    APAGE starts a new page. All other commands are parsed as one-line
    actions.

    Args:
        cursor: Cursor positioned after the PAGESSTART line.

    Raises:
        UnterminatedConstructError: If PAGESEND is missing.
        DisallowedCommandInContextError: For nested constructs.
    """
    pages: list[list[Action]] = [[]]

    for line in iter_commands(cursor, PAGES_END_MARKER):
        if line.command == "APAGE":
            pages.append([])
            continue

        action = parse_one_line_action(line)
        if action is not None:
            pages[-1].append(action)

    return PagesDefinition(tuple(tuple(page) for page in pages))
