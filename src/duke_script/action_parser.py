"""Parsing of single-line Duke Script commands into actions.

Most commands map to exactly one action built from the arguments on the
same line. Commands that span several lines or expand to more than one
action (CENTERWINDOW, PAGESSTART, MENU) are handled one level up by the
script assembler, and are rejected here.
"""

import logging
from collections.abc import Callable

from src.duke_script.action_types import (
    Action,
    AnimateNewsReporter,
    CheckBoxDefinition,
    Delay,
    DisableMenuFunctionality,
    DrawBigText,
    DrawSprite,
    DrawText,
    EnableTextOffset,
    EnableTimeOutToDemo,
    FadeIn,
    FadeOut,
    SetPalette,
    SetupCheckBoxes,
    ShowFullScreenImage,
    ShowKeyBindings,
    ShowMenuSelectionIndicator,
    ShowSaveSlots,
    StopNewsReporterAnimation,
    WaitForUserInput,
)
from src.duke_script.exceptions import (
    CorruptPayloadError,
    DisallowedCommandInContextError,
    MalformedArgumentError,
)
from src.duke_script.scanner import CommandLine, parse_leading_int

logger = logging.getLogger(__name__)


# Commands which are only valid as part of a multi-line construct, or
# which the script assembler expands itself.
DISALLOWED_COMMANDS: frozenset[str] = frozenset(
    {
        "APAGE",
        "CENTERWINDOW",
        "CWTEXT",
        "MENU",
        "PAGESEND",
        "PAGESSTART",
        "SKLINE",
    }
)

SCRIPT_END_MARKER = "END"

NUM_SAVE_SLOTS = 8

# [P]ress [A]ny [K]ey: actor 146 is an image of "Press any key to continue"
PRESS_ANY_KEY_ACTOR_ID = 146

# XYTEXT markup bytes
SPRITE_MARKER = 0xEF
BIG_TEXT_MARKER = 0xF0
MARKUP_BYTE_MAX = 0xFF
SPRITE_PAYLOAD_LENGTH = 6


def _parse_delay(line: CommandLine) -> Action:
    amount = line.args.read_int()
    if amount <= 0:
        raise MalformedArgumentError(
            "Invalid DELAY command in Duke Script file", line.command, line.line_number
        )
    return Delay(amount)


def _parse_babble_on(line: CommandLine) -> Action:
    duration = line.args.read_int()
    if duration <= 0:
        raise MalformedArgumentError(
            "Invalid BABBLEON command in Duke Script file", line.command, line.line_number
        )
    return AnimateNewsReporter(duration)


def _parse_get_names(line: CommandLine) -> Action:
    slot = line.args.read_int()
    if slot < 0 or slot >= NUM_SAVE_SLOTS:
        raise MalformedArgumentError(
            "Invalid GETNAMES command in Duke Script file", line.command, line.line_number
        )
    return ShowSaveSlots(slot)


def _parse_required_name(line: CommandLine) -> str:
    name = line.args.read_word()
    if not name:
        raise MalformedArgumentError(
            f"Invalid {line.command} command in Duke Script file",
            line.command,
            line.line_number,
        )
    return name


def _parse_load_raw(line: CommandLine) -> Action:
    return ShowFullScreenImage(_parse_required_name(line))


def _parse_get_pal(line: CommandLine) -> Action:
    return SetPalette(_parse_required_name(line))


def _parse_selection_indicator(line: CommandLine) -> Action:
    return ShowMenuSelectionIndicator(line.args.read_int())


def _parse_toggs(line: CommandLine) -> Action:
    x_pos = line.args.read_int()
    # No upper bound on count, missing pairs read as (0, 0).
    count = line.args.read_int()

    definitions = []
    for _ in range(count):
        y_pos = line.args.read_int()
        checkbox_id = line.args.read_int()
        definitions.append(CheckBoxDefinition(y_pos=y_pos, id=checkbox_id))

    return SetupCheckBoxes(x_pos, tuple(definitions))


def _parse_xy_text(line: CommandLine) -> Action:
    """Parse XYTEXT, which packs three different commands into one.

    1. If the payload contains a byte in 0xF0..0xFF, the text after it is
       drawn in the big font, colorized with the byte's low nibble as palette
       index. Characters before the marker are assumed to be spaces and
       shift the x position instead of being drawn.
    2. If the payload starts with 0xEF, it holds a 3 digit actor ID and a
       2 digit animation frame, and a sprite is drawn.
    3. Otherwise, the payload is drawn as regular text.
    """
    x = line.args.read_int()
    y = line.args.read_int()
    payload = line.args.read_payload()

    if not payload:
        raise CorruptPayloadError(
            "Corrupt Duke Script file: empty XYTEXT payload",
            line.command,
            line.line_number,
        )

    for index, char in enumerate(payload):
        if BIG_TEXT_MARKER <= ord(char) <= MARKUP_BYTE_MAX:
            return DrawBigText(
                x=x + index,
                y=y,
                color_index=ord(char) - BIG_TEXT_MARKER,
                text=payload[index + 1 :],
            )

    if ord(payload[0]) == SPRITE_MARKER:
        if len(payload) < SPRITE_PAYLOAD_LENGTH:
            raise CorruptPayloadError(
                "Corrupt Duke Script file: XYTEXT sprite payload too short",
                line.command,
                line.line_number,
            )
        actor_id = parse_leading_int(payload[1:4])
        frame = parse_leading_int(payload[4:6])
        if actor_id is None or frame is None:
            raise CorruptPayloadError(
                f"Corrupt Duke Script file: invalid XYTEXT sprite payload {payload[1:6]!r}",
                line.command,
                line.line_number,
            )
        return DrawSprite(x=x + 2, y=y + 1, actor_id=actor_id, frame=frame)

    return DrawText(x=x, y=y, text=payload)


_ONE_LINE_PARSERS: dict[str, Callable[[CommandLine], Action]] = {
    "FADEIN": lambda line: FadeIn(),
    "FADEOUT": lambda line: FadeOut(),
    "DELAY": _parse_delay,
    "BABBLEON": _parse_babble_on,
    "BABBLEOFF": lambda line: StopNewsReporterAnimation(),
    "NOSOUNDS": lambda line: DisableMenuFunctionality(),
    "KEYS": lambda line: ShowKeyBindings(),
    "GETNAMES": _parse_get_names,
    "PAK": lambda line: DrawSprite(x=0, y=0, actor_id=PRESS_ANY_KEY_ACTOR_ID, frame=0),
    "LOADRAW": _parse_load_raw,
    "Z": _parse_selection_indicator,
    "XYTEXT": _parse_xy_text,
    "GETPAL": _parse_get_pal,
    "WAIT": lambda line: WaitForUserInput(),
    "SHIFTWIN": lambda line: EnableTextOffset(),
    "EXITTODEMO": lambda line: EnableTimeOutToDemo(),
    "TOGGS": _parse_toggs,
}

ONE_LINE_COMMANDS: frozenset[str] = frozenset(_ONE_LINE_PARSERS)


def parse_one_line_action(line: CommandLine) -> Action | None:
    """Parse a command whose arguments all sit on its own line.

    Args:
        line: The command line to parse.

    Returns:
        The parsed action, or None for commands that are not supported.
        Unknown commands are ignored so that scripts using directives we
        don't implement (HELPTEXT, SETKEYS, ...) still load.

    Raises:
        MalformedArgumentError: If an argument is out of range or missing.
        CorruptPayloadError: If an XYTEXT payload is empty, or a sprite
            payload is too short or lacks digits.
        DisallowedCommandInContextError: If the command is only valid
            inside another construct.
    """
    parser = _ONE_LINE_PARSERS.get(line.command)
    if parser is not None:
        return parser(line)

    if line.command in DISALLOWED_COMMANDS or line.command == SCRIPT_END_MARKER:
        raise DisallowedCommandInContextError(line.command, line.line_number)

    logger.debug(f"Ignoring unsupported command '{line.command}' on line {line.line_number}")
    return None
