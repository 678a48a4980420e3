"""Script assembler and bundle loader.

A script file holds any number of named scripts:

    Intro
    //FADEIN
    //DELAY 50
    //END
    Main_Menu
    ...

Each name is followed by the script's commands up to //END.
"""

import logging

from src.duke_script.action_parser import SCRIPT_END_MARKER, parse_one_line_action
from src.duke_script.action_types import (
    Action,
    ConfigurePersistentMenuSelection,
    ScheduleFadeInBeforeNextWaitState,
    Script,
    ScriptBundle,
)
from src.duke_script.constructs import parse_message_box, parse_pages_definition
from src.duke_script.scanner import CommandLine, SourceCursor, iter_commands

logger = logging.getLogger(__name__)


def _parse_actions(line: CommandLine, cursor: SourceCursor) -> list[Action]:
    """Parse one command of a script body into zero, one or two actions."""
    if line.command == "PAGESSTART":
        cursor.skip_whitespace()
        return [parse_pages_definition(cursor)]

    if line.command == "MENU":
        slot = line.args.read_int()
        return [
            ConfigurePersistentMenuSelection(slot),
            ScheduleFadeInBeforeNextWaitState(),
        ]

    if line.command == "CENTERWINDOW":
        return [parse_message_box(line, cursor)]

    action = parse_one_line_action(line)
    return [action] if action is not None else []


def parse_script(cursor: SourceCursor) -> Script:
    """Parse one script body up to its END marker.

    Args:
        cursor: Cursor positioned after the script name.

    Returns:
        The script's actions in playback order.

    Raises:
        ScriptParseError: If the body is malformed or END is missing.
    """
    actions: list[Action] = []
    for line in iter_commands(cursor, SCRIPT_END_MARKER):
        actions.extend(_parse_actions(line, cursor))
    return tuple(actions)


def load_scripts(source: str) -> ScriptBundle:
    """Load all scripts from a script file's text.

    Either every script parses and the complete bundle is returned, or
    the first error is raised and nothing is returned.

    Args:
        source: Full text of the script file. Markup bytes must map to
            code points of the same value (decode with latin-1).

    Returns:
        Mapping of script name to script. A name that appears twice
        keeps the later script.

    Raises:
        ScriptParseError: If any script is malformed.

    Examples:
        >>> load_scripts("S1\\n//FADEIN\\n//DELAY 5\\n//END\\n")
        {'S1': (FadeIn(), Delay(amount=5))}
    """
    cursor = SourceCursor(source)
    bundle: ScriptBundle = {}

    while not cursor.at_end:
        name = cursor.read_token()
        if not name:
            continue

        script = parse_script(cursor)
        if name in bundle:
            logger.warning(f"Script '{name}' is defined more than once, keeping the last one")
        bundle[name] = script
        logger.debug(f"Loaded script '{name}' with {len(script)} actions")

    logger.info(f"Loaded {len(bundle)} scripts")
    return bundle
