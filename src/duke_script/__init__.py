"""Duke Script loader.

Parses the plain-text scripts that drive cutscenes, menus and other
non-interactive screens into typed action sequences.

Main Components:
    - load_scripts: Parse a whole script file into a ScriptBundle
    - Action dataclasses: One immutable class per instruction
    - ScriptParseError: Base of all parse errors

Usage:
    >>> from src.duke_script import load_scripts
    >>> bundle = load_scripts("Intro\\n//FADEIN\\n//END\\n")
    >>> bundle["Intro"]
    (FadeIn(),)
"""

from src.duke_script.action_types import (
    ACTION_CATEGORIES,
    Action,
    ActionCategory,
    ActionType,
    AnimateNewsReporter,
    CheckBoxDefinition,
    ConfigurePersistentMenuSelection,
    Delay,
    DisableMenuFunctionality,
    DrawBigText,
    DrawSprite,
    DrawText,
    EnableTextOffset,
    EnableTimeOutToDemo,
    FadeIn,
    FadeOut,
    PagesDefinition,
    ScheduleFadeInBeforeNextWaitState,
    Script,
    ScriptBundle,
    SetPalette,
    SetupCheckBoxes,
    ShowFullScreenImage,
    ShowKeyBindings,
    ShowMenuSelectionIndicator,
    ShowMessageBox,
    ShowSaveSlots,
    StopNewsReporterAnimation,
    WaitForUserInput,
    action_to_dict,
    bundle_to_dict,
)
from src.duke_script.exceptions import (
    CorruptPayloadError,
    DisallowedCommandInContextError,
    MalformedArgumentError,
    ScriptParseError,
    UnterminatedConstructError,
)
from src.duke_script.action_parser import DISALLOWED_COMMANDS, parse_one_line_action
from src.duke_script.loader import load_scripts, parse_script

__all__ = [
    # Loading
    "load_scripts",
    "parse_script",
    "parse_one_line_action",
    "DISALLOWED_COMMANDS",
    # Core types
    "Action",
    "ActionCategory",
    "ActionType",
    "ACTION_CATEGORIES",
    "Script",
    "ScriptBundle",
    "CheckBoxDefinition",
    "action_to_dict",
    "bundle_to_dict",
    # Actions
    "AnimateNewsReporter",
    "ConfigurePersistentMenuSelection",
    "Delay",
    "DisableMenuFunctionality",
    "DrawBigText",
    "DrawSprite",
    "DrawText",
    "EnableTextOffset",
    "EnableTimeOutToDemo",
    "FadeIn",
    "FadeOut",
    "PagesDefinition",
    "ScheduleFadeInBeforeNextWaitState",
    "SetPalette",
    "SetupCheckBoxes",
    "ShowFullScreenImage",
    "ShowKeyBindings",
    "ShowMenuSelectionIndicator",
    "ShowMessageBox",
    "ShowSaveSlots",
    "StopNewsReporterAnimation",
    "WaitForUserInput",
    # Errors
    "ScriptParseError",
    "MalformedArgumentError",
    "CorruptPayloadError",
    "DisallowedCommandInContextError",
    "UnterminatedConstructError",
]
