"""Action types and dataclasses for Duke Script.

This module defines every instruction a cutscene or menu script can
contain. Each instruction is its own immutable dataclass; together they
form the closed ``Action`` union. A ``Script`` is an ordered tuple of
actions and a ``ScriptBundle`` maps script names to scripts.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar


class ActionType(str, Enum):
    """Every kind of action a script can produce."""

    # Transitions
    FADE_IN = "fade_in"
    FADE_OUT = "fade_out"
    DELAY = "delay"
    SCHEDULE_FADE_IN = "schedule_fade_in"  # Fade in before next wait

    # Drawing
    DRAW_TEXT = "draw_text"
    DRAW_BIG_TEXT = "draw_big_text"
    DRAW_SPRITE = "draw_sprite"
    SHOW_FULL_SCREEN_IMAGE = "show_full_screen_image"
    SET_PALETTE = "set_palette"
    SHOW_MESSAGE_BOX = "show_message_box"

    # News reporter
    ANIMATE_NEWS_REPORTER = "animate_news_reporter"
    STOP_NEWS_REPORTER_ANIMATION = "stop_news_reporter_animation"

    # Menu
    DISABLE_MENU_FUNCTIONALITY = "disable_menu_functionality"
    SHOW_KEY_BINDINGS = "show_key_bindings"
    SHOW_SAVE_SLOTS = "show_save_slots"
    SHOW_MENU_SELECTION_INDICATOR = "show_menu_selection_indicator"
    SETUP_CHECK_BOXES = "setup_check_boxes"
    CONFIGURE_PERSISTENT_MENU_SELECTION = "configure_persistent_menu_selection"

    # Flow
    WAIT_FOR_USER_INPUT = "wait_for_user_input"
    ENABLE_TEXT_OFFSET = "enable_text_offset"
    ENABLE_TIMEOUT_TO_DEMO = "enable_timeout_to_demo"
    PAGES = "pages"


class ActionCategory(str, Enum):
    """High-level categories for grouping action types."""

    TRANSITION = "transition"
    DRAWING = "drawing"
    NEWS_REPORTER = "news_reporter"
    MENU = "menu"
    FLOW = "flow"


# Mapping of action types to categories
ACTION_CATEGORIES: dict[ActionType, ActionCategory] = {
    # Transition
    ActionType.FADE_IN: ActionCategory.TRANSITION,
    ActionType.FADE_OUT: ActionCategory.TRANSITION,
    ActionType.DELAY: ActionCategory.TRANSITION,
    ActionType.SCHEDULE_FADE_IN: ActionCategory.TRANSITION,
    # Drawing
    ActionType.DRAW_TEXT: ActionCategory.DRAWING,
    ActionType.DRAW_BIG_TEXT: ActionCategory.DRAWING,
    ActionType.DRAW_SPRITE: ActionCategory.DRAWING,
    ActionType.SHOW_FULL_SCREEN_IMAGE: ActionCategory.DRAWING,
    ActionType.SET_PALETTE: ActionCategory.DRAWING,
    ActionType.SHOW_MESSAGE_BOX: ActionCategory.DRAWING,
    # News reporter
    ActionType.ANIMATE_NEWS_REPORTER: ActionCategory.NEWS_REPORTER,
    ActionType.STOP_NEWS_REPORTER_ANIMATION: ActionCategory.NEWS_REPORTER,
    # Menu
    ActionType.DISABLE_MENU_FUNCTIONALITY: ActionCategory.MENU,
    ActionType.SHOW_KEY_BINDINGS: ActionCategory.MENU,
    ActionType.SHOW_SAVE_SLOTS: ActionCategory.MENU,
    ActionType.SHOW_MENU_SELECTION_INDICATOR: ActionCategory.MENU,
    ActionType.SETUP_CHECK_BOXES: ActionCategory.MENU,
    ActionType.CONFIGURE_PERSISTENT_MENU_SELECTION: ActionCategory.MENU,
    # Flow
    ActionType.WAIT_FOR_USER_INPUT: ActionCategory.FLOW,
    ActionType.ENABLE_TEXT_OFFSET: ActionCategory.FLOW,
    ActionType.ENABLE_TIMEOUT_TO_DEMO: ActionCategory.FLOW,
    ActionType.PAGES: ActionCategory.FLOW,
}


class _ActionBase:
    """Shared behaviour of all action dataclasses."""

    type: ClassVar[ActionType]

    @property
    def category(self) -> ActionCategory:
        """Get the category of this action."""
        return ACTION_CATEGORIES[self.type]


@dataclass(frozen=True)
class FadeIn(_ActionBase):
    type: ClassVar[ActionType] = ActionType.FADE_IN


@dataclass(frozen=True)
class FadeOut(_ActionBase):
    type: ClassVar[ActionType] = ActionType.FADE_OUT


@dataclass(frozen=True)
class Delay(_ActionBase):
    """Pause playback.

    Attributes:
        amount: Number of ticks to wait, always positive.
    """

    type: ClassVar[ActionType] = ActionType.DELAY

    amount: int


@dataclass(frozen=True)
class ScheduleFadeInBeforeNextWaitState(_ActionBase):
    type: ClassVar[ActionType] = ActionType.SCHEDULE_FADE_IN


@dataclass(frozen=True)
class DrawText(_ActionBase):
    """Draw text using the regular font."""

    type: ClassVar[ActionType] = ActionType.DRAW_TEXT

    x: int
    y: int
    text: str


@dataclass(frozen=True)
class DrawBigText(_ActionBase):
    """Draw text using the big font, colorized.

    Attributes:
        x: Horizontal position, already shifted by any leading spaces.
        y: Vertical position.
        color_index: Palette index taken from the markup byte's low nibble.
        text: Text following the markup byte.
    """

    type: ClassVar[ActionType] = ActionType.DRAW_BIG_TEXT

    x: int
    y: int
    color_index: int
    text: str


@dataclass(frozen=True)
class DrawSprite(_ActionBase):
    """Draw one animation frame of an actor's sprite."""

    type: ClassVar[ActionType] = ActionType.DRAW_SPRITE

    x: int
    y: int
    actor_id: int
    frame: int


@dataclass(frozen=True)
class ShowFullScreenImage(_ActionBase):
    type: ClassVar[ActionType] = ActionType.SHOW_FULL_SCREEN_IMAGE

    image: str


@dataclass(frozen=True)
class SetPalette(_ActionBase):
    type: ClassVar[ActionType] = ActionType.SET_PALETTE

    palette_file: str


@dataclass(frozen=True)
class ShowMessageBox(_ActionBase):
    """Show a centered message box.

    Attributes:
        y: Vertical position of the box.
        width: Box width.
        height: Box height.
        message_lines: Lines in source order; blank lines are kept.
    """

    type: ClassVar[ActionType] = ActionType.SHOW_MESSAGE_BOX

    y: int
    width: int
    height: int
    message_lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnimateNewsReporter(_ActionBase):
    type: ClassVar[ActionType] = ActionType.ANIMATE_NEWS_REPORTER

    talk_duration: int


@dataclass(frozen=True)
class StopNewsReporterAnimation(_ActionBase):
    type: ClassVar[ActionType] = ActionType.STOP_NEWS_REPORTER_ANIMATION


@dataclass(frozen=True)
class DisableMenuFunctionality(_ActionBase):
    """Disable menu sounds and selection handling."""

    type: ClassVar[ActionType] = ActionType.DISABLE_MENU_FUNCTIONALITY


@dataclass(frozen=True)
class ShowKeyBindings(_ActionBase):
    type: ClassVar[ActionType] = ActionType.SHOW_KEY_BINDINGS


@dataclass(frozen=True)
class ShowSaveSlots(_ActionBase):
    type: ClassVar[ActionType] = ActionType.SHOW_SAVE_SLOTS

    selected_slot: int


@dataclass(frozen=True)
class ShowMenuSelectionIndicator(_ActionBase):
    type: ClassVar[ActionType] = ActionType.SHOW_MENU_SELECTION_INDICATOR

    y_pos: int


@dataclass(frozen=True)
class CheckBoxDefinition:
    """One checkbox of a SetupCheckBoxes action."""

    y_pos: int
    id: int


@dataclass(frozen=True)
class SetupCheckBoxes(_ActionBase):
    type: ClassVar[ActionType] = ActionType.SETUP_CHECK_BOXES

    x_pos: int
    definitions: tuple[CheckBoxDefinition, ...] = ()


@dataclass(frozen=True)
class ConfigurePersistentMenuSelection(_ActionBase):
    type: ClassVar[ActionType] = ActionType.CONFIGURE_PERSISTENT_MENU_SELECTION

    slot: int


@dataclass(frozen=True)
class WaitForUserInput(_ActionBase):
    type: ClassVar[ActionType] = ActionType.WAIT_FOR_USER_INPUT


@dataclass(frozen=True)
class EnableTextOffset(_ActionBase):
    type: ClassVar[ActionType] = ActionType.ENABLE_TEXT_OFFSET


@dataclass(frozen=True)
class EnableTimeOutToDemo(_ActionBase):
    type: ClassVar[ActionType] = ActionType.ENABLE_TIMEOUT_TO_DEMO


@dataclass(frozen=True)
class PagesDefinition(_ActionBase):
    """A set of alternative pages, selected at playback time.

    There is always at least one page. The first one exists even if the
    source never starts a page explicitly.
    """

    type: ClassVar[ActionType] = ActionType.PAGES

    pages: tuple[Script, ...] = ((),)

    def __post_init__(self) -> None:
        if not self.pages:
            raise ValueError("PagesDefinition requires at least one page")


Action = (
    FadeIn
    | FadeOut
    | Delay
    | ScheduleFadeInBeforeNextWaitState
    | DrawText
    | DrawBigText
    | DrawSprite
    | ShowFullScreenImage
    | SetPalette
    | ShowMessageBox
    | AnimateNewsReporter
    | StopNewsReporterAnimation
    | DisableMenuFunctionality
    | ShowKeyBindings
    | ShowSaveSlots
    | ShowMenuSelectionIndicator
    | SetupCheckBoxes
    | ConfigurePersistentMenuSelection
    | WaitForUserInput
    | EnableTextOffset
    | EnableTimeOutToDemo
    | PagesDefinition
)

Script = tuple[Action, ...]
ScriptBundle = dict[str, Script]


def _export_value(value: Any) -> Any:
    if isinstance(value, _ActionBase):
        return action_to_dict(value)  # type: ignore[arg-type]
    if isinstance(value, CheckBoxDefinition):
        return {"y_pos": value.y_pos, "id": value.id}
    if isinstance(value, tuple):
        return [_export_value(item) for item in value]
    return value


def action_to_dict(action: Action) -> dict[str, Any]:
    """Convert an action to a JSON-friendly dict.

    Args:
        action: Action to convert.

    Returns:
        Dict with a "type" key plus one key per action field. Nested
        pages and checkbox definitions are converted recursively.

    Examples:
        >>> action_to_dict(Delay(5))
        {'type': 'delay', 'amount': 5}
    """
    result: dict[str, Any] = {"type": action.type.value}
    for f in fields(action):
        result[f.name] = _export_value(getattr(action, f.name))
    return result


def bundle_to_dict(bundle: ScriptBundle) -> dict[str, list[dict[str, Any]]]:
    """Convert a whole bundle to JSON-friendly data."""
    return {
        name: [action_to_dict(action) for action in script]
        for name, script in bundle.items()
    }
