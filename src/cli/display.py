"""Rich display helpers for CLI output."""

from collections import Counter
from typing import assert_never

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.duke_script.action_types import (
    Action,
    ActionCategory,
    AnimateNewsReporter,
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
)


# Shared console instance
console = Console()


def display_error(message: str) -> None:
    """Display error message.

    Args:
        message: Error message.
    """
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def display_success(message: str) -> None:
    """Display success message.

    Args:
        message: Success message.
    """
    console.print(f"[bold green]{message}[/bold green]")


def display_info(message: str) -> None:
    """Display info message.

    Args:
        message: Info message.
    """
    console.print(f"[dim]{message}[/dim]")


def _printable(text: str) -> str:
    """Escape markup bytes and other non-ASCII characters for display."""
    return "".join(c if 32 <= ord(c) < 127 else f"\\x{ord(c):02X}" for c in text)


def describe_action(action: Action) -> str:
    """One-line human-readable description of an action.

    Args:
        action: Action to describe.

    Returns:
        Description such as "DrawText (10, 20) 'Hello'".
    """
    match action:
        case FadeIn():
            return "FadeIn"
        case FadeOut():
            return "FadeOut"
        case Delay(amount=amount):
            return f"Delay {amount}"
        case ScheduleFadeInBeforeNextWaitState():
            return "ScheduleFadeIn before next wait"
        case DrawText(x=x, y=y, text=text):
            return f"DrawText ({x}, {y}) '{_printable(text)}'"
        case DrawBigText(x=x, y=y, color_index=color, text=text):
            return f"DrawBigText ({x}, {y}) color {color} '{_printable(text)}'"
        case DrawSprite(x=x, y=y, actor_id=actor_id, frame=frame):
            return f"DrawSprite ({x}, {y}) actor {actor_id} frame {frame}"
        case ShowFullScreenImage(image=image):
            return f"ShowFullScreenImage {image}"
        case SetPalette(palette_file=palette_file):
            return f"SetPalette {palette_file}"
        case ShowMessageBox(y=y, width=width, height=height, message_lines=lines):
            return f"ShowMessageBox y={y} {width}x{height}, {len(lines)} lines"
        case AnimateNewsReporter(talk_duration=duration):
            return f"AnimateNewsReporter {duration}"
        case StopNewsReporterAnimation():
            return "StopNewsReporterAnimation"
        case DisableMenuFunctionality():
            return "DisableMenuFunctionality"
        case ShowKeyBindings():
            return "ShowKeyBindings"
        case ShowSaveSlots(selected_slot=slot):
            return f"ShowSaveSlots slot {slot}"
        case ShowMenuSelectionIndicator(y_pos=y_pos):
            return f"ShowMenuSelectionIndicator y={y_pos}"
        case SetupCheckBoxes(x_pos=x_pos, definitions=definitions):
            boxes = ", ".join(f"{d.id}@{d.y_pos}" for d in definitions)
            return f"SetupCheckBoxes x={x_pos} [{boxes}]"
        case ConfigurePersistentMenuSelection(slot=slot):
            return f"ConfigurePersistentMenuSelection slot {slot}"
        case WaitForUserInput():
            return "WaitForUserInput"
        case EnableTextOffset():
            return "EnableTextOffset"
        case EnableTimeOutToDemo():
            return "EnableTimeOutToDemo"
        case PagesDefinition(pages=pages):
            return f"Pages ({len(pages)} pages)"
        case _:
            assert_never(action)


def format_script(script: Script, indent: int = 0) -> list[str]:
    """Format a script as numbered lines.

    Message box text and page contents are listed below their action,
    indented one level deeper.
    """
    prefix = "  " * indent
    lines: list[str] = []
    for number, action in enumerate(script, start=1):
        lines.append(f"{prefix}{number:3}. {describe_action(action)}")
        if isinstance(action, ShowMessageBox):
            lines.extend(f"{prefix}       | {_printable(text)}" for text in action.message_lines)
        elif isinstance(action, PagesDefinition):
            for page_number, page in enumerate(action.pages, start=1):
                lines.append(f"{prefix}       Page {page_number}:")
                lines.extend(format_script(page, indent + 4))
    return lines


def display_script(name: str, script: Script) -> None:
    """Display the actions of one script.

    Args:
        name: Script name.
        script: The script's actions.
    """
    console.print(f"[bold cyan]== {name} ==[/bold cyan]")
    if not script:
        console.print("[dim]No actions.[/dim]")
        return
    for line in format_script(script):
        console.print(line, markup=False, highlight=False)


def display_bundle_table(bundle: ScriptBundle) -> None:
    """Display a table of all scripts with action counts per category.

    Args:
        bundle: Loaded scripts.
    """
    if not bundle:
        console.print("[dim]No scripts found.[/dim]")
        return

    table = Table(title="Scripts", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Actions", justify="right")
    for category in ActionCategory:
        table.add_column(category.value.replace("_", " ").title(), justify="right", style="dim")

    for name, script in bundle.items():
        counts = Counter(action.category for action in script)
        table.add_row(
            name,
            str(len(script)),
            *(str(counts.get(category, 0)) for category in ActionCategory),
        )

    console.print(table)
