"""Main CLI application for Duke Script tooling."""

import logging

import typer
from rich.logging import RichHandler

from src.cli.commands import script
from src.config import get_settings

# Create main app
app = typer.Typer(
    name="duke-script",
    help="Parse and inspect Duke Script cutscene and menu files",
    add_completion=False,
)

# Add sub-commands
app.add_typer(script.app, name="script")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Duke Script tools.

    Use 'duke-script script check FILE' to validate a script file.
    """
    level = "DEBUG" if verbose else get_settings().effective_log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
