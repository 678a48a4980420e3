"""Script commands for checking and inspecting Duke Script files."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from src.cli.display import (
    display_bundle_table,
    display_error,
    display_info,
    display_script,
    display_success,
)
from src.config import get_settings
from src.duke_script import ScriptBundle, ScriptParseError, bundle_to_dict, load_scripts

app = typer.Typer(help="Check and inspect Duke Script files")
logger = logging.getLogger(__name__)

ScriptFileArgument = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="Script file, e.g. TEXT.MNI",
)


def _load_bundle(path: Path) -> ScriptBundle:
    """Read and parse a script file, exiting with code 1 on errors."""
    settings = get_settings()
    logger.debug(f"Reading {path} as {settings.script_encoding}")
    try:
        source = path.read_bytes().decode(settings.script_encoding)
    except (UnicodeDecodeError, LookupError) as e:
        display_error(f"{path}: cannot decode as {settings.script_encoding}: {e}")
        raise typer.Exit(1)

    try:
        return load_scripts(source)
    except ScriptParseError as e:
        display_error(f"{path}: {e}")
        raise typer.Exit(1)


@app.command()
def check(path: Path = ScriptFileArgument) -> None:
    """Parse a script file and report whether it is valid."""
    bundle = _load_bundle(path)
    display_success(f"{path}: {len(bundle)} scripts OK")


@app.command("list")
def list_scripts(path: Path = ScriptFileArgument) -> None:
    """List all scripts in a file with their action counts."""
    bundle = _load_bundle(path)
    display_bundle_table(bundle)


@app.command()
def show(
    path: Path = ScriptFileArgument,
    name: str = typer.Argument(..., help="Name of the script to show"),
) -> None:
    """Show the actions of one script."""
    bundle = _load_bundle(path)
    if name not in bundle:
        display_error(f"No script named '{name}' in {path}")
        display_info(f"Available: {', '.join(sorted(bundle))}")
        raise typer.Exit(1)
    display_script(name, bundle[name])


@app.command()
def dump(
    path: Path = ScriptFileArgument,
    script_name: Optional[str] = typer.Option(
        None, "--script", "-s", help="Only dump this script"
    ),
    indent: int = typer.Option(2, "--indent", help="JSON indentation"),
) -> None:
    """Dump parsed scripts as JSON."""
    bundle = _load_bundle(path)
    if script_name is not None:
        if script_name not in bundle:
            display_error(f"No script named '{script_name}' in {path}")
            raise typer.Exit(1)
        bundle = {script_name: bundle[script_name]}

    typer.echo(json.dumps(bundle_to_dict(bundle), indent=indent))
