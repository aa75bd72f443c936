"""CLI interface for taskboard using Typer.

Usage:
    taskboard board create "Home"     # Create a board with default columns
    taskboard task add "Call Bob"     # Add a task to the Input column
    taskboard stale list              # Show tasks that have not moved lately
    taskboard stale scan              # Flag all of them as stale

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (board, task, stale)
- common.py: Service wiring and output helpers shared by commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from taskboard import __version__
from taskboard.config import get_settings
from taskboard.interfaces.cli.commands import board, stale, task

app = typer.Typer(
    name="taskboard",
    help="Personal task board with stale-task detection",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"taskboard version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
) -> None:
    """taskboard - organize tasks into boards and catch the ones that stall."""
    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


app.add_typer(board.app, name="board")
app.add_typer(task.app, name="task")
app.add_typer(stale.app, name="stale")


__all__ = ["app"]
