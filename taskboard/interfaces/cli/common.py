"""Shared utilities for taskboard CLI commands.

This module provides common utilities used across CLI commands:
- Wiring of repositories, event bus and subscribers (``open_services``)
- Board and column resolution
- Running a use case and turning domain errors into exit codes
- Formatted output helpers (error, success, info)
"""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any, TypeVar

import typer

from taskboard.config import Settings, get_last_board_id, get_settings
from taskboard.domain.board import ColumnRecord
from taskboard.domain.shared.errors import NotFoundError, StorageError, TaskboardError, ValidationError
from taskboard.domain.task import TaskRecord
from taskboard.domain.types import BoardId
from taskboard.infrastructure.events import ActivityLog, InMemoryEventBus, StaleTaskNotifier
from taskboard.infrastructure.storage import (
    InMemoryBoardRepository,
    InMemoryColumnRepository,
    InMemoryTaskRepository,
    JsonBoardStore,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Reusable board option for CLI commands
# Usage: def my_command(board: Optional[str] = board_option) -> None:
board_option = typer.Option(
    None,
    "--board",
    "-b",
    help="Board ID (or set TASKBOARD_BOARD env var)",
    envvar="TASKBOARD_BOARD",
)


@dataclass
class Services:
    """Collaborators for one CLI invocation, all sharing one board file."""

    settings: Settings
    tasks: InMemoryTaskRepository
    columns: InMemoryColumnRepository
    boards: InMemoryBoardRepository
    bus: InMemoryEventBus
    activity: ActivityLog
    notifier: StaleTaskNotifier = field(default_factory=StaleTaskNotifier)


def open_services(settings: Settings | None = None) -> Services:
    """Load the board file and wire repositories, bus and subscribers.

    Raises:
        StorageError: If the board file exists but cannot be read.
    """
    settings = settings or get_settings()
    store = JsonBoardStore(settings.board_file)
    state = store.load()

    bus = InMemoryEventBus()
    services = Services(
        settings=settings,
        tasks=InMemoryTaskRepository(state, store),
        columns=InMemoryColumnRepository(state, store),
        boards=InMemoryBoardRepository(state, store),
        bus=bus,
        activity=ActivityLog(settings.activity_file),
    )
    services.activity.register(bus)
    services.notifier.register(bus)
    return services


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, mapping domain errors to a red message and exit 1."""
    try:
        return asyncio.run(coro)
    except StorageError as e:
        print_error(f"Storage failure: {e}")
        raise typer.Exit(1)
    except TaskboardError as e:
        # NotFoundError, ValidationError and WipLimitExceededError
        print_error(str(e))
        raise typer.Exit(1)


def resolve_board_id(explicit_board: str | None = None) -> str:
    """Get the board ID, exiting with a hint if none can be determined.

    Resolution order:
    1. Explicit board parameter (from -b/--board option or TASKBOARD_BOARD)
    2. The last board used
    """
    if explicit_board:
        return explicit_board

    last = get_last_board_id()
    if last:
        return last

    print_error("No board specified.")
    typer.echo("")
    typer.echo("Specify a board using one of:")
    typer.echo("  1. Use -b/--board option: taskboard stale list -b <board-id>")
    typer.echo("  2. Set TASKBOARD_BOARD env var: export TASKBOARD_BOARD=<board-id>")
    typer.echo("  3. Create one: taskboard board create \"My board\"")
    raise typer.Exit(1)


async def resolve_column(services: Services, board_id: str, ref: str) -> ColumnRecord:
    """Find a board column by id or (case-insensitive) name.

    Raises:
        NotFoundError: If no column of the board matches.
    """
    try:
        bid = BoardId.from_string(board_id)
    except ValidationError as exc:
        raise NotFoundError(f"Board not found: {board_id}") from exc

    columns = await services.boards.list_columns(bid)
    for column in columns:
        if column.id == ref or column.name.lower() == ref.lower():
            return column
    raise NotFoundError(f"Column not found: {ref}")


def print_error(msg: str) -> None:
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def format_task_line(task: TaskRecord) -> str:
    """One-line summary of a task: id, flags, title and column."""
    flags = ""
    if task.is_done:
        flags += " [done]"
    if task.is_stale:
        flags += " [stale]"
    column = f" ({task.column.name})" if task.column else ""
    moved = task.last_moved_at.strftime("%Y-%m-%d")
    return f"{task.id}  {task.title}{column}{flags}  moved {moved}"


__all__ = [
    "Services",
    "open_services",
    "run",
    "board_option",
    "resolve_board_id",
    "resolve_column",
    "print_error",
    "print_success",
    "print_info",
    "print_warning",
    "print_separator",
    "print_header",
    "format_task_line",
]
