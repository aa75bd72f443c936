"""Staleness CLI commands.

Tasks that have not moved for the threshold (``stale_threshold_days`` in
the settings, 7 by default) show up in ``stale list``; ``stale scan``
flags all of them at once.
"""

from typing import Optional

import typer

from taskboard.application import GetStaleTasks, MarkStale
from taskboard.interfaces.cli.common import (
    board_option,
    format_task_line,
    open_services,
    print_info,
    print_success,
    resolve_board_id,
    run,
)

app = typer.Typer(help="Stale task commands")

days_option = typer.Option(
    None,
    "--days",
    "-d",
    help="Days without movement before a task is stale (default from settings)",
)


@app.command("list")
def list_stale(
    days: Optional[int] = days_option,
    board: Optional[str] = board_option,
) -> None:
    """List the board's stale tasks, oldest first."""
    board_id = resolve_board_id(board)

    async def _list() -> None:
        services = open_services()
        use_case = GetStaleTasks(services.tasks, services.settings.stale_threshold_days)
        tasks = await use_case.execute(board_id, days)
        if not tasks:
            print_info("No stale tasks")
            return
        for task in tasks:
            typer.echo(format_task_line(task))

    run(_list())


@app.command("mark")
def mark(
    task_id: str = typer.Argument(..., help="Task ID"),
    clear: bool = typer.Option(False, "--clear", help="Clear the stale flag instead"),
) -> None:
    """Flag a task as stale (or clear the flag)."""

    async def _mark() -> None:
        services = open_services()
        await MarkStale(services.tasks, services.bus).execute(task_id, is_stale=not clear)
        print_success(f"Task {task_id} {'is no longer' if clear else 'marked'} stale")

    run(_mark())


@app.command("scan")
def scan(
    days: Optional[int] = days_option,
    board: Optional[str] = board_option,
) -> None:
    """Flag every stale task on the board."""
    board_id = resolve_board_id(board)

    async def _scan() -> None:
        services = open_services()
        stale = await GetStaleTasks(services.tasks, services.settings.stale_threshold_days).execute(
            board_id, days
        )
        mark_stale = MarkStale(services.tasks, services.bus)
        for task in stale:
            await mark_stale.execute(task.id)

        for message in services.notifier.notifications:
            typer.echo(message)
        print_success(f"Flagged {len(stale)} stale task(s)")

    run(_scan())
