"""Task management CLI commands.

Commands for the task lifecycle: adding, moving, editing and deleting
tasks on the current board.
"""

from typing import Any, Optional

import typer

from taskboard.application import CreateTask, DeleteTask, MoveTask, UpdateTask
from taskboard.domain.shared.errors import NotFoundError
from taskboard.domain.types import TaskId
from taskboard.interfaces.cli.common import (
    board_option,
    open_services,
    print_success,
    print_warning,
    resolve_board_id,
    resolve_column,
    run,
)

app = typer.Typer(help="Task management commands")


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title"),
    column: str = typer.Option("Input", "--column", "-c", help="Column name or ID"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Task description"),
    board: Optional[str] = board_option,
) -> None:
    """Add a task at the end of a column."""
    board_id = resolve_board_id(board)

    async def _add() -> None:
        services = open_services()
        target = await resolve_column(services, board_id, column)
        record = await CreateTask(services.tasks, services.columns, services.bus).execute(
            board_id,
            target.id,
            title,
            services.settings.owner_id,
            description=description,
        )
        print_success(f"Added task {record.id} to {target.name}")

    run(_add())


@app.command("move")
def move(
    task_id: str = typer.Argument(..., help="Task ID"),
    column: str = typer.Argument(..., help="Target column name or ID"),
    position: Optional[int] = typer.Option(None, "--position", help="Position within the column"),
    force: bool = typer.Option(False, "--force", "-f", help="Ignore the column's WIP limit"),
) -> None:
    """Move a task to another column."""

    async def _move() -> None:
        services = open_services()
        record = await services.tasks.find_by_id(TaskId.from_string(task_id))
        if record is None:
            raise NotFoundError(f"Task not found: {task_id}")

        target = await resolve_column(services, record.board_id, column)
        moved = await MoveTask(services.tasks, services.columns, services.bus).execute(
            task_id, target.id, position=position, force_wip_override=force
        )
        if force and target.wip_limit is not None:
            print_warning(f"WIP limit of {target.name} overridden")
        status = " (done)" if moved.is_done else ""
        print_success(f"Moved task {task_id} to {target.name}{status}")

    run(_move())


@app.command("update")
def update(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    context: Optional[str] = typer.Option(None, "--context", help="Context (e.g. @home)"),
    priority: Optional[str] = typer.Option(None, "--priority", help="Priority"),
    waiting_for: Optional[str] = typer.Option(None, "--waiting-for", help="Who the task waits on"),
) -> None:
    """Change a task's fields."""
    changes: dict[str, Any] = {
        name: value
        for name, value in {
            "title": title,
            "description": description,
            "context": context,
            "priority": priority,
            "waiting_for": waiting_for,
        }.items()
        if value is not None
    }
    if not changes:
        print_warning("Nothing to update")
        return

    async def _update() -> None:
        services = open_services()
        await UpdateTask(services.tasks, services.bus).execute(task_id, **changes)
        print_success(f"Updated task {task_id}: {', '.join(sorted(changes))}")

    run(_update())


@app.command("delete")
def delete(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Delete a task."""

    async def _delete() -> None:
        services = open_services()
        await DeleteTask(services.tasks, services.bus).execute(task_id)
        print_success(f"Deleted task {task_id}")

    run(_delete())
