"""Board management CLI commands."""

from typing import Optional

import typer

from taskboard.application import CreateBoard, UpdateBoard
from taskboard.config import save_last_board_id
from taskboard.domain.shared.errors import NotFoundError, ValidationError
from taskboard.domain.types import BoardId
from taskboard.interfaces.cli.common import (
    board_option,
    format_task_line,
    open_services,
    print_header,
    print_info,
    print_success,
    resolve_board_id,
    run,
)

app = typer.Typer(help="Board management commands")


@app.command("create")
def create(
    name: str = typer.Argument(..., help="Board name"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Board description"),
) -> None:
    """Create a board with the default columns and make it current."""

    async def _create() -> None:
        services = open_services()
        record, columns = await CreateBoard(services.boards).execute(
            name, services.settings.owner_id, description
        )
        save_last_board_id(record.id)
        print_success(f"Created board {record.name}")
        typer.echo(f"  id: {record.id}")
        typer.echo(f"  columns: {', '.join(c.name for c in columns)}")

    run(_create())


@app.command("list")
def list_boards() -> None:
    """List all boards."""

    async def _list() -> None:
        services = open_services()
        boards = await services.boards.list_all()
        if not boards:
            print_info("No boards yet. Create one with: taskboard board create NAME")
            return
        for board in boards:
            typer.echo(f"{board.id}  {board.name}")

    run(_list())


@app.command("show")
def show(board: Optional[str] = board_option) -> None:
    """Show a board's columns and tasks."""
    board_id = resolve_board_id(board)

    async def _show() -> None:
        services = open_services()
        try:
            bid = BoardId.from_string(board_id)
        except ValidationError as exc:
            raise NotFoundError(f"Board not found: {board_id}") from exc

        record = await services.boards.find_by_id(bid)
        if record is None:
            raise NotFoundError(f"Board not found: {board_id}")

        tasks = await services.tasks.find_by_board_id(bid, include_column=True)
        print_header(record.name)
        for column in await services.boards.list_columns(bid):
            limit = f" (WIP {column.wip_limit})" if column.wip_limit is not None else ""
            typer.echo(f"\n## {column.name}{limit}")
            for task in tasks:
                if task.column_id == column.id:
                    typer.echo(f"- {format_task_line(task)}")

    run(_show())


@app.command("rename")
def rename(
    name: str = typer.Argument(..., help="New board name"),
    board: Optional[str] = board_option,
) -> None:
    """Rename a board."""
    board_id = resolve_board_id(board)

    async def _rename() -> None:
        services = open_services()
        record = await UpdateBoard(services.boards, services.bus).execute(board_id, name=name)
        print_success(f"Board renamed to {record.name}")

    run(_rename())


@app.command("use")
def use(board_id: str = typer.Argument(..., help="Board ID")) -> None:
    """Make a board the current one for later commands."""

    async def _use() -> None:
        services = open_services()
        try:
            bid = BoardId.from_string(board_id)
        except ValidationError as exc:
            raise NotFoundError(f"Board not found: {board_id}") from exc
        if await services.boards.find_by_id(bid) is None:
            raise NotFoundError(f"Board not found: {board_id}")
        save_last_board_id(board_id)
        print_success(f"Using board {board_id}")

    run(_use())
