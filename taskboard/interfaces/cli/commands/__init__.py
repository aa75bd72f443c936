"""CLI command groups for taskboard.

Command groups:
- board: Board management (create, list, show, rename, use)
- task: Task lifecycle (add, move, update, delete)
- stale: Staleness detection (list, mark, scan)

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from taskboard.interfaces.cli.commands import board, stale, task

__all__ = ["board", "task", "stale"]
