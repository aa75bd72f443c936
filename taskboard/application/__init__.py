"""Application service layer for the task board.

This package contains the use cases that orchestrate domain operations.
Each use case receives its collaborators (repositories, event bus) through
its constructor; the CLI acts as the composition root.

Use cases:
    GetStaleTasks - Stale tasks of a board, oldest-moved first
    MarkStale - Set or clear a task's stale flag
    CreateTask / UpdateTask / MoveTask / DeleteTask - Task lifecycle
    CreateBoard / UpdateBoard - Board setup

Example usage:
    >>> from taskboard.application import MarkStale
    >>> use_case = MarkStale(task_repository, event_bus)
    >>> record = await use_case.execute("task-1", is_stale=True)
"""

from taskboard.application.board_service import CreateBoard, UpdateBoard
from taskboard.application.task_service import (
    DEFAULT_THRESHOLD_DAYS,
    EXCLUDED_COLUMN_TYPES,
    CreateTask,
    DeleteTask,
    GetStaleTasks,
    MarkStale,
    MoveTask,
    UpdateTask,
)

__all__ = [
    # Staleness
    "GetStaleTasks",
    "MarkStale",
    "DEFAULT_THRESHOLD_DAYS",
    "EXCLUDED_COLUMN_TYPES",
    # Lifecycle
    "CreateTask",
    "UpdateTask",
    "MoveTask",
    "DeleteTask",
    # Boards
    "CreateBoard",
    "UpdateBoard",
]
