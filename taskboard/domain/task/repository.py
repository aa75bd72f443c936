"""Repository contracts the task use cases depend on.

Concrete implementations live in ``taskboard.infrastructure.storage``.
Every method is a coroutine; these calls (together with the event bus)
are the only suspension points of a use case.
"""

from typing import Protocol, runtime_checkable

from taskboard.domain.task.models import ColumnInfo, TaskRecord
from taskboard.domain.types import BoardId, ColumnId, TaskId


@runtime_checkable
class TaskRepository(Protocol):
    """Lookup, persistence and filtering of task records."""

    async def find_by_id(self, task_id: TaskId) -> TaskRecord | None:
        """Return the task, or ``None`` if it does not exist."""
        ...

    async def find_by_board_id(
        self,
        board_id: BoardId,
        *,
        include_column: bool = False,
        include_project: bool = False,
    ) -> list[TaskRecord]:
        """Return every task on a board, optionally with relation context."""
        ...

    async def find_stale_tasks(self, threshold_days: int) -> list[TaskRecord]:
        """Return tasks across all boards that have not moved recently.

        Only tasks that are neither done nor already flagged stale, and whose
        ``last_moved_at`` is older than ``threshold_days``, are returned.
        """
        ...

    async def create(self, record: TaskRecord) -> TaskRecord:
        """Store a new task and return the stored record."""
        ...

    async def update(self, task_id: TaskId, record: TaskRecord) -> TaskRecord:
        """Replace a task's stored state and return what was stored."""
        ...

    async def delete(self, task_id: TaskId) -> None:
        """Remove a task."""
        ...

    async def count_by_column_id(
        self,
        column_id: ColumnId,
        exclude_task_id: TaskId | None = None,
    ) -> int:
        """Count the tasks in a column."""
        ...

    async def get_max_position_in_column(self, column_id: ColumnId) -> int:
        """Highest task position in a column, or -1 when it is empty."""
        ...


@runtime_checkable
class ColumnRepository(Protocol):
    """Read access to board columns."""

    async def find_by_id(self, column_id: ColumnId) -> ColumnInfo | None:
        ...

    async def belongs_to_board(self, column_id: ColumnId, board_id: BoardId) -> bool:
        ...
