"""Repository implementations for the task board.

All repositories work on a shared ``BoardState`` snapshot held in memory.
When a ``JsonBoardStore`` is supplied, every write is followed by a save
of the whole snapshot to ``board.json``; without one the repositories are
purely in-memory (used by the tests).
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from taskboard.domain.board.models import BoardRecord, ColumnRecord, ProjectRecord
from taskboard.domain.shared.errors import NotFoundError, StorageError
from taskboard.domain.shared.result import Err, is_err
from taskboard.domain.task.models import ColumnInfo, ProjectInfo, TaskRecord
from taskboard.domain.types import BoardId, ColumnId, TaskId
from taskboard.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _restore(mapping: dict, key: str, previous: object) -> None:
    """Put back the value a failed write replaced, or drop the key it added."""
    if previous is None:
        mapping.pop(key, None)
    else:
        mapping[key] = previous


class BoardState(BaseModel):
    """Everything the task board stores, keyed by id."""

    boards: dict[str, BoardRecord] = Field(default_factory=dict)
    columns: dict[str, ColumnRecord] = Field(default_factory=dict)
    projects: dict[str, ProjectRecord] = Field(default_factory=dict)
    tasks: dict[str, TaskRecord] = Field(default_factory=dict)


class JsonBoardStore:
    """Loads and saves a ``BoardState`` as a single JSON document."""

    def __init__(self, path: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the store.

        Args:
            path: Location of the board file.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self.path = path
        self._storage = storage or JsonStorage()

    def load(self) -> BoardState:
        """Read the board file, returning an empty state if it does not exist.

        Raises:
            StorageError: If the file exists but cannot be read or parsed.
        """
        if not self.path.exists():
            return BoardState()

        result = self._storage.load_json(self.path)
        if isinstance(result, Err):
            raise StorageError(result.error)

        try:
            return BoardState.model_validate(result.value)
        except PydanticValidationError as e:
            raise StorageError(f"Invalid board data in {self.path}: {e}") from e

    def save(self, state: BoardState) -> None:
        """Write the state to the board file.

        Raises:
            StorageError: If the file cannot be written.
        """
        result = self._storage.save_json(self.path, state.model_dump(mode="json"))
        if is_err(result):
            raise StorageError(result.error)


class _StateRepository:
    """Shared plumbing: state snapshot and optional store.

    Each write mutates the state and commits without awaiting in between, so
    a write is atomic with respect to other coroutines on the same event
    loop. When the commit fails the mutation is undone and the
    ``StorageError`` propagates.
    """

    def __init__(self, state: BoardState | None = None, store: JsonBoardStore | None = None) -> None:
        self._state = state if state is not None else BoardState()
        self._store = store

    @property
    def state(self) -> BoardState:
        return self._state

    def _commit(self) -> None:
        if self._store is not None:
            self._store.save(self._state)


class InMemoryTaskRepository(_StateRepository):
    """Task repository over a ``BoardState``.

    Concurrent updates of the same task resolve as last write wins.
    """

    def __init__(
        self,
        state: BoardState | None = None,
        store: JsonBoardStore | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(state, store)
        self._clock = clock or _utcnow

    async def find_by_id(self, task_id: TaskId) -> TaskRecord | None:
        record = self._state.tasks.get(task_id.value)
        return record.model_copy() if record is not None else None

    async def find_by_board_id(
        self,
        board_id: BoardId,
        *,
        include_column: bool = False,
        include_project: bool = False,
    ) -> list[TaskRecord]:
        records = [t for t in self._state.tasks.values() if t.board_id == board_id.value]
        records.sort(key=self._board_order)
        return [self._with_relations(t, include_column, include_project) for t in records]

    async def find_stale_tasks(self, threshold_days: int) -> list[TaskRecord]:
        cutoff = self._clock() - timedelta(days=threshold_days)
        return [
            t.model_copy()
            for t in self._state.tasks.values()
            if not t.is_stale and not t.is_done and t.last_moved_at < cutoff
        ]

    async def create(self, record: TaskRecord) -> TaskRecord:
        stored = record.without_relations()
        previous = self._state.tasks.get(stored.id)
        self._state.tasks[stored.id] = stored
        try:
            self._commit()
        except StorageError:
            _restore(self._state.tasks, stored.id, previous)
            raise
        return stored.model_copy()

    async def update(self, task_id: TaskId, record: TaskRecord) -> TaskRecord:
        previous = self._state.tasks.get(task_id.value)
        if previous is None:
            raise NotFoundError(f"Task not found: {task_id}")
        stored = record.without_relations().model_copy(update={"id": task_id.value})
        self._state.tasks[task_id.value] = stored
        try:
            self._commit()
        except StorageError:
            _restore(self._state.tasks, task_id.value, previous)
            raise
        return stored.model_copy()

    async def delete(self, task_id: TaskId) -> None:
        previous = self._state.tasks.pop(task_id.value, None)
        if previous is None:
            raise NotFoundError(f"Task not found: {task_id}")
        try:
            self._commit()
        except StorageError:
            _restore(self._state.tasks, task_id.value, previous)
            raise

    async def count_by_column_id(
        self,
        column_id: ColumnId,
        exclude_task_id: TaskId | None = None,
    ) -> int:
        excluded = exclude_task_id.value if exclude_task_id else None
        return sum(
            1
            for t in self._state.tasks.values()
            if t.column_id == column_id.value and t.id != excluded
        )

    async def get_max_position_in_column(self, column_id: ColumnId) -> int:
        positions = [t.position for t in self._state.tasks.values() if t.column_id == column_id.value]
        return max(positions, default=-1)

    def _board_order(self, record: TaskRecord) -> tuple[int, int]:
        column = self._state.columns.get(record.column_id)
        return (column.position if column else 0, record.position)

    def _with_relations(
        self,
        record: TaskRecord,
        include_column: bool,
        include_project: bool,
    ) -> TaskRecord:
        update: dict[str, object] = {}
        if include_column:
            column = self._state.columns.get(record.column_id)
            if column is not None:
                update["column"] = ColumnInfo(
                    id=column.id,
                    name=column.name,
                    type=column.type,
                    wip_limit=column.wip_limit,
                )
        if include_project and record.project_id:
            project = self._state.projects.get(record.project_id)
            if project is not None:
                update["project"] = ProjectInfo(id=project.id, name=project.name)
        return record.model_copy(update=update)


class InMemoryColumnRepository(_StateRepository):
    """Column lookups over a ``BoardState``."""

    async def find_by_id(self, column_id: ColumnId) -> ColumnInfo | None:
        column = self._state.columns.get(column_id.value)
        if column is None:
            return None
        return ColumnInfo(id=column.id, name=column.name, type=column.type, wip_limit=column.wip_limit)

    async def belongs_to_board(self, column_id: ColumnId, board_id: BoardId) -> bool:
        column = self._state.columns.get(column_id.value)
        return column is not None and column.board_id == board_id.value


class InMemoryBoardRepository(_StateRepository):
    """Boards and their columns over a ``BoardState``."""

    async def save(self, board: BoardRecord, columns: list[ColumnRecord] | None = None) -> BoardRecord:
        """Create or replace a board, optionally together with its columns."""
        previous_board = self._state.boards.get(board.id)
        previous_columns = {c.id: self._state.columns.get(c.id) for c in columns or []}
        self._state.boards[board.id] = board
        for column in columns or []:
            self._state.columns[column.id] = column
        try:
            self._commit()
        except StorageError:
            _restore(self._state.boards, board.id, previous_board)
            for column_id, previous in previous_columns.items():
                _restore(self._state.columns, column_id, previous)
            raise
        logger.debug(f"Saved board {board.id}")
        return board

    async def find_by_id(self, board_id: BoardId) -> BoardRecord | None:
        return self._state.boards.get(board_id.value)

    async def list_all(self) -> list[BoardRecord]:
        return sorted(self._state.boards.values(), key=lambda b: b.created_at)

    async def list_columns(self, board_id: BoardId) -> list[ColumnRecord]:
        columns = [c for c in self._state.columns.values() if c.board_id == board_id.value]
        return sorted(columns, key=lambda c: c.position)
