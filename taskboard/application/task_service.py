"""Task application service.

Orchestrates task lifecycle operations by combining the domain entity with
its collaborators. Each use case is a linear sequence of awaited repository
and event-bus calls:

    load record -> hydrate -> mutate -> dehydrate and persist -> publish events

Events are only published after the repository accepted the new state, so
a failed write never produces a notification.
"""

import logging
from typing import Any

from taskboard.domain.shared.entity import AggregateRoot
from taskboard.domain.shared.errors import NotFoundError, ValidationError, WipLimitExceededError
from taskboard.domain.shared.event_bus import EventBus
from taskboard.domain.task import ColumnRepository, Task, TaskDeleted, TaskRecord, TaskRepository
from taskboard.domain.types import BoardId, ColumnId, ColumnType, TaskId

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_DAYS = 7

# Columns whose tasks never surface as stale.
EXCLUDED_COLUMN_TYPES = frozenset({ColumnType.DONE, ColumnType.ARCHIVE, ColumnType.SOMEDAY})


async def flush_events(aggregate: AggregateRoot, event_bus: EventBus) -> None:
    """Publish an aggregate's buffered events as one batch, then clear them."""
    events = aggregate.domain_events
    if events:
        await event_bus.publish_all(list(events))
        aggregate.clear_domain_events()


async def _load_task(repository: TaskRepository, raw_id: str) -> tuple[TaskId, Task]:
    task_id = TaskId.from_string(raw_id)
    record = await repository.find_by_id(task_id)
    if record is None:
        raise NotFoundError(f"Task not found: {raw_id}")
    return task_id, Task.hydrate(record)


class GetStaleTasks:
    """Find the stale tasks on one board, oldest-moved first.

    Combines the repository's system-wide staleness query with the board's
    task list and drops done tasks and tasks in excluded columns. Performs
    no mutation.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        default_threshold_days: int = DEFAULT_THRESHOLD_DAYS,
    ) -> None:
        self._tasks = task_repository
        self._default_threshold_days = default_threshold_days

    async def execute(
        self,
        board_id: str,
        threshold_days: int | None = None,
    ) -> list[TaskRecord]:
        """Return the board's stale tasks sorted by ``last_moved_at``.

        Args:
            board_id: Board to inspect.
            threshold_days: Days without movement before a task counts as
                stale. Defaults to the configured threshold.

        Raises:
            NotFoundError: If the board identifier is malformed.
            ValidationError: If ``threshold_days`` is not positive.
        """
        days = self._default_threshold_days if threshold_days is None else threshold_days
        if days < 1:
            raise ValidationError(f"threshold_days must be positive, got {days}")

        try:
            board = BoardId.from_string(board_id)
        except ValidationError as exc:
            raise NotFoundError(f"Board not found: {board_id}") from exc

        stale_ids = {record.id for record in await self._tasks.find_stale_tasks(days)}
        board_tasks = await self._tasks.find_by_board_id(
            board,
            include_column=True,
            include_project=True,
        )

        result = [
            record
            for record in board_tasks
            if record.id in stale_ids
            and not record.is_done
            and record.column is not None
            and record.column.type not in EXCLUDED_COLUMN_TYPES
        ]
        result.sort(key=lambda record: record.last_moved_at)

        logger.debug(f"Board {board_id}: {len(result)} stale task(s) at {days} day threshold")
        return result


class MarkStale:
    """Set or clear the stale flag on one task and announce it."""

    def __init__(self, task_repository: TaskRepository, event_bus: EventBus) -> None:
        self._tasks = task_repository
        self._events = event_bus

    async def execute(self, task_id: str, is_stale: bool = True) -> TaskRecord:
        """Flag a task and return its persisted record.

        Raises:
            NotFoundError: If the task does not exist.
        """
        tid, task = await _load_task(self._tasks, task_id)

        task.mark_stale(is_stale)

        updated = await self._tasks.update(tid, task.dehydrate())
        await flush_events(task, self._events)

        logger.info(f"Task {task_id} marked {'stale' if is_stale else 'fresh'}")
        return updated


class CreateTask:
    """Add a new task at the end of a column."""

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        event_bus: EventBus,
    ) -> None:
        self._tasks = task_repository
        self._columns = column_repository
        self._events = event_bus

    async def execute(
        self,
        board_id: str,
        column_id: str,
        title: str,
        owner_id: str,
        **fields: Any,
    ) -> TaskRecord:
        """Create the task and return its persisted record.

        Raises:
            NotFoundError: If the column does not exist.
            ValidationError: If the column is on another board or the
                title is invalid.
        """
        board = BoardId.from_string(board_id)
        column = ColumnId.from_string(column_id)

        if await self._columns.find_by_id(column) is None:
            raise NotFoundError(f"Column not found: {column_id}")
        if not await self._columns.belongs_to_board(column, board):
            raise ValidationError(f"Column {column_id} does not belong to board {board_id}")

        position = await self._tasks.get_max_position_in_column(column) + 1
        task = Task.create(board, column, owner_id, title, position, **fields)

        created = await self._tasks.create(task.dehydrate())
        await flush_events(task, self._events)

        logger.info(f"Created task {created.id} in column {column_id}")
        return created


class UpdateTask:
    """Change free-form fields of a task."""

    def __init__(self, task_repository: TaskRepository, event_bus: EventBus) -> None:
        self._tasks = task_repository
        self._events = event_bus

    async def execute(self, task_id: str, **changes: Any) -> TaskRecord:
        """Apply the changes and return the persisted record.

        Raises:
            NotFoundError: If the task does not exist.
            ValidationError: For unknown fields or invalid values.
        """
        tid, task = await _load_task(self._tasks, task_id)

        task.update(**changes)

        updated = await self._tasks.update(tid, task.dehydrate())
        await flush_events(task, self._events)
        return updated


class MoveTask:
    """Move a task to another column, enforcing WIP limits."""

    def __init__(
        self,
        task_repository: TaskRepository,
        column_repository: ColumnRepository,
        event_bus: EventBus,
    ) -> None:
        self._tasks = task_repository
        self._columns = column_repository
        self._events = event_bus

    async def execute(
        self,
        task_id: str,
        column_id: str,
        position: int | None = None,
        force_wip_override: bool = False,
    ) -> TaskRecord:
        """Move the task and return its persisted record.

        Moving within the same column only changes the position and
        publishes nothing.

        Raises:
            NotFoundError: If the task or target column does not exist.
            ValidationError: If the column is on another board or the
                position is negative.
            WipLimitExceededError: If the target column is full and no
                override was requested.
        """
        tid, task = await _load_task(self._tasks, task_id)
        target = ColumnId.from_string(column_id)

        if task.column_id == target:
            if position is None or position == task.position:
                return task.dehydrate()
            task.reposition(position)
            return await self._tasks.update(tid, task.dehydrate())

        column = await self._columns.find_by_id(target)
        if column is None:
            raise NotFoundError(f"Target column not found: {column_id}")
        if not await self._columns.belongs_to_board(target, task.board_id):
            raise ValidationError("Cannot move task to a column on a different board")

        if column.wip_limit is not None:
            current = await self._tasks.count_by_column_id(target, exclude_task_id=tid)
            if current >= column.wip_limit and not force_wip_override:
                raise WipLimitExceededError(column.name, current, column.wip_limit)

        if position is None:
            position = await self._tasks.get_max_position_in_column(target) + 1

        task.move_to_column(target, position, column.type, wip_override=force_wip_override)

        updated = await self._tasks.update(tid, task.dehydrate())
        await flush_events(task, self._events)

        logger.info(f"Moved task {task_id} to column {column.name}")
        return updated


class DeleteTask:
    """Remove a task from its board."""

    def __init__(self, task_repository: TaskRepository, event_bus: EventBus) -> None:
        self._tasks = task_repository
        self._events = event_bus

    async def execute(self, task_id: str) -> None:
        """Delete the task, then publish ``TaskDeleted``.

        Raises:
            NotFoundError: If the task does not exist.
        """
        tid = TaskId.from_string(task_id)
        record = await self._tasks.find_by_id(tid)
        if record is None:
            raise NotFoundError(f"Task not found: {task_id}")

        await self._tasks.delete(tid)
        await self._events.publish_all(
            [TaskDeleted(aggregate_id=record.id, task_id=record.id, board_id=record.board_id)]
        )
        logger.info(f"Deleted task {task_id}")
