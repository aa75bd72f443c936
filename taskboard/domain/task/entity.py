"""Task aggregate root.

A ``Task`` is created transiently for one operation: hydrated from a
``TaskRecord``, mutated through its methods (each of which records a
domain event), dehydrated back to a record for persistence and then
discarded. The repository stays the source of truth between operations.
"""

from datetime import UTC, datetime
from typing import Any

from taskboard.domain.shared.entity import AggregateRoot
from taskboard.domain.shared.errors import ValidationError
from taskboard.domain.shared.events import freeze_changes
from taskboard.domain.task.events import TaskCreated, TaskMoved, TaskStale, TaskUpdated
from taskboard.domain.task.models import TaskRecord
from taskboard.domain.types import BoardId, ColumnId, ColumnType, TaskId

MAX_TITLE_LENGTH = 500

# Fields ``Task.update`` may change.
UPDATABLE_FIELDS = frozenset({
    "title",
    "description",
    "context",
    "waiting_for",
    "due_at",
    "priority",
    "duration",
    "needs_breakdown",
    "metadata",
    "project_id",
    "column_id",
})


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _validate_title(title: str) -> str:
    if not title or not title.strip():
        raise ValidationError("Task title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Task title cannot exceed {MAX_TITLE_LENGTH} characters")
    return title.strip()


def _validate_position(position: int) -> int:
    if position < 0:
        raise ValidationError(f"Position cannot be negative: {position}")
    return position


class Task(AggregateRoot):
    """A task on a board, with staleness tracking.

    ``is_stale`` and ``is_done`` are independent flags: completing a task
    does not clear a previously set stale flag.
    """

    def __init__(
        self,
        task_id: TaskId,
        board_id: BoardId,
        column_id: ColumnId,
        title: str,
        *,
        owner_id: str = "",
        position: int = 0,
        project_id: str | None = None,
        description: str | None = None,
        context: str | None = None,
        waiting_for: str | None = None,
        due_at: datetime | None = None,
        priority: str | None = None,
        duration: str | None = None,
        needs_breakdown: bool = False,
        metadata: dict[str, Any] | None = None,
        is_done: bool = False,
        is_stale: bool = False,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        completed_at: datetime | None = None,
        last_moved_at: datetime | None = None,
    ) -> None:
        super().__init__(task_id.value)
        now = _utcnow()
        self._board_id = board_id
        self._column_id = column_id
        self._title = _validate_title(title)
        self._owner_id = owner_id
        self._position = _validate_position(position)
        self._project_id = project_id
        self._description = description
        self._context = context
        self._waiting_for = waiting_for
        self._due_at = due_at
        self._priority = priority
        self._duration = duration
        self._needs_breakdown = needs_breakdown
        self._metadata = metadata
        self._is_done = is_done
        self._is_stale = is_stale
        self._created_at = created_at or now
        self._updated_at = updated_at or now
        self._completed_at = completed_at
        self._last_moved_at = last_moved_at or now

    # -- Factories -----------------------------------------------------------

    @classmethod
    def create(
        cls,
        board_id: BoardId,
        column_id: ColumnId,
        owner_id: str,
        title: str,
        position: int = 0,
        **fields: Any,
    ) -> "Task":
        """Create a brand new task with a generated id.

        Records a ``TaskCreated`` event.

        Args:
            board_id: Board the task belongs to.
            column_id: Column the task starts in.
            owner_id: User owning the task.
            title: Task title (non-blank, at most 500 characters).
            position: Position within the column.
            **fields: Optional free-form fields (description, priority, ...).
        """
        task = cls(
            TaskId.generate(),
            board_id,
            column_id,
            title,
            owner_id=owner_id,
            position=position,
            **fields,
        )
        task._record(
            TaskCreated(
                aggregate_id=task.id,
                task_id=task.id,
                board_id=board_id.value,
                column_id=column_id.value,
                title=task.title,
                owner_id=owner_id,
            )
        )
        return task

    @classmethod
    def hydrate(cls, record: TaskRecord) -> "Task":
        """Reconstruct a task from its persisted record.

        The event buffer starts empty. Relation context on the record
        (column, project) is ignored.
        """
        return cls(
            TaskId.from_string(record.id),
            BoardId.from_string(record.board_id),
            ColumnId.from_string(record.column_id),
            record.title,
            owner_id=record.owner_id,
            position=record.position,
            project_id=record.project_id,
            description=record.description,
            context=record.context,
            waiting_for=record.waiting_for,
            due_at=record.due_at,
            priority=record.priority,
            duration=record.duration,
            needs_breakdown=record.needs_breakdown,
            metadata=record.metadata,
            is_done=record.is_done,
            is_stale=record.is_stale,
            created_at=record.created_at,
            updated_at=record.updated_at,
            completed_at=record.completed_at,
            last_moved_at=record.last_moved_at,
        )

    def dehydrate(self) -> TaskRecord:
        """Convert the task to its persisted record."""
        return TaskRecord(
            id=self.id,
            board_id=self._board_id.value,
            column_id=self._column_id.value,
            project_id=self._project_id,
            owner_id=self._owner_id,
            title=self._title,
            description=self._description,
            context=self._context,
            waiting_for=self._waiting_for,
            due_at=self._due_at,
            priority=self._priority,
            duration=self._duration,
            needs_breakdown=self._needs_breakdown,
            metadata=self._metadata,
            is_done=self._is_done,
            position=self._position,
            created_at=self._created_at,
            updated_at=self._updated_at,
            completed_at=self._completed_at,
            last_moved_at=self._last_moved_at,
            is_stale=self._is_stale,
        )

    # -- Mutations -----------------------------------------------------------

    def mark_stale(self, is_stale: bool) -> None:
        """Set or clear the stale flag.

        A ``TaskStale`` event is recorded on every call, including when the
        flag already has the requested value. ``last_moved_at`` is left
        untouched.
        """
        self._is_stale = is_stale
        self._updated_at = _utcnow()
        self._record(
            TaskStale(
                aggregate_id=self.id,
                task_id=self.id,
                board_id=self._board_id.value,
                is_stale=is_stale,
            )
        )

    def move_to_column(
        self,
        column_id: ColumnId,
        position: int,
        column_type: ColumnType | str,
        wip_override: bool = False,
    ) -> None:
        """Move the task to another column.

        Moving into a ``DONE`` column completes the task.
        """
        position = _validate_position(position)
        from_column = self._column_id
        now = _utcnow()

        self._column_id = column_id
        self._position = position
        self._last_moved_at = now
        self._updated_at = now

        if ColumnType(column_type) is ColumnType.DONE:
            self._is_done = True
            self._completed_at = now

        self._record(
            TaskMoved(
                aggregate_id=self.id,
                task_id=self.id,
                board_id=self._board_id.value,
                from_column_id=from_column.value,
                to_column_id=column_id.value,
                position=position,
                wip_override=wip_override,
            )
        )

    def reposition(self, position: int) -> None:
        """Change the position within the current column; records no event."""
        self._position = _validate_position(position)
        self._updated_at = _utcnow()

    def update(self, **changes: Any) -> dict[str, Any]:
        """Apply free-form field changes.

        Only fields whose value actually differs are applied; a single
        ``TaskUpdated`` event lists them. Nothing is recorded when no field
        changed.

        Returns:
            The fields that changed, with their new values.

        Raises:
            ValidationError: For unknown fields or an invalid title/column.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        applied: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "title":
                value = _validate_title(value)
            if name == "column_id":
                new_column = ColumnId.from_string(value)
                if new_column != self._column_id:
                    self._column_id = new_column
                    applied[name] = value
                continue
            if getattr(self, f"_{name}") != value:
                setattr(self, f"_{name}", value)
                applied[name] = value

        if applied:
            self._updated_at = _utcnow()
            self._record(
                TaskUpdated(
                    aggregate_id=self.id,
                    task_id=self.id,
                    board_id=self._board_id.value,
                    changes=freeze_changes(applied),
                )
            )
        return applied

    # -- Accessors -----------------------------------------------------------

    @property
    def board_id(self) -> BoardId:
        return self._board_id

    @property
    def column_id(self) -> ColumnId:
        return self._column_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def project_id(self) -> str | None:
        return self._project_id

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_done(self) -> bool:
        return self._is_done

    @property
    def is_stale(self) -> bool:
        return self._is_stale

    @property
    def last_moved_at(self) -> datetime:
        return self._last_moved_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def completed_at(self) -> datetime | None:
        return self._completed_at
