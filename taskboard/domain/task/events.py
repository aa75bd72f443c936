"""Task domain events.

Domain events represent significant occurrences within the task domain.
They are raised by ``Task`` mutation methods, buffered on the entity and
published by the use case once the change has been persisted.

All events are pure data structures - no I/O, no side effects.
"""

from dataclasses import dataclass
from typing import Any

from taskboard.domain.shared.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class TaskCreated(DomainEvent):
    """Event raised when a new task is created."""

    task_id: str
    board_id: str
    column_id: str
    title: str
    owner_id: str


@dataclass(frozen=True, kw_only=True)
class TaskMoved(DomainEvent):
    """Event raised when a task is moved to a different column."""

    task_id: str
    board_id: str
    from_column_id: str | None
    to_column_id: str
    position: int
    wip_override: bool = False


@dataclass(frozen=True, kw_only=True)
class TaskUpdated(DomainEvent):
    """Event raised when task fields change.

    ``changes`` holds only the fields that actually changed, as
    ``(field, new_value)`` pairs.
    """

    task_id: str
    board_id: str
    changes: tuple[tuple[str, Any], ...] = ()

    def changes_dict(self) -> dict[str, Any]:
        """Return a mutable dict copy of the changed fields."""
        return dict(self.changes)


@dataclass(frozen=True, kw_only=True)
class TaskStale(DomainEvent):
    """Event raised when a task's stale flag is set or cleared."""

    task_id: str
    board_id: str
    is_stale: bool


@dataclass(frozen=True, kw_only=True)
class TaskDeleted(DomainEvent):
    """Event raised after a task has been removed from its board."""

    task_id: str
    board_id: str
