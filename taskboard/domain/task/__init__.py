"""Task domain - task lifecycle and staleness.

This module provides the domain layer for task management, following
Domain-Driven Design principles. All exports are pure (no I/O, no side
effects); repository contracts are protocols implemented elsewhere.

Key Types:
    Task - Aggregate root with event buffer
    TaskRecord - Persisted representation of a task
    ColumnInfo / ProjectInfo - Relation context on a record

Repository Contracts:
    TaskRepository - Task lookup, persistence and filtering
    ColumnRepository - Column lookup

Domain Events:
    TaskCreated - New task added to a board
    TaskMoved - Task moved between columns
    TaskUpdated - Task fields changed
    TaskStale - Stale flag set or cleared
    TaskDeleted - Task removed
"""

from .entity import Task
from .events import TaskCreated, TaskDeleted, TaskMoved, TaskStale, TaskUpdated
from .models import ColumnInfo, ProjectInfo, TaskRecord
from .repository import ColumnRepository, TaskRepository

__all__ = [
    # Models
    "Task",
    "TaskRecord",
    "ColumnInfo",
    "ProjectInfo",
    # Repositories
    "TaskRepository",
    "ColumnRepository",
    # Events
    "TaskCreated",
    "TaskMoved",
    "TaskUpdated",
    "TaskStale",
    "TaskDeleted",
]
