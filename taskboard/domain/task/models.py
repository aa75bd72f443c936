"""Task persistence models.

``TaskRecord`` is the persisted representation of a task: what the
repository stores and returns. Uses Pydantic for serialization
compatibility with the JSON store. The behavior lives in
``taskboard.domain.task.entity.Task``, which is hydrated from and
dehydrated back to a record.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from taskboard.domain.types import ColumnType


def _now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Treat a timestamp without a timezone as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ColumnInfo(BaseModel):
    """Column context attached to a task record on request."""

    id: str
    name: str
    type: ColumnType
    wip_limit: int | None = None


class ProjectInfo(BaseModel):
    """Project context attached to a task record on request."""

    id: str
    name: str


class TaskRecord(BaseModel):
    """A task as stored by the repository.

    Relation context (``column``, ``project``) is only filled when the
    repository is asked to include it; it is not part of the task entity.
    """

    id: str
    board_id: str
    column_id: str
    project_id: str | None = None
    owner_id: str = ""
    title: str
    description: str | None = None
    context: str | None = None
    waiting_for: str | None = None
    due_at: datetime | None = None
    priority: str | None = None
    duration: str | None = None
    needs_breakdown: bool = False
    metadata: dict[str, Any] | None = None
    is_done: bool = False
    position: int = 0
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    completed_at: datetime | None = None
    last_moved_at: datetime = Field(default_factory=_now)
    is_stale: bool = False

    column: ColumnInfo | None = None
    project: ProjectInfo | None = None

    @field_validator("due_at", "created_at", "updated_at", "completed_at", "last_moved_at")
    @classmethod
    def validate_timestamps(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)

    def without_relations(self) -> "TaskRecord":
        """Return a copy with the relation context stripped."""
        return self.model_copy(update={"column": None, "project": None})
