"""Board domain models.

Persisted shapes for boards, their columns and the projects tasks can be
grouped under. These are pure data structures with no I/O or side effects.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from taskboard.domain.task.models import as_utc
from taskboard.domain.types import ColumnType


def _now() -> datetime:
    return datetime.now(UTC)


class BoardRecord(BaseModel):
    """A board as stored by the repository."""

    id: str
    owner_id: str = ""
    name: str
    description: str | None = None
    config: dict[str, Any] | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v: datetime) -> datetime:
        return as_utc(v)


class ColumnRecord(BaseModel):
    """A column on a board.

    ``wip_limit`` caps how many tasks the column may hold; ``None`` means
    unlimited.
    """

    id: str
    board_id: str
    name: str
    type: ColumnType = ColumnType.INPUT
    wip_limit: int | None = None
    position: int = 0


class ProjectRecord(BaseModel):
    """A project that tasks can optionally belong to."""

    id: str
    name: str


# Columns created for a new board, in display order.
DEFAULT_COLUMNS: tuple[tuple[str, ColumnType], ...] = (
    ("Input", ColumnType.INPUT),
    ("Clarify", ColumnType.CLARIFY),
    ("Next", ColumnType.CONTEXT),
    ("Waiting", ColumnType.WAITING),
    ("Someday", ColumnType.SOMEDAY),
    ("Done", ColumnType.DONE),
    ("Archive", ColumnType.ARCHIVE),
)
