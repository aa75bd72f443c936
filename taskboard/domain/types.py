"""Domain value objects for the task board.

Immutable value objects for identifiers and column kinds. Identifiers are
validated at construction so malformed input is rejected at the boundary,
before any repository call is made.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Self
from uuid import uuid4

from taskboard.domain.shared.errors import ValidationError

# Letters, digits, '-' and '_', starting with a letter or digit.
# UUIDs generated by ``generate()`` always match.
_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
MAX_ID_LENGTH = 64


class ColumnType(str, Enum):
    """Kind of a board column.

    Determines workflow behavior: moving a task into a ``DONE`` column
    completes it, and ``DONE``/``ARCHIVE``/``SOMEDAY`` columns never
    surface stale tasks.
    """

    INPUT = "INPUT"
    CLARIFY = "CLARIFY"
    CONTEXT = "CONTEXT"
    WAITING = "WAITING"
    SOMEDAY = "SOMEDAY"
    DONE = "DONE"
    ARCHIVE = "ARCHIVE"


@dataclass(frozen=True)
class _Identifier:
    """Shared behavior for string identifiers."""

    value: str

    kind: ClassVar[str] = "Id"

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(f"Invalid {self.kind}: empty value")
        if len(self.value) > MAX_ID_LENGTH or not _ID_PATTERN.match(self.value):
            raise ValidationError(f"Invalid {self.kind}: {self.value!r}")

    @classmethod
    def from_string(cls, raw: str) -> Self:
        """Create an identifier from a raw string.

        Args:
            raw: Identifier text, e.g. "task-1" or a UUID.

        Returns:
            New identifier wrapping the validated value.

        Raises:
            ValidationError: If the value is empty or malformed.
        """
        return cls(value=raw)

    @classmethod
    def generate(cls) -> Self:
        """Create a new random (UUID4) identifier."""
        return cls(value=str(uuid4()))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TaskId(_Identifier):
    """Identifier of a task."""

    kind: ClassVar[str] = "TaskId"


@dataclass(frozen=True)
class BoardId(_Identifier):
    """Identifier of a board."""

    kind: ClassVar[str] = "BoardId"


@dataclass(frozen=True)
class ColumnId(_Identifier):
    """Identifier of a column."""

    kind: ClassVar[str] = "ColumnId"
