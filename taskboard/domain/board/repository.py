"""Repository contract for boards and their columns."""

from typing import Protocol, runtime_checkable

from taskboard.domain.board.models import BoardRecord, ColumnRecord
from taskboard.domain.types import BoardId


@runtime_checkable
class BoardRepository(Protocol):
    async def save(self, board: BoardRecord, columns: list[ColumnRecord] | None = None) -> BoardRecord:
        """Create or replace a board, optionally together with its columns."""
        ...

    async def find_by_id(self, board_id: BoardId) -> BoardRecord | None:
        ...

    async def list_all(self) -> list[BoardRecord]:
        ...

    async def list_columns(self, board_id: BoardId) -> list[ColumnRecord]:
        """Columns of a board in display order."""
        ...
