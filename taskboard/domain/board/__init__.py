"""Board domain - boards, columns and projects."""

from .entity import Board
from .events import BoardUpdated
from .models import DEFAULT_COLUMNS, BoardRecord, ColumnRecord, ProjectRecord
from .repository import BoardRepository

__all__ = [
    "Board",
    "BoardUpdated",
    "BoardRecord",
    "ColumnRecord",
    "ProjectRecord",
    "BoardRepository",
    "DEFAULT_COLUMNS",
]
