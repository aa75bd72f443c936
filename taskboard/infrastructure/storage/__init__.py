"""Storage infrastructure for the task board.

Provides persistence layer implementations for the repository contracts,
using Result types for low-level file I/O.
"""

from taskboard.infrastructure.storage.json_storage import JsonStorage
from taskboard.infrastructure.storage.repositories import (
    BoardState,
    InMemoryBoardRepository,
    InMemoryColumnRepository,
    InMemoryTaskRepository,
    JsonBoardStore,
)

__all__ = [
    "JsonStorage",
    "JsonBoardStore",
    "BoardState",
    "InMemoryTaskRepository",
    "InMemoryColumnRepository",
    "InMemoryBoardRepository",
]
