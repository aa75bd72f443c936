"""Shared fixtures: a small board with one column of each kind."""

from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from taskboard.domain.board import BoardRecord, ColumnRecord, ProjectRecord
from taskboard.domain.shared.events import DomainEvent
from taskboard.domain.task import TaskRecord
from taskboard.domain.types import ColumnType
from taskboard.infrastructure.events import InMemoryEventBus
from taskboard.infrastructure.storage import (
    BoardState,
    InMemoryBoardRepository,
    InMemoryColumnRepository,
    InMemoryTaskRepository,
)

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)
BOARD_ID = "board-1"
OTHER_BOARD_ID = "board-2"


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


class RecordingEventBus:
    """Event bus double that records each ``publish_all`` batch."""

    def __init__(self) -> None:
        self.batches: list[list[DomainEvent]] = []
        self.published: list[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.published.append(event)

    async def publish_all(self, events: Sequence[DomainEvent]) -> None:
        self.batches.append(list(events))

    def subscribe(self, event_type: Any, handler: Any) -> None:
        pass

    def unsubscribe(self, event_type: Any, handler: Any) -> None:
        pass

    @property
    def events(self) -> list[DomainEvent]:
        return [e for batch in self.batches for e in batch] + self.published


@pytest.fixture
def state() -> BoardState:
    columns = [
        ColumnRecord(id="col-input", board_id=BOARD_ID, name="Input", type=ColumnType.INPUT, position=0),
        ColumnRecord(id="col-next", board_id=BOARD_ID, name="Next", type=ColumnType.CONTEXT, position=1),
        ColumnRecord(
            id="col-wip", board_id=BOARD_ID, name="Doing", type=ColumnType.CONTEXT, wip_limit=1, position=2
        ),
        ColumnRecord(id="col-someday", board_id=BOARD_ID, name="Someday", type=ColumnType.SOMEDAY, position=3),
        ColumnRecord(id="col-done", board_id=BOARD_ID, name="Done", type=ColumnType.DONE, position=4),
        ColumnRecord(id="col-archive", board_id=BOARD_ID, name="Archive", type=ColumnType.ARCHIVE, position=5),
        ColumnRecord(id="col-other", board_id=OTHER_BOARD_ID, name="Input", type=ColumnType.INPUT, position=0),
    ]
    return BoardState(
        boards={
            BOARD_ID: BoardRecord(id=BOARD_ID, owner_id="me", name="Home", created_at=days_ago(30)),
            OTHER_BOARD_ID: BoardRecord(id=OTHER_BOARD_ID, owner_id="me", name="Work", created_at=days_ago(20)),
        },
        columns={c.id: c for c in columns},
        projects={"proj-1": ProjectRecord(id="proj-1", name="Garden")},
    )


@pytest.fixture
def task_repo(state: BoardState) -> InMemoryTaskRepository:
    return InMemoryTaskRepository(state, clock=lambda: NOW)


@pytest.fixture
def column_repo(state: BoardState) -> InMemoryColumnRepository:
    return InMemoryColumnRepository(state)


@pytest.fixture
def board_repo(state: BoardState) -> InMemoryBoardRepository:
    return InMemoryBoardRepository(state)


@pytest.fixture
def recording_bus() -> RecordingEventBus:
    return RecordingEventBus()


@pytest.fixture
def bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def add_task(state: BoardState) -> Callable[..., TaskRecord]:
    """Put a task record straight into the state."""

    def _add(task_id: str, column_id: str = "col-input", moved_days_ago: float = 0, **fields: Any) -> TaskRecord:
        column = state.columns[column_id]
        fields.setdefault("title", f"Task {task_id}")
        fields.setdefault("created_at", days_ago(moved_days_ago))
        fields.setdefault("updated_at", days_ago(moved_days_ago))
        record = TaskRecord(
            id=task_id,
            board_id=column.board_id,
            column_id=column_id,
            last_moved_at=days_ago(moved_days_ago),
            **fields,
        )
        state.tasks[task_id] = record
        return record

    return _add
