"""Tests for the storage layer."""

import asyncio
import json
from datetime import UTC

import pytest

from taskboard.application import MarkStale
from taskboard.domain.board import BoardRecord, ColumnRecord
from taskboard.domain.shared import Err, NotFoundError, Ok, StorageError
from taskboard.domain.task import TaskRecord
from taskboard.domain.types import BoardId, ColumnId, TaskId
from taskboard.infrastructure.storage import (
    BoardState,
    InMemoryBoardRepository,
    InMemoryTaskRepository,
    JsonBoardStore,
    JsonStorage,
)
from tests.conftest import NOW


class FailingStore:
    """Board store whose every save fails."""

    def save(self, state: BoardState) -> None:
        raise StorageError("disk full")


class TestJsonStorage:
    def test_save_then_load(self, tmp_path) -> None:
        storage = JsonStorage()
        path = tmp_path / "nested" / "data.json"

        assert isinstance(storage.save_json(path, {"a": 1}), Ok)
        assert storage.load_json(path) == Ok({"a": 1})
        assert not path.with_suffix(".json.tmp").exists()

    def test_missing_file(self, tmp_path) -> None:
        result = JsonStorage().load_json(tmp_path / "nope.json")
        assert isinstance(result, Err)
        assert "File not found" in result.error

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        result = JsonStorage().load_json(path)
        assert isinstance(result, Err)
        assert "Invalid JSON" in result.error

    def test_unserializable(self, tmp_path) -> None:
        result = JsonStorage().save_json(tmp_path / "x.json", {"a": object()})
        assert isinstance(result, Err)


class TestJsonBoardStore:
    def test_missing_file_gives_empty_state(self, tmp_path) -> None:
        assert JsonBoardStore(tmp_path / "board.json").load() == BoardState()

    def test_corrupt_file_raises_storage_error(self, tmp_path) -> None:
        path = tmp_path / "board.json"
        path.write_text("[]")
        with pytest.raises(StorageError):
            JsonBoardStore(path).load()

    @pytest.mark.asyncio
    async def test_repositories_commit_every_write(self, tmp_path, state) -> None:
        store = JsonBoardStore(tmp_path / "board.json")
        repo = InMemoryTaskRepository(state, store)

        await repo.create(TaskRecord(id="t1", board_id="board-1", column_id="col-input", title="Persist me"))

        reloaded = store.load()
        assert reloaded.tasks["t1"].title == "Persist me"
        assert reloaded.columns.keys() == state.columns.keys()

        await repo.delete(TaskId("t1"))
        assert store.load().tasks == {}


class TestInMemoryTaskRepository:
    @pytest.mark.asyncio
    async def test_find_stale_tasks_is_board_agnostic(self, task_repo, add_task) -> None:
        add_task("old", "col-input", moved_days_ago=10)
        add_task("old-other", "col-other", moved_days_ago=10)
        add_task("fresh", "col-input", moved_days_ago=1)
        add_task("done", "col-input", moved_days_ago=10, is_done=True)
        add_task("flagged", "col-input", moved_days_ago=10, is_stale=True)

        result = await task_repo.find_stale_tasks(7)

        assert sorted(t.id for t in result) == ["old", "old-other"]

    @pytest.mark.asyncio
    async def test_find_by_board_orders_by_column_then_position(self, task_repo, add_task) -> None:
        add_task("n0", "col-next", position=0)
        add_task("i1", "col-input", position=1)
        add_task("i0", "col-input", position=0)

        result = await task_repo.find_by_board_id(BoardId("board-1"))

        assert [t.id for t in result] == ["i0", "i1", "n0"]
        assert all(t.column is None for t in result)

    @pytest.mark.asyncio
    async def test_update_strips_relations(self, task_repo, add_task, state) -> None:
        add_task("t1")
        (with_column,) = await task_repo.find_by_board_id(BoardId("board-1"), include_column=True)

        await task_repo.update(TaskId("t1"), with_column.model_copy(update={"title": "Renamed"}))

        assert state.tasks["t1"].column is None
        assert state.tasks["t1"].title == "Renamed"

    @pytest.mark.asyncio
    async def test_update_missing(self, task_repo) -> None:
        record = TaskRecord(id="ghost", board_id="board-1", column_id="col-input", title="x")
        with pytest.raises(NotFoundError):
            await task_repo.update(TaskId("ghost"), record)

    @pytest.mark.asyncio
    async def test_column_counts(self, task_repo, add_task) -> None:
        add_task("a", "col-input", position=2)
        add_task("b", "col-input", position=7)

        col = ColumnId("col-input")
        assert await task_repo.count_by_column_id(col) == 2
        assert await task_repo.count_by_column_id(col, exclude_task_id=TaskId("a")) == 1
        assert await task_repo.get_max_position_in_column(col) == 7
        assert await task_repo.get_max_position_in_column(ColumnId("col-next")) == -1

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, task_repo, add_task, state) -> None:
        add_task("t1", title="Original")
        record = await task_repo.find_by_id(TaskId("t1"))
        record.title = "Mutated"
        assert state.tasks["t1"].title == "Original"

    @pytest.mark.asyncio
    async def test_concurrent_updates_last_write_wins(self, task_repo, add_task, state) -> None:
        add_task("t1", title="Original")
        first = state.tasks["t1"].model_copy(update={"title": "First"})
        second = state.tasks["t1"].model_copy(update={"title": "Second"})

        await asyncio.gather(task_repo.update(TaskId("t1"), first), task_repo.update(TaskId("t1"), second))

        assert state.tasks["t1"].title == "Second"


class TestColumnAndBoardRepositories:
    @pytest.mark.asyncio
    async def test_column_lookup(self, column_repo) -> None:
        info = await column_repo.find_by_id(ColumnId("col-wip"))
        assert info is not None and info.wip_limit == 1
        assert await column_repo.find_by_id(ColumnId("col-nope")) is None
        assert await column_repo.belongs_to_board(ColumnId("col-wip"), BoardId("board-1"))
        assert not await column_repo.belongs_to_board(ColumnId("col-other"), BoardId("board-1"))

    @pytest.mark.asyncio
    async def test_boards_listed_oldest_first(self, board_repo: InMemoryBoardRepository) -> None:
        boards = await board_repo.list_all()
        assert [b.id for b in boards] == ["board-1", "board-2"]


class TestFailedCommitRollsBack:
    @pytest.mark.asyncio
    async def test_update_keeps_previous_record(self, state, add_task) -> None:
        add_task("t1", title="Original")
        repo = InMemoryTaskRepository(state, FailingStore())
        record = state.tasks["t1"].model_copy(update={"title": "Unsaved"})

        with pytest.raises(StorageError):
            await repo.update(TaskId("t1"), record)

        assert (await repo.find_by_id(TaskId("t1"))).title == "Original"

    @pytest.mark.asyncio
    async def test_create_leaves_no_record(self, state) -> None:
        repo = InMemoryTaskRepository(state, FailingStore())

        with pytest.raises(StorageError):
            await repo.create(TaskRecord(id="t1", board_id="board-1", column_id="col-input", title="New"))

        assert await repo.find_by_id(TaskId("t1")) is None

    @pytest.mark.asyncio
    async def test_delete_keeps_record(self, state, add_task) -> None:
        add_task("t1")
        repo = InMemoryTaskRepository(state, FailingStore())

        with pytest.raises(StorageError):
            await repo.delete(TaskId("t1"))

        assert await repo.find_by_id(TaskId("t1")) is not None

    @pytest.mark.asyncio
    async def test_board_save_restores_board_and_columns(self, state) -> None:
        repo = InMemoryBoardRepository(state, FailingStore())
        renamed = state.boards["board-1"].model_copy(update={"name": "Renamed"})
        columns = [
            state.columns["col-input"].model_copy(update={"name": "Inbox"}),
            ColumnRecord(id="col-new", board_id="board-1", name="New"),
        ]

        with pytest.raises(StorageError):
            await repo.save(renamed, columns)
        with pytest.raises(StorageError):
            await repo.save(BoardRecord(id="board-3", name="Fresh"))

        assert (await repo.find_by_id(BoardId("board-1"))).name == "Home"
        assert await repo.find_by_id(BoardId("board-3")) is None
        assert state.columns["col-input"].name == "Input"
        assert "col-new" not in state.columns

    @pytest.mark.asyncio
    async def test_mark_stale_leaves_flag_unset(self, state, add_task, recording_bus) -> None:
        add_task("t1", moved_days_ago=10)
        repo = InMemoryTaskRepository(state, FailingStore())

        with pytest.raises(StorageError):
            await MarkStale(repo, recording_bus).execute("t1")

        assert not (await repo.find_by_id(TaskId("t1"))).is_stale
        assert recording_bus.events == []


class TestNaiveTimestamps:
    def test_task_record_assumes_utc(self) -> None:
        record = TaskRecord.model_validate(
            {
                "id": "t1",
                "board_id": "board-1",
                "column_id": "col-input",
                "title": "Hand edited",
                "last_moved_at": "2024-01-01T00:00:00",
                "due_at": "2024-02-01T09:30:00",
            }
        )

        assert record.last_moved_at.tzinfo is UTC
        assert record.due_at.tzinfo is UTC
        assert record.completed_at is None

    def test_board_record_assumes_utc(self) -> None:
        board = BoardRecord.model_validate({"id": "b1", "name": "Home", "created_at": "2024-01-01T00:00:00"})
        assert board.created_at.tzinfo is UTC

    @pytest.mark.asyncio
    async def test_hand_edited_board_file_is_queryable(self, tmp_path, state, add_task) -> None:
        add_task("old", moved_days_ago=30)
        add_task("fresh", moved_days_ago=0)
        path = tmp_path / "board.json"
        data = state.model_dump(mode="json")
        data["tasks"]["old"]["last_moved_at"] = "2024-01-01T00:00:00"
        path.write_text(json.dumps(data))

        loaded = JsonBoardStore(path).load()
        repo = InMemoryTaskRepository(loaded, clock=lambda: NOW)

        assert [t.id for t in await repo.find_stale_tasks(7)] == ["old"]
