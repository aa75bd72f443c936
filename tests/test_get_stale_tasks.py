"""Tests for the GetStaleTasks use case."""

import pytest

from taskboard.application import GetStaleTasks
from taskboard.domain.shared import NotFoundError, ValidationError
from taskboard.domain.task import ColumnInfo, TaskRecord
from taskboard.domain.types import ColumnType
from taskboard.infrastructure.storage import InMemoryTaskRepository
from tests.conftest import days_ago


class CannedTaskRepository:
    """Returns the same records from both queries, whatever is asked."""

    def __init__(self, records: list[TaskRecord]) -> None:
        self._records = records

    async def find_stale_tasks(self, threshold_days):
        return list(self._records)

    async def find_by_board_id(self, board_id, *, include_column=False, include_project=False):
        return list(self._records)


@pytest.fixture
def get_stale(task_repo: InMemoryTaskRepository) -> GetStaleTasks:
    return GetStaleTasks(task_repo)


class TestGetStaleTasks:
    @pytest.mark.asyncio
    async def test_only_old_task_in_active_column(self, get_stale, add_task) -> None:
        add_task("t1", "col-input", moved_days_ago=10)
        add_task("t2", "col-done", moved_days_ago=10)
        add_task("t3", "col-input", moved_days_ago=2)

        result = await get_stale.execute("board-1", 7)

        assert [t.id for t in result] == ["t1"]

    @pytest.mark.asyncio
    async def test_excluded_column_types(self, get_stale, add_task) -> None:
        add_task("someday", "col-someday", moved_days_ago=30)
        add_task("archived", "col-archive", moved_days_ago=30)
        add_task("done", "col-done", moved_days_ago=30)
        add_task("next", "col-next", moved_days_ago=30)

        result = await get_stale.execute("board-1", 7)

        assert [t.id for t in result] == ["next"]

    @pytest.mark.asyncio
    async def test_done_and_already_stale_are_skipped(self, get_stale, add_task) -> None:
        add_task("done", "col-next", moved_days_ago=30, is_done=True)
        add_task("flagged", "col-next", moved_days_ago=30, is_stale=True)

        assert await get_stale.execute("board-1", 7) == []

    @pytest.mark.asyncio
    async def test_sorted_oldest_moved_first(self, get_stale, add_task) -> None:
        add_task("b", "col-input", moved_days_ago=9)
        add_task("a", "col-next", moved_days_ago=40)
        add_task("c", "col-input", moved_days_ago=8)

        result = await get_stale.execute("board-1", 7)

        assert [t.id for t in result] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_other_boards_ignored(self, get_stale, add_task) -> None:
        add_task("elsewhere", "col-other", moved_days_ago=30)
        assert await get_stale.execute("board-1", 7) == []

    @pytest.mark.asyncio
    async def test_includes_relation_context(self, get_stale, add_task) -> None:
        add_task("t1", "col-input", moved_days_ago=10, project_id="proj-1")

        (task,) = await get_stale.execute("board-1", 7)

        assert task.column is not None and task.column.name == "Input"
        assert task.project is not None and task.project.name == "Garden"

    @pytest.mark.asyncio
    async def test_empty_board(self, get_stale) -> None:
        assert await get_stale.execute("board-1", 7) == []

    @pytest.mark.asyncio
    async def test_default_threshold(self, task_repo, add_task) -> None:
        add_task("t1", "col-input", moved_days_ago=5)

        assert await GetStaleTasks(task_repo).execute("board-1") == []
        assert len(await GetStaleTasks(task_repo, default_threshold_days=3).execute("board-1")) == 1

    @pytest.mark.asyncio
    async def test_malformed_board_id_is_not_found(self, get_stale) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await get_stale.execute("not a board!", 7)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, -3])
    async def test_non_positive_threshold_rejected(self, get_stale, days: int) -> None:
        with pytest.raises(ValidationError):
            await get_stale.execute("board-1", days)

    @pytest.mark.asyncio
    async def test_does_not_mutate(self, get_stale, add_task, state) -> None:
        add_task("t1", "col-input", moved_days_ago=10)
        before = state.model_copy(deep=True)

        await get_stale.execute("board-1", 7)

        assert state == before

    @pytest.mark.asyncio
    async def test_drops_done_and_columnless_tasks_from_repository(self) -> None:
        inbox = ColumnInfo(id="col-input", name="Input", type=ColumnType.INPUT)

        def record(task_id: str, **fields) -> TaskRecord:
            return TaskRecord(
                id=task_id,
                board_id="board-1",
                column_id="col-input",
                title=f"Task {task_id}",
                last_moved_at=days_ago(30),
                **fields,
            )

        repo = CannedTaskRepository(
            [
                record("done", is_done=True, column=inbox),
                record("no-column", column=None),
                record("stale", column=inbox),
            ]
        )

        result = await GetStaleTasks(repo).execute("board-1", 7)

        assert [t.id for t in result] == ["stale"]
