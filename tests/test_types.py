"""Tests for identifier value objects."""

import pytest

from taskboard.domain.shared import ValidationError
from taskboard.domain.types import BoardId, ColumnId, ColumnType, TaskId


class TestIdentifiers:
    @pytest.mark.parametrize("raw", ["task-1", "missing-id", "A_b-9", "3f2b8c1e-9d4a-4b7e-8f00-0123456789ab"])
    def test_accepts_well_formed(self, raw: str) -> None:
        assert TaskId.from_string(raw).value == raw

    @pytest.mark.parametrize("raw", ["", "  ", "-leading", "has space", "semi;colon", "x" * 65])
    def test_rejects_malformed(self, raw: str) -> None:
        with pytest.raises(ValidationError):
            BoardId.from_string(raw)

    def test_error_names_the_kind(self) -> None:
        with pytest.raises(ValidationError, match="ColumnId"):
            ColumnId.from_string("bad id")

    def test_generate_is_unique_and_valid(self) -> None:
        a, b = TaskId.generate(), TaskId.generate()
        assert a != b
        assert TaskId.from_string(a.value) == a

    def test_str_is_value(self) -> None:
        assert str(BoardId.from_string("board-1")) == "board-1"

    def test_kinds_are_distinct_types(self) -> None:
        assert TaskId("x") != BoardId("x")


def test_column_type_from_string() -> None:
    assert ColumnType("DONE") is ColumnType.DONE
