"""Board application service."""

import logging

from taskboard.application.task_service import flush_events
from taskboard.domain.board import DEFAULT_COLUMNS, Board, BoardRecord, BoardRepository, ColumnRecord
from taskboard.domain.shared.errors import NotFoundError, ValidationError
from taskboard.domain.shared.event_bus import EventBus
from taskboard.domain.types import BoardId, ColumnId

logger = logging.getLogger(__name__)


class CreateBoard:
    """Create a board together with the default column layout."""

    def __init__(self, board_repository: BoardRepository) -> None:
        self._boards = board_repository

    async def execute(
        self,
        name: str,
        owner_id: str,
        description: str | None = None,
    ) -> tuple[BoardRecord, list[ColumnRecord]]:
        board = Board.create(owner_id, name, description)
        columns = [
            ColumnRecord(
                id=ColumnId.generate().value,
                board_id=board.id,
                name=column_name,
                type=column_type,
                position=position,
            )
            for position, (column_name, column_type) in enumerate(DEFAULT_COLUMNS)
        ]

        record = await self._boards.save(board.dehydrate(), columns)
        logger.info(f"Created board {record.id} ({record.name})")
        return record, columns


class UpdateBoard:
    """Rename or re-describe a board and announce the change."""

    def __init__(self, board_repository: BoardRepository, event_bus: EventBus) -> None:
        self._boards = board_repository
        self._events = event_bus

    async def execute(
        self,
        board_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> BoardRecord:
        """Apply the changes and return the persisted record.

        Raises:
            NotFoundError: If the board does not exist or the id is malformed.
            ValidationError: If the new name is invalid.
        """
        try:
            bid = BoardId.from_string(board_id)
        except ValidationError as exc:
            raise NotFoundError(f"Board not found: {board_id}") from exc

        record = await self._boards.find_by_id(bid)
        if record is None:
            raise NotFoundError(f"Board not found: {board_id}")

        board = Board.hydrate(record)
        board.update(name=name, description=description)
        if not board.has_domain_events():
            return record

        updated = await self._boards.save(board.dehydrate())
        await flush_events(board, self._events)
        return updated
