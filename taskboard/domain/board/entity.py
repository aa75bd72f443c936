"""Board aggregate."""

from datetime import UTC, datetime
from typing import Any

from taskboard.domain.board.events import BoardUpdated
from taskboard.domain.board.models import BoardRecord
from taskboard.domain.shared.entity import AggregateRoot
from taskboard.domain.shared.errors import ValidationError
from taskboard.domain.shared.events import freeze_changes
from taskboard.domain.types import BoardId

MAX_NAME_LENGTH = 200


def _validate_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Board name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Board name cannot exceed {MAX_NAME_LENGTH} characters")
    return name.strip()


class Board(AggregateRoot):
    """A kanban board owned by one user."""

    def __init__(
        self,
        board_id: BoardId,
        owner_id: str,
        name: str,
        description: str | None = None,
        config: dict[str, Any] | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        super().__init__(board_id.value)
        now = datetime.now(UTC)
        self._owner_id = owner_id
        self._name = _validate_name(name)
        self._description = description
        self._config = config
        self._created_at = created_at or now
        self._updated_at = updated_at or now

    @classmethod
    def create(
        cls,
        owner_id: str,
        name: str,
        description: str | None = None,
        config: dict[str, Any] | None = None,
    ) -> "Board":
        """Create a new board with a generated id."""
        return cls(BoardId.generate(), owner_id, name, description, config)

    @classmethod
    def hydrate(cls, record: BoardRecord) -> "Board":
        return cls(
            BoardId.from_string(record.id),
            record.owner_id,
            record.name,
            record.description,
            record.config,
            record.created_at,
            record.updated_at,
        )

    def dehydrate(self) -> BoardRecord:
        return BoardRecord(
            id=self.id,
            owner_id=self._owner_id,
            name=self._name,
            description=self._description,
            config=self._config,
            created_at=self._created_at,
            updated_at=self._updated_at,
        )

    def update(
        self,
        name: str | None = None,
        description: str | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        """Change board properties, recording ``BoardUpdated`` if anything changed."""
        changes: dict[str, Any] = {}

        if name is not None and name != self._name:
            self._name = _validate_name(name)
            changes["name"] = self._name
        if description is not None and description != self._description:
            self._description = description
            changes["description"] = description
        if config is not None and config != self._config:
            self._config = config
            changes["config"] = config

        if changes:
            self._updated_at = datetime.now(UTC)
            self._record(
                BoardUpdated(
                    aggregate_id=self.id,
                    board_id=self.id,
                    changes=freeze_changes(changes),
                )
            )

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description
