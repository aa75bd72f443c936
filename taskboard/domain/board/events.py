"""Board domain events."""

from dataclasses import dataclass
from typing import Any

from taskboard.domain.shared.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class BoardUpdated(DomainEvent):
    """Event raised when a board's name, description or config changes."""

    board_id: str
    changes: tuple[tuple[str, Any], ...] = ()

    def changes_dict(self) -> dict[str, Any]:
        """Return a mutable dict copy of the changed fields."""
        return dict(self.changes)
