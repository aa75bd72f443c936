"""Base domain event infrastructure.

Domain events represent significant occurrences within the domain that other
parts of the system may need to react to. They are immutable records of
something that happened, captured at the moment it occurred.

Example usage:
    >>> from dataclasses import dataclass
    >>> from taskboard.domain.shared.events import DomainEvent
    >>>
    >>> @dataclass(frozen=True, kw_only=True)
    ... class TaskArchived(DomainEvent):
    ...     reason: str
    ...
    >>> event = TaskArchived(aggregate_id="task-123", reason="cleanup")
    >>> print(f"{event.event_name} #{event.sequence} at {event.occurred_at}")
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from itertools import count
from typing import Any
from uuid import UUID, uuid4

# Process-wide creation counter; gives events a total order even when
# two of them share the same timestamp.
_sequence = count(1)


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for all domain events.

    Domain events are immutable records of something that happened in the domain.
    Each event is tagged with the aggregate it belongs to, has a unique
    identifier and a timestamp of when it occurred.

    Subclasses should be frozen, keyword-only dataclasses that add
    domain-specific payload fields.

    Attributes:
        aggregate_id: Identifier of the aggregate that raised the event.
        event_id: Unique identifier for this event instance.
        occurred_at: UTC timestamp when the event occurred.
        sequence: Monotonic creation order across the process.
    """

    aggregate_id: str
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    sequence: int = field(default_factory=lambda: next(_sequence))

    @property
    def event_name(self) -> str:
        """Name of the concrete event type."""
        return type(self).__name__


def freeze_changes(changes: Mapping[str, Any]) -> tuple[tuple[str, Any], ...]:
    """Convert a changes mapping into the immutable form events carry."""
    return tuple(changes.items())
