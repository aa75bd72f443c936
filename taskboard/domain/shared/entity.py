"""Identity and aggregate base classes.

Entities are objects with an identity that runs through time: two task
instances loaded at different moments are the same task if they carry the
same id, whatever their other fields say. Aggregate roots additionally
buffer the domain events raised by their own mutations until the caller
harvests them.
"""

from taskboard.domain.shared.errors import ValidationError
from taskboard.domain.shared.events import DomainEvent


class Entity:
    """Base class for domain entities.

    Identity equality only: entities of the same concrete type with the
    same id are equal, regardless of any other attribute.

    Raises:
        ValidationError: If the id is empty or blank.
    """

    __slots__ = ("_id",)

    def __init__(self, entity_id: str) -> None:
        if not entity_id or not entity_id.strip():
            raise ValidationError("empty id")
        self._id = entity_id

    @property
    def id(self) -> str:
        """The entity's immutable identifier."""
        return self._id

    def equals(self, other: object) -> bool:
        """Check if two entities are the same (by type and id)."""
        if other is None:
            return False
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        return self._id == other._id  # type: ignore[attr-defined]

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((type(self), self._id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"


class AggregateRoot(Entity):
    """Entity that owns a consistency boundary and records domain events.

    Events are appended by mutation methods and stay buffered on the
    instance. Whoever persisted the aggregate reads ``domain_events``,
    publishes them, and then calls ``clear_domain_events()``. The aggregate
    never clears its own buffer.
    """

    __slots__ = ("_domain_events",)

    def __init__(self, entity_id: str) -> None:
        super().__init__(entity_id)
        self._domain_events: list[DomainEvent] = []

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        """Snapshot of the buffered events, oldest first."""
        return tuple(self._domain_events)

    def has_domain_events(self) -> bool:
        return bool(self._domain_events)

    def clear_domain_events(self) -> None:
        """Drop all buffered events (earlier snapshots are unaffected)."""
        self._domain_events.clear()

    def _record(self, event: DomainEvent) -> None:
        self._domain_events.append(event)
