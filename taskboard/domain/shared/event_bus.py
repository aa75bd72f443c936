"""Event bus contract consumed by the use cases.

The concrete bus is supplied by the composition root (see
``taskboard.infrastructure.events.memory_bus``).
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from taskboard.domain.shared.events import DomainEvent

# Handlers may be plain functions or coroutines.
EventHandler = Callable[[Any], Awaitable[None] | None]


@runtime_checkable
class EventBus(Protocol):
    """Publish/subscribe bus routed by event type."""

    async def publish(self, event: DomainEvent) -> None:
        """Deliver *event* to every handler subscribed to its type."""
        ...

    async def publish_all(self, events: Sequence[DomainEvent]) -> None:
        """Deliver a batch of events in order."""
        ...

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Register *handler* for events of exactly *event_type*."""
        ...

    def unsubscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        ...
