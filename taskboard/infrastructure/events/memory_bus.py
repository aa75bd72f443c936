"""In-process event bus.

Subscribers register for a concrete ``DomainEvent`` subclass and receive
every published event of exactly that type. A failing handler never stops
delivery to the others: its error is counted, logged, and the event is kept
as a dead letter.
"""

import inspect
import logging
from collections import defaultdict
from collections.abc import Sequence

from taskboard.domain.shared.event_bus import EventHandler
from taskboard.domain.shared.events import DomainEvent

logger = logging.getLogger(__name__)


class InMemoryEventBus:
    """Type-routed publish/subscribe bus.

    Handlers may be plain callables or coroutine functions. Events are
    delivered in publish order, handlers in subscription order.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._history: list[DomainEvent] = []
        self._error_counts: dict[str, int] = defaultdict(int)
        self._dead_letters: list[tuple[DomainEvent, str]] = []
        self._messages_processed = 0

    async def publish(self, event: DomainEvent) -> None:
        """Publish *event* to all handlers subscribed to its type."""
        event_cls = type(event)
        self._history.append(event)

        for handler in list(self._handlers.get(event_cls, [])):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
                self._messages_processed += 1
            except Exception as exc:
                key = event_cls.__name__
                self._error_counts[key] += 1
                self._dead_letters.append((event, str(exc)))
                logger.exception(f"Handler error on {key}: {exc}")

    async def publish_all(self, events: Sequence[DomainEvent]) -> None:
        """Publish a batch of events in order."""
        for event in events:
            await self.publish(event)

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Register *handler* for *event_type*."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Remove *handler*; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    # -- Observability -----------------------------------------------------

    def get_history(self, event_type: type[DomainEvent] | None = None) -> list[DomainEvent]:
        """Return published events, optionally filtered."""
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if type(e) is event_type]

    def clear_history(self) -> None:
        self._history.clear()

    def get_error_counts(self) -> dict[str, int]:
        return dict(self._error_counts)

    @property
    def dead_letters(self) -> list[tuple[DomainEvent, str]]:
        return list(self._dead_letters)

    @property
    def messages_processed(self) -> int:
        return self._messages_processed
