"""Event subscribers.

``ActivityLog`` keeps an append-only history of task events in
``activity.json``; ``StaleTaskNotifier`` reports tasks as they get flagged
stale. Both attach themselves to a bus with ``register``.
"""

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

from taskboard.domain.shared.errors import StorageError
from taskboard.domain.shared.event_bus import EventBus
from taskboard.domain.shared.events import DomainEvent
from taskboard.domain.shared.result import Err, is_ok
from taskboard.domain.task.events import TaskCreated, TaskDeleted, TaskMoved, TaskStale, TaskUpdated
from taskboard.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

TASK_EVENT_TYPES: tuple[type[DomainEvent], ...] = (
    TaskCreated,
    TaskMoved,
    TaskUpdated,
    TaskStale,
    TaskDeleted,
)

_BASE_FIELDS = {"aggregate_id", "event_id", "occurred_at", "sequence"}


def _payload(event: DomainEvent) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for f in fields(event):
        if f.name in _BASE_FIELDS:
            continue
        value = getattr(event, f.name)
        if f.name == "changes":
            value = {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in value}
        data[f.name] = value
    return data


class ActivityLog:
    """Append one entry per task event to a JSON activity file."""

    def __init__(self, path: Path, storage: JsonStorage | None = None) -> None:
        self.path = path
        self._storage = storage or JsonStorage()

    def register(self, bus: EventBus) -> None:
        for event_type in TASK_EVENT_TYPES:
            bus.subscribe(event_type, self.handle)

    def entries(self) -> list[dict[str, Any]]:
        """Return the recorded entries, oldest first."""
        if not self.path.exists():
            return []
        result = self._storage.load_json(self.path)
        if isinstance(result, Err):
            raise StorageError(result.error)
        return list(result.value)

    def handle(self, event: DomainEvent) -> None:
        entry = {
            "event": event.event_name,
            "event_id": str(event.event_id),
            "sequence": event.sequence,
            "occurred_at": event.occurred_at.isoformat(),
            "aggregate_id": event.aggregate_id,
            "payload": _payload(event),
        }
        entries = self.entries()
        entries.append(entry)

        result = self._storage.save_json(self.path, entries)
        if is_ok(result):
            logger.debug(f"Logged {event.event_name} for {event.aggregate_id}")
        else:
            raise StorageError(result.error)


class StaleTaskNotifier:
    """Notify about tasks that have just been flagged stale.

    Notifications go to the log and are kept in ``notifications`` so a
    caller (the CLI) can show them.
    """

    def __init__(self) -> None:
        self.notifications: list[str] = []

    def register(self, bus: EventBus) -> None:
        bus.subscribe(TaskStale, self.handle)

    async def handle(self, event: TaskStale) -> None:
        if not event.is_stale:
            return
        message = f"Task {event.task_id} on board {event.board_id} has gone stale"
        self.notifications.append(message)
        logger.warning(message)
