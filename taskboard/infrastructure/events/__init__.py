"""Event delivery: the in-process bus and its subscribers."""

from taskboard.infrastructure.events.handlers import ActivityLog, StaleTaskNotifier
from taskboard.infrastructure.events.memory_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus", "ActivityLog", "StaleTaskNotifier"]
