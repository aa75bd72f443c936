"""Shared domain building blocks for the task board.

This package provides common pieces used across domain modules:

- Entity identity and the aggregate event buffer
- Base domain event infrastructure and the event bus contract
- Error taxonomy
- Result type for low-level storage

Example usage:
    >>> from taskboard.domain.shared import Entity, ValidationError
    >>>
    >>> class Tag(Entity):
    ...     pass
    ...
    >>> Tag("urgent") == Tag("urgent")
    True
"""

from taskboard.domain.shared.entity import AggregateRoot, Entity
from taskboard.domain.shared.errors import (
    NotFoundError,
    StorageError,
    TaskboardError,
    ValidationError,
    WipLimitExceededError,
)
from taskboard.domain.shared.event_bus import EventBus, EventHandler
from taskboard.domain.shared.events import DomainEvent
from taskboard.domain.shared.result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # Identity
    "Entity",
    "AggregateRoot",
    # Domain events
    "DomainEvent",
    "EventBus",
    "EventHandler",
    # Errors
    "TaskboardError",
    "ValidationError",
    "WipLimitExceededError",
    "NotFoundError",
    "StorageError",
    # Result type
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
]
