"""Exception hierarchy for the task board.

Use cases raise these at the points where callers need to tell outcomes
apart (a missing task maps to a "not found" response, malformed input to a
validation message). Errors raised by repositories or the event bus are not
translated and reach the caller unchanged.
"""


class TaskboardError(Exception):
    """Base exception for all task board errors."""


class ValidationError(TaskboardError):
    """Malformed identifier, invalid entity state or bad input."""


class WipLimitExceededError(ValidationError):
    """A move would push a column past its work-in-progress limit."""

    def __init__(self, column_name: str, current_count: int, wip_limit: int):
        self.column_name = column_name
        self.current_count = current_count
        self.wip_limit = wip_limit
        super().__init__(
            f'WIP limit exceeded for column "{column_name}". '
            f"Current: {current_count}, Limit: {wip_limit}"
        )


class NotFoundError(TaskboardError):
    """A referenced task, board or column does not exist."""


class StorageError(TaskboardError):
    """The backing store could not be read or written."""
