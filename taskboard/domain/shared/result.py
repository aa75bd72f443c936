"""Result type for explicit error handling in low-level I/O.

This module provides a Result type (also known as Either monad) for
representing operations that can succeed with a value or fail with an error.
The storage layer returns Results; repositories unwrap them and raise
``StorageError`` at the domain boundary.

Example usage:
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     if b == 0:
    ...         return Err("Division by zero")
    ...     return Ok(a / b)
    ...
    >>> result = divide(10, 2)
    >>> if is_ok(result):
    ...     print(f"Result: {result.value}")
    Result: 5.0
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Type alias for a result that is either Ok[T] or Err[E]
# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is successful."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is an error."""
    return isinstance(result, Err)

