"""
Result type for explicit error handling.

Every fallible but *expected* outcome in randcheck (an unsupported type, a
function that cannot be tested exhaustively, an invalid configuration) is
returned as a ``Result`` rather than ``None`` or a raised exception.  Raised
exceptions are reserved for runtime faults of the program under test and for
internal-consistency faults.

Usage:
    >>> match random_value(TInteger()):
    ...     case Success(gen):
    ...         value, state = gen(10, state)
    ...     case Failure(error):
    ...         print(f"cannot generate: {error.type_name}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, NoReturn, TypeVar


T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful result carrying ``value``."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply ``f`` to the carried value."""
        return Success(f(self.value))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain an operation that itself returns a Result."""
        return f(self.value)


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A failed result carrying ``error``."""

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """
        Unwrap the success value.

        Raises:
            RuntimeError: Always, since Failure has no value.
        """
        raise RuntimeError(f"Called unwrap() on Failure: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        result: Result[U, E] = Failure(self.error)
        return result

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        result: Result[U, E] = Failure(self.error)
        return result


Result = Success[T] | Failure[E]


def collect_results(results: list[Result[T, E]]) -> Result[list[T], E]:
    """
    Collect a list of Results into a Result of list.

    Returns the first Failure encountered, otherwise Success with every value
    in the original order.
    """
    first_failure = next((result for result in results if isinstance(result, Failure)), None)
    return (
        first_failure
        if isinstance(first_failure, Failure)
        else Success([result.value for result in results if isinstance(result, Success)])
    )


__all__ = ["Success", "Failure", "Result", "collect_results"]
