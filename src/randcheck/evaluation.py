"""
Deferred values and runtime faults of the evaluated program.

:class:`Eval` is a memoizing thunk.  Generators hand out ``Eval`` handles
instead of forced values; nothing is computed until a consumer calls
:meth:`Eval.force`.  Forcing may raise an :class:`EvalError` - the program
under test's own runtime failure - which the test evaluator turns into a
``FailError`` result.

Two handles compare equal when their forced values do, so comparing or
hashing a composite value forces its elements.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar


T = TypeVar("T")
U = TypeVar("U")


class EvalError(Exception):
    """Base class for runtime faults raised while forcing a deferred value."""

    kind: str = "EvalError"

    def describe(self) -> str:
        text = str(self)
        return f"{self.kind}: {text}" if text else self.kind


class DivideByZero(EvalError):
    kind = "DivideByZero"


class NegativeExponent(EvalError):
    kind = "NegativeExponent"


class InvalidIndex(EvalError):
    kind = "InvalidIndex"

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"index {index} out of bounds")


class UserError(EvalError):
    """Raised by an explicit ``error`` call in the program under test."""

    kind = "UserError"


_UNSET = object()


class Eval(Generic[T]):
    """Lazily computed value, forced at most once on success."""

    __slots__ = ("_thunk", "_value")

    def __init__(self, thunk: Callable[[], T]) -> None:
        self._thunk = thunk
        self._value: object = _UNSET

    @classmethod
    def ready(cls, value: T) -> Eval[T]:
        """Wrap an already computed value."""
        ev: Eval[T] = cls(lambda: value)
        ev._value = value
        return ev

    def is_ready(self) -> bool:
        return self._value is not _UNSET

    def force(self) -> T:
        """Run the thunk (once) and return its value.

        A thunk that raises is not memoized; forcing again re-raises.
        """
        if self._value is _UNSET:
            self._value = self._thunk()
        return self._value  # type: ignore[return-value]

    def map(self, f: Callable[[T], U]) -> Eval[U]:
        return Eval(lambda: f(self.force()))

    def bind(self, f: Callable[[T], Eval[U]]) -> Eval[U]:
        return Eval(lambda: f(self.force()).force())

    def __eq__(self, other: object) -> bool:
        """Handles are equal when their forced values are; forcing may raise."""
        if not isinstance(other, Eval):
            return NotImplemented
        return self is other or bool(self.force() == other.force())

    def __hash__(self) -> int:
        return hash(self.force())

    def __repr__(self) -> str:
        return f"Eval({self._value!r})" if self.is_ready() else "Eval(<deferred>)"


def force_all(evals: list[Eval[T]]) -> list[T]:
    """Force each handle left to right."""
    return [ev.force() for ev in evals]


__all__ = [
    "DivideByZero",
    "Eval",
    "EvalError",
    "InvalidIndex",
    "NegativeExponent",
    "UserError",
    "force_all",
]
