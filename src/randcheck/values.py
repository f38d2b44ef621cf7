"""
Value ADTs.

Values mirror :mod:`randcheck.types`.  Composite values hold
:class:`~randcheck.evaluation.Eval` handles rather than forced children, so
building a value never runs the program under test.

Sequences and streams index their elements through a :class:`SeqMap`.  Both
implementations return the *same* ``Eval`` object for repeated lookups of
one index, so re-reading an element never re-randomizes it.

Finite values compare structurally (forcing their elements); streams and
functions compare by identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, Generic, Literal, Protocol, TypeVar

from randcheck.evaluation import Eval, InvalidIndex


S = TypeVar("S")


class SeqMap(Protocol):
    """Index → element accessor."""

    def lookup(self, index: int) -> Eval[Value]:
        ...


class FiniteSeqMap:
    """Elements held in draw order."""

    __slots__ = ("_elements",)

    def __init__(self, elements: tuple[Eval[Value], ...]) -> None:
        self._elements = elements

    def __len__(self) -> int:
        return len(self._elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FiniteSeqMap):
            return NotImplemented
        return self._elements == other._elements

    def __hash__(self) -> int:
        return hash(self._elements)

    def lookup(self, index: int) -> Eval[Value]:
        if not 0 <= index < len(self._elements):
            raise InvalidIndex(index)
        return self._elements[index]


class UnfoldSeqMap(Generic[S]):
    """Infinite sequence produced by repeatedly applying ``step`` to a state.

    Element ``i`` is the value of the ``i``-th step.  Lookups advance an
    internal cursor as far as needed and memoize every handle produced on
    the way; the handles themselves stay unforced.
    """

    __slots__ = ("_step", "_cursor", "_cache")

    def __init__(self, step: Callable[[S], tuple[Eval[Value], S]], start: S) -> None:
        self._step = step
        self._cursor = start
        self._cache: list[Eval[Value]] = []

    def realized(self) -> int:
        """Number of positions materialized so far."""
        return len(self._cache)

    def lookup(self, index: int) -> Eval[Value]:
        if index < 0:
            raise InvalidIndex(index)
        while len(self._cache) <= index:
            element, self._cursor = self._step(self._cursor)
            self._cache.append(element)
        return self._cache[index]


@dataclass(frozen=True)
class VBit:
    value: bool
    kind: Literal["VBit"] = "VBit"


@dataclass(frozen=True)
class VInteger:
    """An integer; also the representation of ``Z n`` inhabitants."""

    value: int
    kind: Literal["VInteger"] = "VInteger"


@dataclass(frozen=True)
class VRational:
    numerator: int
    denominator: int
    kind: Literal["VRational"] = "VRational"

    def __post_init__(self) -> None:
        if self.denominator <= 0:
            raise ValueError(f"rational denominator must be positive, got {self.denominator}")

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)


@dataclass(frozen=True)
class VFloat:
    """A rounded float; ``value`` is exact for finite numbers.

    ``special`` marks the infinities and negative zero, whose ``value`` is 0.
    """

    exponent_bits: int
    precision_bits: int
    value: Fraction
    special: Literal["finite", "inf", "-inf", "-0"] = "finite"
    kind: Literal["VFloat"] = "VFloat"


@dataclass(frozen=True)
class VWord:
    width: int
    bits: int
    kind: Literal["VWord"] = "VWord"

    def __post_init__(self) -> None:
        if not 0 <= self.bits < 2**self.width:
            raise ValueError(f"bit pattern {self.bits} does not fit in width {self.width}")


@dataclass(frozen=True)
class VSeq:
    length: int
    elements: SeqMap
    kind: Literal["VSeq"] = "VSeq"

    def element(self, index: int) -> Eval[Value]:
        if not 0 <= index < self.length:
            raise InvalidIndex(index)
        return self.elements.lookup(index)


@dataclass(frozen=True, eq=False)
class VStream:
    """Infinite sequence; compared by identity."""

    elements: SeqMap
    kind: Literal["VStream"] = "VStream"

    def element(self, index: int) -> Eval[Value]:
        return self.elements.lookup(index)


@dataclass(frozen=True)
class VTuple:
    elements: tuple[Eval[Value], ...]
    kind: Literal["VTuple"] = "VTuple"


@dataclass(frozen=True)
class VRecord:
    """Fields in display order."""

    fields: tuple[tuple[str, Eval[Value]], ...]
    kind: Literal["VRecord"] = "VRecord"

    def lookup(self, name: str) -> Eval[Value]:
        found = next((ev for field_name, ev in self.fields if field_name == name), None)
        if found is None:
            raise KeyError(name)
        return found


@dataclass(frozen=True, eq=False)
class VFun:
    """Function value; compared by identity."""

    fn: Callable[[Eval[Value]], Eval[Value]]
    kind: Literal["VFun"] = "VFun"

    def apply(self, arg: Eval[Value]) -> Eval[Value]:
        return self.fn(arg)


Value = VBit | VInteger | VRational | VFloat | VWord | VSeq | VStream | VTuple | VRecord | VFun


def finite_seq_map(values: list[Value]) -> FiniteSeqMap:
    """Wrap already computed values as a finite element map."""
    return FiniteSeqMap(tuple(Eval.ready(v) for v in values))


__all__ = [
    "FiniteSeqMap",
    "SeqMap",
    "UnfoldSeqMap",
    "VBit",
    "VFloat",
    "VFun",
    "VInteger",
    "VRational",
    "VRecord",
    "VSeq",
    "VStream",
    "VTuple",
    "VWord",
    "Value",
    "finite_seq_map",
]
