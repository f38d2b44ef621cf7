# src/randcheck/generators.py
"""
Type-directed random value generators.

A :data:`Generator` is a pure function ``(size, state) -> (value, state')``:
the same size and state always give the same deferred value and the same
successor state.  :func:`random_value` builds one per type descriptor by an
exhaustive match, returning ``Failure(UnsupportedType)`` for functions,
arrays and abstract types.

RNG threading rules
-------------------
* Scalars draw directly from the incoming state.
* Tuples and records thread the state through their components in order
  (records in canonical, name-sorted order) without splitting.
* Sequences and streams ``split`` once: the first child feeds the element
  draws, the second child is returned to the caller.  For streams this is
  what lets the elements stay lazy - the caller's state never depends on
  how many elements end up being looked at.

Size scaling
------------
``size`` runs from 1 to 100.  Below 100 it is the exponent ``n`` of the
numeric range ``[-256^n, 256^n]``; at 100 the exponent is drawn from a
geometric tail starting at 100 (see :func:`random_size`).
"""

from __future__ import annotations

from fractions import Fraction
from typing import Callable, Final, TypeAlias

from randcheck.backend import CONCRETE, Backend
from randcheck.errors.generation import NotTestable, UnsupportedType
from randcheck.evaluation import Eval
from randcheck.result import Failure, Result, Success, collect_results
from randcheck.rng import RNGState, next_bool, next_in_range, split
from randcheck.types import (
    TAbstract,
    TArray,
    TBit,
    TFloat,
    TFun,
    TInteger,
    TIntMod,
    TRational,
    TRecord,
    TSeq,
    TStream,
    TTuple,
    TWord,
    TypeDescriptor,
    assert_never,
    show_type,
)
from randcheck.values import FiniteSeqMap, UnfoldSeqMap, VRecord, VSeq, VStream, VTuple, Value


__all__: list[str] = [
    "Generator",
    "MAX_SIZE",
    "dumpable_type",
    "random_bit",
    "random_float",
    "random_int_mod",
    "random_integer",
    "random_rational",
    "random_record",
    "random_sequence",
    "random_size",
    "random_stream",
    "random_tuple",
    "random_value",
    "random_word",
    "scaled_exponent",
    "size_schedule",
    "testable_type_generators",
]

Generator: TypeAlias = Callable[[int, RNGState], tuple[Eval[Value], RNGState]]

MAX_SIZE: Final[int] = 100
_GROWTH_RANGE: Final[int] = 8
_BASE: Final[int] = 256


# --------------------------------------------------------------------------- #
# Size scaling                                                                #
# --------------------------------------------------------------------------- #


def random_size(k: int, n: int, state: RNGState) -> tuple[int, RNGState]:
    """Grow ``n`` by one per draw from ``[1, k]`` until a draw equals 1."""
    current = state
    while True:
        p, current = next_in_range(1, k, current)
        if p == 1:
            return n, current
        n += 1


def scaled_exponent(size: int, state: RNGState) -> tuple[int, RNGState]:
    """Exponent ``n`` for the numeric range ``[-256^n, 256^n]``.

    Sizes below :data:`MAX_SIZE` are used as-is and consume no randomness.
    """
    if size < MAX_SIZE:
        return size, state
    return random_size(_GROWTH_RANGE, MAX_SIZE, state)


def size_schedule(index: int, total: int) -> int:
    """Size hint for the zero-based test ``index`` of a run of ``total`` tests."""
    return MAX_SIZE * (index + 1) // total


# --------------------------------------------------------------------------- #
# Scalar generators                                                           #
# --------------------------------------------------------------------------- #


def random_bit(backend: Backend) -> Generator:
    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        b, next_state = next_bool(state)
        return backend.bit_lit(b), next_state

    return gen


def random_integer(backend: Backend) -> Generator:
    """Integers in ``[-256^n, 256^n]`` with ``n`` scaled by size."""

    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        n, s1 = scaled_exponent(size, state)
        bound = _BASE**n
        i, s2 = next_in_range(-bound, bound, s1)
        return backend.integer_lit(i), s2

    return gen


def random_int_mod(backend: Backend, modulus: int) -> Generator:
    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        i, next_state = next_in_range(0, modulus - 1, state)
        return backend.integer_lit(i), next_state

    return gen


def _rational_parts(size: int, state: RNGState) -> tuple[int, int, RNGState]:
    n, s1 = scaled_exponent(size, state)
    bound = _BASE**n
    numerator, s2 = next_in_range(-bound, bound, s1)
    denominator, s3 = next_in_range(1, bound, s2)
    return numerator, denominator, s3


def random_rational(backend: Backend) -> Generator:
    """Numerator as for integers; denominator in ``[1, 256^n]`` with the same ``n``."""

    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        numerator, denominator, next_state = _rational_parts(size, state)
        return backend.rational_lit(numerator, denominator), next_state

    return gen


def random_float(backend: Backend, exponent_bits: int, precision_bits: int) -> Generator:
    """Floats rounded from a random rational.

    NaN is never produced.
    """

    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        numerator, denominator, next_state = _rational_parts(size, state)
        value = Fraction(numerator, denominator)
        return backend.float_lit(exponent_bits, precision_bits, value), next_state

    return gen


def random_word(backend: Backend, width: int) -> Generator:
    """Unsigned words of ``width`` bits; the size hint is ignored."""

    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        bits, next_state = next_in_range(0, 2**width - 1, state)
        return backend.word_lit(width, bits), next_state

    return gen


# --------------------------------------------------------------------------- #
# Composite generators                                                        #
# --------------------------------------------------------------------------- #


def random_sequence(length: int, make_elem: Generator) -> Generator:
    """Finite sequence of ``length`` independent elements."""

    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        elem_state, rest = split(state)
        elements: list[Eval[Value]] = []
        for _ in range(length):
            element, elem_state = make_elem(size, elem_state)
            elements.append(element)
        seq = VSeq(length=length, elements=FiniteSeqMap(tuple(elements)))
        return Eval.ready(seq), rest

    return gen


def random_stream(make_elem: Generator) -> Generator:
    """Infinite stream whose elements are drawn on first lookup."""

    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        elem_state, rest = split(state)
        elements = UnfoldSeqMap(lambda s: make_elem(size, s), elem_state)
        return Eval.ready(VStream(elements=elements)), rest

    return gen


def random_tuple(gens: list[Generator]) -> Generator:
    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        elements: list[Eval[Value]] = []
        current = state
        for make_elem in gens:
            element, current = make_elem(size, current)
            elements.append(element)
        return Eval.ready(VTuple(elements=tuple(elements))), current

    return gen


def random_record(
    display_order: tuple[str, ...], gens: list[tuple[str, Generator]]
) -> Generator:
    """Record generator.

    ``gens`` is in canonical order and fixes the RNG threading order;
    ``display_order`` only fixes the field order of the resulting value.
    """

    def gen(size: int, state: RNGState) -> tuple[Eval[Value], RNGState]:
        drawn: dict[str, Eval[Value]] = {}
        current = state
        for name, make_field in gens:
            drawn[name], current = make_field(size, current)
        record = VRecord(fields=tuple((name, drawn[name]) for name in display_order))
        return Eval.ready(record), current

    return gen


# --------------------------------------------------------------------------- #
# Type-directed lookup                                                        #
# --------------------------------------------------------------------------- #


def _unsupported(ty: TypeDescriptor) -> Result[Generator, UnsupportedType]:
    return Failure(UnsupportedType(type_name=show_type(ty)))


def random_value(
    ty: TypeDescriptor, backend: Backend = CONCRETE
) -> Result[Generator, UnsupportedType]:
    """Generator for values of ``ty``, or ``Failure`` when none exists."""
    match ty:
        case TBit():
            return Success(random_bit(backend))
        case TInteger():
            return Success(random_integer(backend))
        case TRational():
            return Success(random_rational(backend))
        case TIntMod(modulus=m):
            return Success(random_int_mod(backend, m))
        case TFloat(exponent_bits=e, precision_bits=p):
            return Success(random_float(backend, e, p))
        case TWord(width=w):
            return Success(random_word(backend, w))
        case TSeq(length=n, element=el):
            return random_value(el, backend).map(lambda mk: random_sequence(n, mk))
        case TStream(element=el):
            return random_value(el, backend).map(random_stream)
        case TTuple(elements=els):
            return collect_results([random_value(el, backend) for el in els]).map(random_tuple)
        case TRecord():
            canonical = ty.canonical_fields()
            return collect_results([random_value(t, backend) for _, t in canonical]).map(
                lambda mks: random_record(
                    ty.field_names(), [(name, mk) for (name, _), mk in zip(canonical, mks)]
                )
            )
        case TArray() | TFun() | TAbstract():
            return _unsupported(ty)
        case _:
            assert_never(ty)


def testable_type_generators(
    ty: TypeDescriptor, backend: Backend = CONCRETE
) -> Result[list[Generator], UnsupportedType | NotTestable]:
    """Argument generators for a property ``T1 -> ... -> Tn -> Bit``."""
    gens: list[Generator] = []
    current = ty
    while isinstance(current, TFun):
        match random_value(current.arg, backend):
            case Failure(error):
                return Failure(error)
            case Success(gen):
                gens.append(gen)
        current = current.result
    if not isinstance(current, TBit):
        return Failure(NotTestable(reason="codomain", type_name=show_type(current)))
    return Success(gens)


def dumpable_type(
    ty: TypeDescriptor, backend: Backend = CONCRETE
) -> Result[list[Generator], UnsupportedType]:
    """Like :func:`testable_type_generators`, but any generatable result type is allowed."""
    gens: list[Generator] = []
    current = ty
    while isinstance(current, TFun):
        match random_value(current.arg, backend):
            case Failure(error):
                return Failure(error)
            case Success(gen):
                gens.append(gen)
        current = current.result
    return random_value(current, backend).map(lambda _: gens)
