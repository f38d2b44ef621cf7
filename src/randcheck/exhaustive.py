"""
Cardinality and exhaustive enumeration of finite types.

Used instead of random sampling when a property's whole input domain is
small.  Enumerations list the leftmost component slowest: ``(Bit, Bit)``
enumerates as ``(False, False), (False, True), (True, False), (True, True)``.
Records follow their canonical (name-sorted) field order for that purpose.

Enumeration is lazy: :func:`iter_type_values` and
:meth:`ExhaustivePlan.arg_lists` only build the inhabitants that are
actually consumed, so asking whether ``[32] -> Bit`` is small enough never
touches its four billion inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import prod
from typing import Iterator

from randcheck.errors.generation import NotTestable, UnsupportedType
from randcheck.evaluation import Eval
from randcheck.generators import random_value
from randcheck.result import Failure, Result, Success
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
from randcheck.values import VBit, VInteger, VRecord, VSeq, VTuple, VWord, Value, finite_seq_map


__all__: list[str] = [
    "ExhaustivePlan",
    "dumpable_exhaustive_type",
    "iter_type_values",
    "split_fun_type",
    "testable_type",
    "type_size",
    "type_values",
]


def type_size(ty: TypeDescriptor) -> int | None:
    """Number of inhabitants of ``ty``, or ``None`` when unbounded or unknown."""
    match ty:
        case TBit():
            return 2
        case TIntMod(modulus=m):
            return m
        case TWord(width=w):
            return 2**w
        case TSeq(length=n, element=el):
            el_size = type_size(el)
            return None if el_size is None else el_size**n
        case TTuple(elements=els):
            return _product_size([type_size(el) for el in els])
        case TRecord(fields=fs):
            return _product_size([type_size(t) for _, t in fs])
        case TInteger() | TRational() | TFloat() | TArray() | TStream() | TFun() | TAbstract():
            return None
        case _:
            assert_never(ty)


def _product_size(sizes: list[int | None]) -> int | None:
    known = [s for s in sizes if s is not None]
    return prod(known) if len(known) == len(sizes) else None


def _cross(types: list[TypeDescriptor]) -> Iterator[tuple[Value, ...]]:
    """Lazy cartesian product; the first type varies slowest.

    Works as an odometer over one iterator per position, so neither the
    recursion depth nor the memory grows with the number of positions.
    """
    iterators = [iter_type_values(t) for t in types]
    current: list[Value] = []
    for it in iterators:
        first = next(it, None)
        if first is None:
            return
        current.append(first)
    while True:
        yield tuple(current)
        position = len(types) - 1
        while position >= 0:
            following = next(iterators[position], None)
            if following is not None:
                current[position] = following
                break
            # wrap this wheel and carry into the one to its left
            iterators[position] = iter_type_values(types[position])
            current[position] = next(iterators[position])
            position -= 1
        if position < 0:
            return


def iter_type_values(ty: TypeDescriptor) -> Iterator[Value]:
    """Lazily yield every inhabitant of ``ty``; nothing when the size is unknown."""
    if type_size(ty) is None:
        return
    match ty:
        case TBit():
            yield VBit(False)
            yield VBit(True)
        case TIntMod(modulus=m):
            yield from (VInteger(i) for i in range(m))
        case TWord(width=w):
            yield from (VWord(w, bits) for bits in range(2**w))
        case TSeq(length=n, element=el):
            for xs in _cross([el] * n):
                yield VSeq(length=n, elements=finite_seq_map(list(xs)))
        case TTuple(elements=els):
            for xs in _cross(list(els)):
                yield VTuple(elements=tuple(Eval.ready(x) for x in xs))
        case TRecord():
            canonical = ty.canonical_fields()
            names = [name for name, _ in canonical]
            for xs in _cross([t for _, t in canonical]):
                by_name = dict(zip(names, xs))
                yield VRecord(
                    fields=tuple((name, Eval.ready(by_name[name])) for name in ty.field_names())
                )
        case TInteger() | TRational() | TFloat() | TArray() | TStream() | TFun() | TAbstract():
            return
        case _:
            assert_never(ty)


def type_values(ty: TypeDescriptor) -> list[Value]:
    """Every inhabitant of ``ty`` exactly once; ``[]`` when the size is unknown."""
    return list(iter_type_values(ty))


@dataclass(frozen=True)
class ExhaustivePlan:
    """All argument combinations of a finite-domain function.

    Attributes:
        total: Number of combinations (product of argument cardinalities).
        arg_types: Argument types in order.
    """

    total: int
    arg_types: tuple[TypeDescriptor, ...]

    def arg_lists(self) -> Iterator[tuple[Value, ...]]:
        """One argument list per combination, first argument slowest."""
        return _cross(list(self.arg_types))


def split_fun_type(ty: TypeDescriptor) -> tuple[list[TypeDescriptor], TypeDescriptor]:
    """Split ``T1 -> ... -> Tn -> R`` into ``[T1, ..., Tn]`` and ``R``."""
    args: list[TypeDescriptor] = []
    current = ty
    while isinstance(current, TFun):
        args.append(current.arg)
        current = current.result
    return args, current


def _plan(arg_types: list[TypeDescriptor]) -> Result[ExhaustivePlan, NotTestable]:
    sizes = [type_size(t) for t in arg_types]
    unbounded = next((t for t, s in zip(arg_types, sizes) if s is None), None)
    if unbounded is not None:
        return Failure(NotTestable(reason="unbounded", type_name=show_type(unbounded)))
    total = prod(s for s in sizes if s is not None)
    return Success(ExhaustivePlan(total=total, arg_types=tuple(arg_types)))


def testable_type(ty: TypeDescriptor) -> Result[ExhaustivePlan, NotTestable]:
    """Plan an exhaustive check of a property ``T1 -> ... -> Tn -> Bit``.

    Fails when the codomain is not ``Bit`` or when any argument type has no
    known finite cardinality.
    """
    args, codomain = split_fun_type(ty)
    if not isinstance(codomain, TBit):
        return Failure(NotTestable(reason="codomain", type_name=show_type(codomain)))
    return _plan(args)


def dumpable_exhaustive_type(
    ty: TypeDescriptor,
) -> Result[ExhaustivePlan, NotTestable | UnsupportedType]:
    """Relaxed :func:`testable_type`: any codomain that has a generator is allowed."""
    args, codomain = split_fun_type(ty)
    match random_value(codomain):
        case Failure(error):
            return Failure(error)
        case Success(_):
            plan: Result[ExhaustivePlan, NotTestable | UnsupportedType] = _plan(args)
            return plan
