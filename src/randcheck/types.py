"""
Type descriptor ADTs.

A closed, recursive set of frozen dataclasses describing the shape of a
value.  Descriptors are built by the caller and only inspected here; every
consumer matches on them exhaustively and finishes with ``assert_never``.

Type Safety:
    - All descriptor types are frozen dataclasses (immutable)
    - Literal discriminators enable exhaustive pattern matching
    - __post_init__ validation prevents illegal descriptors
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Never


def assert_never(value: Never) -> Never:
    """Exhaustiveness check for ``match`` statements over closed unions."""
    raise AssertionError(f"Unhandled case: {value!r}")


@dataclass(frozen=True)
class TBit:
    """A single boolean."""

    kind: Literal["TBit"] = "TBit"


@dataclass(frozen=True)
class TInteger:
    """Unbounded integers."""

    kind: Literal["TInteger"] = "TInteger"


@dataclass(frozen=True)
class TRational:
    """Unbounded rationals."""

    kind: Literal["TRational"] = "TRational"


@dataclass(frozen=True)
class TIntMod:
    """Integers modulo ``modulus``."""

    modulus: int
    kind: Literal["TIntMod"] = "TIntMod"

    def __post_init__(self) -> None:
        if self.modulus <= 0:
            raise ValueError(f"modulus must be positive, got {self.modulus}")


@dataclass(frozen=True)
class TFloat:
    """Binary floating point with the given exponent and precision widths.

    ``precision_bits`` includes the implicit leading bit, so ``TFloat(8, 24)``
    is IEEE single precision.
    """

    exponent_bits: int
    precision_bits: int
    kind: Literal["TFloat"] = "TFloat"

    def __post_init__(self) -> None:
        if self.exponent_bits < 2 or self.precision_bits < 2:
            raise ValueError(
                "float widths must be at least 2, "
                f"got e={self.exponent_bits} p={self.precision_bits}"
            )


@dataclass(frozen=True)
class TArray:
    """Total maps from ``index`` to ``element``."""

    index: TypeDescriptor
    element: TypeDescriptor
    kind: Literal["TArray"] = "TArray"


@dataclass(frozen=True)
class TWord:
    """Fixed-width bit vector, read as an unsigned number."""

    width: int
    kind: Literal["TWord"] = "TWord"

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError(f"word width must be non-negative, got {self.width}")


@dataclass(frozen=True)
class TSeq:
    """Finite sequence of ``length`` elements."""

    length: int
    element: TypeDescriptor
    kind: Literal["TSeq"] = "TSeq"

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"sequence length must be non-negative, got {self.length}")


@dataclass(frozen=True)
class TStream:
    """Infinite sequence."""

    element: TypeDescriptor
    kind: Literal["TStream"] = "TStream"


@dataclass(frozen=True)
class TTuple:
    elements: tuple[TypeDescriptor, ...]
    kind: Literal["TTuple"] = "TTuple"


@dataclass(frozen=True)
class TRecord:
    """Record with fields in display (declaration) order.

    Generation and enumeration walk :meth:`canonical_fields` instead, which
    sorts by name so that two records with the same fields written in a
    different order consume randomness identically.
    """

    fields: tuple[tuple[str, TypeDescriptor], ...]
    kind: Literal["TRecord"] = "TRecord"

    def __post_init__(self) -> None:
        names = [name for name, _ in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate record field in {names}")

    def canonical_fields(self) -> tuple[tuple[str, TypeDescriptor], ...]:
        return tuple(sorted(self.fields, key=lambda field: field[0]))

    def field_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)


@dataclass(frozen=True)
class TFun:
    arg: TypeDescriptor
    result: TypeDescriptor
    kind: Literal["TFun"] = "TFun"


@dataclass(frozen=True)
class TAbstract:
    """Opaque user-declared type."""

    name: str = ""
    kind: Literal["TAbstract"] = "TAbstract"


TypeDescriptor = (
    TBit
    | TInteger
    | TRational
    | TIntMod
    | TFloat
    | TArray
    | TWord
    | TSeq
    | TStream
    | TTuple
    | TRecord
    | TFun
    | TAbstract
)


def fun_type(*types: TypeDescriptor) -> TypeDescriptor:
    """Build the curried function type ``t1 -> t2 -> ... -> tn``.

    Raises:
        ValueError: If no types are given.
    """
    if not types:
        raise ValueError("fun_type needs at least a result type")
    *args, result = types
    for arg in reversed(args):
        result = TFun(arg=arg, result=result)
    return result


def show_type(ty: TypeDescriptor) -> str:
    """Render a descriptor compactly, e.g. ``[8]``, ``Z 7`` or ``[inf]Bit -> Bit``."""
    match ty:
        case TBit():
            return "Bit"
        case TInteger():
            return "Integer"
        case TRational():
            return "Rational"
        case TIntMod(modulus=m):
            return f"Z {m}"
        case TFloat(exponent_bits=e, precision_bits=p):
            return f"Float {e} {p}"
        case TArray(index=i, element=el):
            return f"Array ({show_type(i)}) ({show_type(el)})"
        case TWord(width=w):
            return f"[{w}]"
        case TSeq(length=n, element=el):
            return f"[{n}]{show_type(el)}"
        case TStream(element=el):
            return f"[inf]{show_type(el)}"
        case TTuple(elements=els):
            return "(" + ", ".join(show_type(el) for el in els) + ")"
        case TRecord(fields=fs):
            return "{" + ", ".join(f"{name} : {show_type(t)}" for name, t in fs) + "}"
        case TFun(arg=a, result=r):
            left = f"({show_type(a)})" if isinstance(a, TFun) else show_type(a)
            return f"{left} -> {show_type(r)}"
        case TAbstract(name=name):
            return name or "<abstract>"
        case _:
            assert_never(ty)


__all__ = [
    "TAbstract",
    "TArray",
    "TBit",
    "TFloat",
    "TFun",
    "TIntMod",
    "TInteger",
    "TRational",
    "TRecord",
    "TSeq",
    "TStream",
    "TTuple",
    "TWord",
    "TypeDescriptor",
    "assert_never",
    "fun_type",
    "show_type",
]
