# src/randcheck/backend.py
"""
Concrete evaluation backend.

The generator engine never builds values directly; it asks a
:class:`Backend` for literals, which come back as deferred
:class:`~randcheck.evaluation.Eval` handles.  :class:`ConcreteBackend` is the
only implementation: it evaluates eagerly-computable literals and rounds
rationals into arbitrary ``Float e p`` formats.

The module also provides :func:`pp_value`, the diagnostic renderer used for
counterexamples and internal-consistency faults.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Final, Literal, Protocol

from randcheck.evaluation import Eval, EvalError
from randcheck.types import assert_never
from randcheck.values import (
    VBit,
    VFloat,
    VFun,
    VInteger,
    VRational,
    VRecord,
    VSeq,
    VStream,
    VTuple,
    VWord,
    Value,
)


__all__: list[str] = [
    "Backend",
    "CONCRETE",
    "ConcreteBackend",
    "PPOpts",
    "pp_value",
    "round_to_float",
]


class Backend(Protocol):
    """Literal construction in an evaluation context."""

    def bit_lit(self, value: bool) -> Eval[Value]:
        ...

    def integer_lit(self, value: int) -> Eval[Value]:
        ...

    def rational_lit(self, numerator: int, denominator: int) -> Eval[Value]:
        ...

    def word_lit(self, width: int, bits: int) -> Eval[Value]:
        ...

    def float_lit(self, exponent_bits: int, precision_bits: int, value: Fraction) -> Eval[Value]:
        ...


def round_to_float(exponent_bits: int, precision_bits: int, value: Fraction) -> VFloat:
    """Round ``value`` to nearest-even in the ``Float exponent_bits precision_bits`` format.

    Values below the normal range become subnormals; negative values that
    round to zero become ``-0``.  Overflow to infinity is decided from the
    binary exponent and the rounded significand.
    """
    if value == 0:
        return VFloat(exponent_bits, precision_bits, Fraction(0))
    emax = 2 ** (exponent_bits - 1) - 1
    emin = 1 - emax
    magnitude = abs(value)
    negative = value < 0
    infinity: Literal["inf", "-inf"] = "-inf" if negative else "inf"

    exponent = magnitude.numerator.bit_length() - magnitude.denominator.bit_length()
    if magnitude < Fraction(2) ** exponent:
        exponent -= 1
    if exponent > emax:
        return VFloat(exponent_bits, precision_bits, Fraction(0), infinity)
    exponent = max(exponent, emin)

    ulp = Fraction(2) ** (exponent - (precision_bits - 1))
    significand = round(magnitude / ulp)
    # rounding up may carry into the next binade
    if exponent == emax and significand >= 2**precision_bits:
        return VFloat(exponent_bits, precision_bits, Fraction(0), infinity)
    if significand == 0:
        return VFloat(exponent_bits, precision_bits, Fraction(0), "-0" if negative else "finite")
    rounded = significand * ulp
    return VFloat(exponent_bits, precision_bits, -rounded if negative else rounded)


class ConcreteBackend:
    """Backend whose literals are ready as soon as they are built."""

    def bit_lit(self, value: bool) -> Eval[Value]:
        return Eval.ready(VBit(value))

    def integer_lit(self, value: int) -> Eval[Value]:
        return Eval.ready(VInteger(value))

    def rational_lit(self, numerator: int, denominator: int) -> Eval[Value]:
        return Eval.ready(VRational(numerator, denominator))

    def word_lit(self, width: int, bits: int) -> Eval[Value]:
        return Eval.ready(VWord(width, bits))

    def float_lit(self, exponent_bits: int, precision_bits: int, value: Fraction) -> Eval[Value]:
        return Eval(lambda: round_to_float(exponent_bits, precision_bits, value))


CONCRETE: Final[ConcreteBackend] = ConcreteBackend()


_DIGITS: Final[str] = "0123456789abcdef"
_PREFIX: Final[dict[int, str]] = {2: "0b", 8: "0o", 10: "", 16: "0x"}


@dataclass(frozen=True)
class PPOpts:
    """Rendering options.

    Attributes:
        inf_length: Number of leading stream elements shown.
        base: Radix for words (2, 8, 10 or 16).
    """

    inf_length: int = 5
    base: int = 16

    def __post_init__(self) -> None:
        if self.base not in _PREFIX:
            raise ValueError(f"base must be one of 2, 8, 10 or 16, got {self.base}")
        if self.inf_length < 0:
            raise ValueError(f"inf_length must be non-negative, got {self.inf_length}")


def _pp_word(width: int, bits: int, base: int) -> str:
    if base == 10:
        return str(bits)
    per_digit = {2: 1, 8: 3, 16: 4}[base]
    n_digits = max(1, -(-width // per_digit))
    digits = []
    for _ in range(n_digits):
        bits, digit = divmod(bits, base)
        digits.append(_DIGITS[digit])
    return _PREFIX[base] + "".join(reversed(digits))


def _pp_float(v: VFloat) -> str:
    match v.special:
        case "inf":
            return "fpPosInf"
        case "-inf":
            return "fpNegInf"
        case "-0":
            return "-0.0"
        case "finite":
            return str(v.value) if v.value.denominator != 1 else f"{v.value.numerator}.0"
        case _:
            assert_never(v.special)


def _pp_forced(ev: Eval[Value], opts: PPOpts) -> str:
    try:
        return pp_value(ev.force(), opts)
    except EvalError as exc:
        return f"<{exc.describe()}>"


def pp_value(value: Value, opts: PPOpts | None = None) -> str:
    """Render ``value`` for diagnostics, forcing nested elements as needed.

    Elements whose forcing fails render as ``<fault description>`` instead of
    aborting the whole rendering.
    """
    o = opts or PPOpts()
    match value:
        case VBit(value=b):
            return "True" if b else "False"
        case VInteger(value=i):
            return str(i)
        case VRational(numerator=n, denominator=d):
            return f"(ratio {n} {d})"
        case VFloat():
            return _pp_float(value)
        case VWord(width=w, bits=bits):
            return _pp_word(w, bits, o.base)
        case VSeq(length=n):
            return "[" + ", ".join(_pp_forced(value.element(i), o) for i in range(n)) + "]"
        case VStream():
            shown = [_pp_forced(value.element(i), o) for i in range(o.inf_length)]
            return "[" + ", ".join([*shown, "..."]) + "]"
        case VTuple(elements=els):
            return "(" + ", ".join(_pp_forced(el, o) for el in els) + ")"
        case VRecord(fields=fs):
            return "{" + ", ".join(f"{name} = {_pp_forced(ev, o)}" for name, ev in fs) + "}"
        case VFun():
            return "<function>"
        case _:
            assert_never(value)
