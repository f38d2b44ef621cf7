# tests/test_backend.py
"""
Tests for the concrete backend, float rounding and value rendering.

Float rounding is checked against numpy's IEEE single and double precision
arithmetic for the formats they share.
"""

from __future__ import annotations

from fractions import Fraction

import numpy as np
import pytest

from randcheck.backend import CONCRETE, PPOpts, pp_value, round_to_float
from randcheck.evaluation import DivideByZero, Eval, InvalidIndex, UserError, force_all
from randcheck.values import (
    FiniteSeqMap,
    UnfoldSeqMap,
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
    finite_seq_map,
)


class TestRoundToFloat:
    """Round-to-nearest-even into arbitrary formats."""

    def test_single_precision_third(self) -> None:
        expected = Fraction(float(np.float32(1) / np.float32(3)))
        assert round_to_float(8, 24, Fraction(1, 3)).value == expected

    def test_double_precision_tenth(self) -> None:
        assert round_to_float(11, 53, Fraction(1, 10)).value == Fraction(0.1)

    @pytest.mark.parametrize("value", [0.1, -2.5e-3, 1e20, 7.000001])
    def test_matches_numpy_float32(self, value: float) -> None:
        expected = Fraction(float(np.float32(value)))
        assert round_to_float(8, 24, Fraction(value)).value == expected

    def test_zero(self) -> None:
        assert round_to_float(8, 24, Fraction(0)) == VFloat(8, 24, Fraction(0))

    def test_ties_to_even(self) -> None:
        assert round_to_float(8, 2, Fraction(5, 4)).value == 1
        assert round_to_float(8, 2, Fraction(7, 4)).value == 2

    def test_overflow_to_infinity(self) -> None:
        assert round_to_float(2, 2, Fraction(4)).special == "inf"
        assert round_to_float(2, 2, Fraction(-4)).special == "-inf"
        assert round_to_float(2, 2, Fraction(3)) == VFloat(2, 2, Fraction(3))

    def test_single_precision_overflow(self) -> None:
        assert round_to_float(8, 24, Fraction(2**128)).special == "inf"
        largest = Fraction(float(np.finfo(np.float32).max))
        assert round_to_float(8, 24, largest) == VFloat(8, 24, largest)

    def test_subnormals(self) -> None:
        tiny = Fraction(1, 2**149)
        assert round_to_float(8, 24, tiny).value == tiny
        assert round_to_float(8, 24, Fraction(3, 2**151)).value == tiny
        assert round_to_float(8, 24, Fraction(1, 2**150)) == VFloat(8, 24, Fraction(0))

    def test_negative_underflow_keeps_sign(self) -> None:
        assert round_to_float(2, 2, Fraction(-1, 256)) == VFloat(2, 2, Fraction(0), "-0")
        assert round_to_float(8, 24, Fraction(-1, 2**150)).special == "-0"

    @pytest.mark.timeout(10)
    def test_wide_exponent_matches_narrow_format(self) -> None:
        expected = Fraction(float(np.float32(1) / np.float32(3)))
        assert round_to_float(40, 24, Fraction(1, 3)).value == expected
        assert round_to_float(64, 53, Fraction(1, 10)).value == Fraction(0.1)

    @pytest.mark.timeout(10)
    def test_wide_exponent_overflow(self) -> None:
        assert round_to_float(40, 24, Fraction(2) ** 600) == VFloat(40, 24, Fraction(2) ** 600)
        assert round_to_float(12, 53, -Fraction(2) ** 5000).special == "-inf"


class TestConcreteBackend:
    def test_literals(self) -> None:
        assert CONCRETE.bit_lit(True).force() == VBit(True)
        assert CONCRETE.integer_lit(-3).force() == VInteger(-3)
        assert CONCRETE.rational_lit(1, 2).force() == VRational(1, 2)
        assert CONCRETE.word_lit(4, 9).force() == VWord(4, 9)

    def test_float_literal_is_deferred(self) -> None:
        ev = CONCRETE.float_lit(8, 24, Fraction(1, 3))
        assert not ev.is_ready()
        value = ev.force()
        assert isinstance(value, VFloat)
        assert ev.is_ready()

    def test_value_invariants(self) -> None:
        with pytest.raises(ValueError):
            VWord(4, 16)
        with pytest.raises(ValueError):
            VRational(1, 0)


class TestEval:
    """Memoizing thunks."""

    def test_forced_once(self) -> None:
        calls: list[int] = []

        def thunk() -> int:
            calls.append(1)
            return 7

        ev = Eval(thunk)
        assert (ev.force(), ev.force()) == (7, 7)
        assert calls == [1]

    def test_errors_not_memoized(self) -> None:
        calls: list[int] = []

        def thunk() -> int:
            calls.append(1)
            raise DivideByZero("division by zero")

        ev = Eval(thunk)
        for _ in range(2):
            with pytest.raises(DivideByZero):
                ev.force()
        assert len(calls) == 2
        assert not ev.is_ready()

    def test_map_and_bind(self) -> None:
        ev = Eval.ready(3)
        assert ev.map(lambda x: x + 1).force() == 4
        assert ev.bind(lambda x: Eval.ready(x * 2)).force() == 6

    def test_force_all(self) -> None:
        assert force_all([Eval.ready(1), Eval(lambda: 2)]) == [1, 2]

    def test_describe(self) -> None:
        assert UserError().describe() == "UserError"
        assert InvalidIndex(3).describe() == "InvalidIndex: index 3 out of bounds"


def _boom() -> Value:
    raise DivideByZero("division by zero")


class TestPrettyPrint:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (VBit(True), "True"),
            (VInteger(-12), "-12"),
            (VRational(1, 3), "(ratio 1 3)"),
            (VWord(8, 255), "0xff"),
            (VWord(12, 5), "0x005"),
            (VWord(0, 0), "0x0"),
            (VFloat(8, 24, Fraction(3)), "3.0"),
            (VFloat(8, 24, Fraction(-1, 2)), "-1/2"),
            (VFloat(8, 24, Fraction(0), "inf"), "fpPosInf"),
            (VFloat(8, 24, Fraction(0), "-inf"), "fpNegInf"),
            (VFloat(2, 2, Fraction(0), "-0"), "-0.0"),
            (VFun(lambda arg: arg), "<function>"),
        ],
    )
    def test_scalars(self, value: Value, expected: str) -> None:
        assert pp_value(value) == expected

    @pytest.mark.parametrize(("base", "expected"), [(2, "0b0101"), (8, "0o05"), (10, "5")])
    def test_word_bases(self, base: int, expected: str) -> None:
        assert pp_value(VWord(4, 5), PPOpts(base=base)) == expected

    @pytest.mark.parametrize("settings", [{"base": 3}, {"base": 0}, {"inf_length": -1}])
    def test_invalid_options(self, settings: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            PPOpts(**settings)

    def test_composites(self) -> None:
        seq = VSeq(length=2, elements=finite_seq_map([VBit(True), VBit(False)]))
        tup = VTuple(elements=(Eval.ready(VInteger(1)), Eval.ready(VWord(1, 1))))
        rec = VRecord(fields=(("y", Eval.ready(VBit(True))), ("x", Eval.ready(seq))))
        assert pp_value(seq) == "[True, False]"
        assert pp_value(tup) == "(1, 0x1)"
        assert pp_value(rec) == "{y = True, x = [True, False]}"

    def test_stream_prefix(self) -> None:
        stream = VStream(
            elements=UnfoldSeqMap(lambda n: (Eval.ready(VInteger(n)), n + 1), 0)
        )
        assert pp_value(stream) == "[0, 1, 2, 3, 4, ...]"
        assert pp_value(stream, PPOpts(inf_length=2)) == "[0, 1, ...]"

    def test_failing_element_rendered_inline(self) -> None:
        seq = VSeq(length=2, elements=FiniteSeqMap((Eval.ready(VBit(True)), Eval(_boom))))
        assert pp_value(seq) == "[True, <DivideByZero: division by zero>]"


class TestValueEquality:
    """Finite values compare by content; streams and functions by identity."""

    def test_sequences_compare_elements(self) -> None:
        left = VSeq(length=2, elements=finite_seq_map([VBit(True), VBit(False)]))
        same = VSeq(length=2, elements=finite_seq_map([VBit(True), VBit(False)]))
        other = VSeq(length=2, elements=finite_seq_map([VBit(False), VBit(False)]))
        assert left == same and hash(left) == hash(same)
        assert left != other

    def test_tuple_handles_compare_forced_values(self) -> None:
        ready = VTuple(elements=(Eval.ready(VBit(True)),))
        deferred = VTuple(elements=(Eval(lambda: VBit(True)),))
        assert ready == deferred
        assert ready != VTuple(elements=(Eval.ready(VBit(False)),))

    def test_records_compare_fields(self) -> None:
        rec = VRecord(fields=(("x", Eval.ready(VInteger(1))),))
        assert rec == VRecord(fields=(("x", Eval(lambda: VInteger(1))),))
        assert rec != VRecord(fields=(("x", Eval.ready(VInteger(2))),))

    def test_forcing_failure_propagates(self) -> None:
        with pytest.raises(DivideByZero):
            _ = VTuple(elements=(Eval(_boom),)) == VTuple(elements=(Eval.ready(VBit(True)),))

    def test_streams_and_functions_by_identity(self) -> None:
        def unfold(n: int) -> tuple[Eval[Value], int]:
            return Eval.ready(VInteger(n)), n + 1

        stream = VStream(elements=UnfoldSeqMap(unfold, 0))
        assert stream == stream
        assert stream != VStream(elements=UnfoldSeqMap(unfold, 0))
        fn = VFun(lambda arg: arg)
        assert fn == fn
        assert fn != VFun(lambda arg: arg)
