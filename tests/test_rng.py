# tests/test_rng.py
"""
Tests for the splittable RNG.

Focus areas:

1. **Determinism** - equal states give equal draws and successors.
2. **Independence** - split children differ from each other and the parent.
3. **Range adherence** for small, huge and degenerate ranges.
4. **Snapshots** round-trip through bytes.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from randcheck.errors import InvalidRNGSnapshot
from randcheck.rng import (
    RNGState,
    next_bool,
    next_in_range,
    rng_from_bytes,
    rng_to_bytes,
    seed_rng,
    split,
)
from tests.helpers import expect_failure, expect_success


def _draws(state: RNGState, count: int, low: int = 0, high: int = 2**32 - 1) -> list[int]:
    values: list[int] = []
    current = state
    for _ in range(count):
        value, current = next_in_range(low, high, current)
        values.append(value)
    return values


class TestSeeding:
    """Tests for seed derivation."""

    def test_same_seed_same_state(self) -> None:
        assert seed_rng(7) == seed_rng(7)

    def test_different_seeds_differ(self) -> None:
        assert seed_rng(7) != seed_rng(8)

    def test_negative_seed_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            seed_rng(-1)

    def test_state_is_frozen(self, rng: RNGState) -> None:
        with pytest.raises(FrozenInstanceError):
            setattr(rng, "key", (0, 0, 0, 0))

    def test_invalid_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="32-bit words"):
            RNGState(key=(0, 0, 0, 2**32))


class TestDraws:
    """Tests for next_bool and next_in_range."""

    def test_draw_is_deterministic(self, rng: RNGState) -> None:
        assert next_in_range(0, 1000, rng) == next_in_range(0, 1000, rng)
        assert next_bool(rng) == next_bool(rng)

    def test_draw_advances_state(self, rng: RNGState) -> None:
        _, next_state = next_in_range(0, 1000, rng)
        assert next_state != rng

    def test_values_within_small_range(self, rng: RNGState) -> None:
        values = _draws(rng, 200, low=-3, high=3)
        assert all(-3 <= v <= 3 for v in values)
        assert set(values) == set(range(-3, 4))

    def test_values_within_huge_range(self, rng: RNGState) -> None:
        bound = 256**120
        values = _draws(rng, 50, low=-bound, high=bound)
        assert all(-bound <= v <= bound for v in values)
        assert max(abs(v) for v in values) > 256**110

    def test_singleton_range(self, rng: RNGState) -> None:
        value, next_state = next_in_range(5, 5, rng)
        assert value == 5
        assert next_state != rng

    def test_empty_range_raises(self, rng: RNGState) -> None:
        with pytest.raises(ValueError, match="empty range"):
            next_in_range(1, 0, rng)

    def test_bools_take_both_values(self, rng: RNGState) -> None:
        seen: set[bool] = set()
        current = rng
        for _ in range(64):
            b, current = next_bool(current)
            seen.add(b)
        assert seen == {False, True}


class TestSplit:
    """Tests for split."""

    def test_children_differ(self, rng: RNGState) -> None:
        left, right = split(rng)
        assert left != right
        assert rng not in (left, right)

    def test_children_streams_disjoint(self, rng: RNGState) -> None:
        left, right = split(rng)
        assert _draws(left, 8) != _draws(right, 8)
        assert _draws(left, 8) != _draws(rng, 8)

    def test_split_is_deterministic(self, rng: RNGState) -> None:
        assert split(rng) == split(rng)


class TestSnapshots:
    """Tests for byte snapshots."""

    def test_round_trip(self, rng: RNGState) -> None:
        data = rng_to_bytes(rng)
        assert len(data) == 16
        assert expect_success(rng_from_bytes(data)) == rng

    def test_wrong_length_fails(self) -> None:
        error = expect_failure(rng_from_bytes(b"\x00" * 5))
        assert isinstance(error, InvalidRNGSnapshot)
        assert error.length == 5
