# src/randcheck/rng.py
"""
Splittable, explicitly threaded pseudo-random state.

An :class:`RNGState` is an immutable 128-bit key.  Every operation takes a
state and returns its result together with a *new* state; nothing is ever
drawn from a global generator, so two equal states always produce equal
results.

Key derivation
--------------
All mixing is delegated to :class:`numpy.random.SeedSequence`, whose hash
gives well-distributed, independent output words for distinct inputs:

* a draw hashes the key with an empty spawn key and takes
  ``4 + k`` words - the first four become the next key, the remaining
  ``k`` are the output;
* :func:`split` hashes the key with spawn keys ``(0,)`` and ``(1,)``, so
  both children differ from each other and from the parent's draw stream.

Integers in :func:`next_in_range` may be arbitrarily large; they are built
from 32-bit words and rejection-sampled to stay exactly uniform.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import numpy as np

from randcheck.errors.config import InvalidRNGSnapshot
from randcheck.result import Failure, Result, Success


__all__: list[str] = [
    "RNGState",
    "seed_rng",
    "split",
    "next_bool",
    "next_in_range",
    "rng_to_bytes",
    "rng_from_bytes",
]

_KEY_WORDS: Final[int] = 4
_WORD_BITS: Final[int] = 32


@dataclass(frozen=True)
class RNGState:
    """Immutable 128-bit generator key stored as four unsigned 32-bit words."""

    key: tuple[int, int, int, int]

    def __post_init__(self) -> None:
        if len(self.key) != _KEY_WORDS or any(not 0 <= w < 2**_WORD_BITS for w in self.key):
            raise ValueError(f"RNG key must be {_KEY_WORDS} unsigned 32-bit words, got {self.key}")


def _from_words(words: np.ndarray) -> RNGState:
    w0, w1, w2, w3 = (int(w) for w in words[:_KEY_WORDS])
    return RNGState(key=(w0, w1, w2, w3))


def seed_rng(seed: int) -> RNGState:
    """Derive the initial state for a run from a non-negative integer seed."""
    if seed < 0:
        raise ValueError(f"seed must be non-negative, got {seed}")
    return _from_words(np.random.SeedSequence(seed).generate_state(_KEY_WORDS, dtype=np.uint32))


def _draw_words(state: RNGState, count: int) -> tuple[list[int], RNGState]:
    words = np.random.SeedSequence(list(state.key)).generate_state(
        _KEY_WORDS + count, dtype=np.uint32
    )
    return [int(w) for w in words[_KEY_WORDS:]], _from_words(words)


def split(state: RNGState) -> tuple[RNGState, RNGState]:
    """Produce two independent children of ``state``."""
    left, right = np.random.SeedSequence(list(state.key)).spawn(2)
    return (
        _from_words(left.generate_state(_KEY_WORDS, dtype=np.uint32)),
        _from_words(right.generate_state(_KEY_WORDS, dtype=np.uint32)),
    )


def next_bool(state: RNGState) -> tuple[bool, RNGState]:
    """Draw one uniformly random boolean."""
    (word,), next_state = _draw_words(state, 1)
    return bool(word & 1), next_state


def next_in_range(low: int, high: int, state: RNGState) -> tuple[int, RNGState]:
    """Draw an integer uniformly from the inclusive range ``[low, high]``.

    Raises:
        ValueError: If ``low > high``.
    """
    if low > high:
        raise ValueError(f"empty range [{low}, {high}]")
    span = high - low + 1
    bits = (span - 1).bit_length()
    n_words = max(1, -(-bits // _WORD_BITS))
    mask = (1 << bits) - 1
    current = state
    while True:
        words, current = _draw_words(current, n_words)
        candidate = 0
        for word in words:
            candidate = (candidate << _WORD_BITS) | word
        candidate &= mask
        if candidate < span:
            return low + candidate, current


def rng_to_bytes(state: RNGState) -> bytes:
    """Serialize ``state`` to 16 little-endian bytes."""
    return np.array(state.key, dtype="<u4").tobytes()


def rng_from_bytes(data: bytes) -> Result[RNGState, InvalidRNGSnapshot]:
    """Restore a state captured with :func:`rng_to_bytes`."""
    if len(data) != _KEY_WORDS * 4:
        return Failure(InvalidRNGSnapshot(length=len(data)))
    return Success(_from_words(np.frombuffer(data, dtype="<u4")))
