# tests/helpers/__init__.py
"""Shared test utilities for the randcheck test suite.

Usage:
    >>> from tests.helpers import expect_success, lift_property, plain
    >>> gen = expect_success(random_value(TWord(8)))
    >>> prop = lift_property(lambda w: w.bits < 256, 1)
"""

from __future__ import annotations

from tests.helpers.factories import (
    constant_property,
    divide_by_zero_when_set,
    lift,
    lift_property,
    plain,
)
from tests.helpers.result_utils import E, T, expect_failure, expect_success

__all__ = [
    # Result unwrapping
    "expect_success",
    "expect_failure",
    "T",
    "E",
    # Function values
    "lift",
    "lift_property",
    "constant_property",
    "divide_by_zero_when_set",
    # Forcing
    "plain",
]
