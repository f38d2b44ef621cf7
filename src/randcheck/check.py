# src/randcheck/check.py
"""
Checking a property end to end.

:func:`check_property` picks a strategy for a property of type
``T1 -> ... -> Tn -> Bit``:

* **exhaustive** - when every argument type is finite and the whole domain
  fits in ``number_of_tests``, every combination is tried once;
* **random** - otherwise ``number_of_tests`` random argument lists are drawn
  with the usual growing size schedule.

Either way the run goes through :func:`randcheck.driver.run_tests`, so the
reporting and fail-fast behaviour is identical.

Example::

    match build_check_config(number_of_tests=500, seed=7):
        case Success(config):
            outcome = check_property(prop_fn, fun_type(TWord(8), TBit()), "prop", config)
        case Failure(error):
            ...
"""

from __future__ import annotations

from typing import Annotated, Iterator

from pydantic import BaseModel, ConfigDict, Field

from randcheck.driver import TestReport, TestSpec, run_tests
from randcheck.errors import CheckError, InvalidCheckConfig, UnsupportedType
from randcheck.evaluator import TestResult, TraceEntry, eval_test, return_tests, run_one_test
from randcheck.exhaustive import ExhaustivePlan, split_fun_type, testable_type, type_size
from randcheck.generators import dumpable_type, testable_type_generators
from randcheck.reporting import LoggingReporter, TestReporter
from randcheck.result import Failure, Result, Success
from randcheck.rng import RNGState, seed_rng
from randcheck.types import TypeDescriptor
from randcheck.validation import validate_model
from randcheck.values import Value


__all__: list[str] = [
    "CheckConfig",
    "build_check_config",
    "check_property",
    "domain_size",
    "dump_property",
]


class CheckConfig(BaseModel):
    """Validated settings for a property check.

    Attributes
    ----------
    number_of_tests
        Random tests to run, and the largest domain tested exhaustively.
    seed
        Seed of the initial RNG state.
    exhaustive
        Whether small finite domains are enumerated instead of sampled.
    """

    number_of_tests: Annotated[int, Field(gt=0, description="Tests per property")] = 100
    seed: Annotated[int, Field(ge=0, description="Seed for the initial RNG state")] = 0
    exhaustive: bool = True

    model_config = ConfigDict(frozen=True, extra="forbid")


def build_check_config(**settings: object) -> Result[CheckConfig, InvalidCheckConfig]:
    """Create a CheckConfig via pure validation."""
    match validate_model(CheckConfig, **settings):
        case Failure(error):
            return Failure(InvalidCheckConfig(error=error))
        case Success(config):
            return Success(config)


def domain_size(ty: TypeDescriptor) -> int | None:
    """Number of distinct argument lists of a function type, ``None`` if unbounded."""
    args, _ = split_fun_type(ty)
    total = 1
    for arg in args:
        size = type_size(arg)
        if size is None:
            return None
        total *= size
    return total


def _run_exhaustive(
    fun: Value, plan: ExhaustivePlan, prop: str, reporter: TestReporter
) -> TestReport:
    def test_fn(
        size: int, remaining: Iterator[tuple[Value, ...]]
    ) -> tuple[TestResult, Iterator[tuple[Value, ...]]]:
        return eval_test(fun, next(remaining)), remaining

    spec = TestSpec(
        test_fn=test_fn, prop=prop, total=plan.total, possible=plan.total, reporter=reporter
    )
    return run_tests(spec, plan.arg_lists())


def check_property(
    fun: Value,
    ty: TypeDescriptor,
    prop: str,
    config: CheckConfig,
    reporter: TestReporter | None = None,
    state: RNGState | None = None,
) -> Result[TestReport, CheckError]:
    """Check ``fun`` of type ``ty`` exhaustively or randomly.

    Args:
        fun: The property as a (curried) function value.
        ty: Its type, ``T1 -> ... -> Tn -> Bit``.
        prop: Text of the property, used in reports.
        config: Test count, seed and exhaustive-mode switch.
        reporter: Defaults to a :class:`LoggingReporter`.
        state: Initial RNG state; derived from ``config.seed`` when omitted.

    Returns:
        Success(report) for any completed run, passing or not; Failure when
        the type cannot be tested at all.
    """
    active = reporter if reporter is not None else LoggingReporter(prop)
    if config.exhaustive:
        match testable_type(ty):
            case Success(plan) if plan.total <= config.number_of_tests:
                return Success(_run_exhaustive(fun, plan, prop, active))
            case _:
                pass

    match testable_type_generators(ty):
        case Failure(error):
            return Failure(error)
        case Success(gens):

            def test_fn(size: int, rng: RNGState) -> tuple[TestResult, RNGState]:
                return run_one_test(fun, gens, size, rng)

            spec = TestSpec(
                test_fn=test_fn,
                prop=prop,
                total=config.number_of_tests,
                possible=domain_size(ty),
                reporter=active,
            )
            return Success(run_tests(spec, state if state is not None else seed_rng(config.seed)))


def dump_property(
    fun: Value, ty: TypeDescriptor, config: CheckConfig, state: RNGState | None = None
) -> Result[list[TraceEntry], UnsupportedType]:
    """Record ``config.number_of_tests`` random argument/result pairs of ``fun``."""
    return dumpable_type(ty).map(
        lambda gens: return_tests(
            state if state is not None else seed_rng(config.seed), gens, fun, config.number_of_tests
        )
    )
