# src/randcheck/driver.py
"""
Fail-fast test driver.

A run is a small state machine::

    DriverRunning(0) --Pass--> DriverRunning(1) --Pass--> ... --> DriverPassed
          |                          |
          +--------- not Pass -------+-------------------------> DriverFailed

Each step reports progress, runs one test through ``TestSpec.test_fn`` with
the scheduled size, clears the progress report and transitions.  The first
non-passing result is terminal: the failure hook fires once and no further
tests run.  The driver owns no formatting; everything user-visible goes
through the injected :class:`~randcheck.reporting.TestReporter`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Literal, TypeVar

from randcheck.evaluator import Pass, TestResult
from randcheck.generators import size_schedule
from randcheck.reporting import LogMessage, TestReporter, emit_log
from randcheck.types import assert_never


__all__: list[str] = [
    "DriverFailed",
    "DriverPassed",
    "DriverRunning",
    "DriverState",
    "TestReport",
    "TestSpec",
    "run_tests",
    "step",
]

S = TypeVar("S")


@dataclass(frozen=True)
class TestSpec(Generic[S]):
    """Everything the driver needs for one run.

    Attributes:
        test_fn: Runs one test at the given size from the given state and
            returns the result with the next state.
        prop: The property as the user wrote it.
        total: Number of tests to run.
        possible: Size of the input domain, ``None`` when unbounded.
        reporter: Receives progress, failure and success callbacks.
    """

    __test__ = False

    test_fn: Callable[[int, S], tuple[TestResult, S]]
    prop: str
    total: int
    possible: int | None
    reporter: TestReporter

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError(f"total must be non-negative, got {self.total}")


@dataclass(frozen=True)
class TestReport:
    """Outcome of a run.

    ``tests_run`` counts the tests that passed before the run ended.
    """

    __test__ = False

    result: TestResult
    prop: str
    tests_run: int
    tests_possible: int | None

    def passed(self) -> bool:
        return isinstance(self.result, Pass)


@dataclass(frozen=True)
class DriverRunning:
    completed: int
    kind: Literal["DriverRunning"] = "DriverRunning"


@dataclass(frozen=True)
class DriverPassed:
    kind: Literal["DriverPassed"] = "DriverPassed"


@dataclass(frozen=True)
class DriverFailed:
    result: TestResult
    completed: int
    kind: Literal["DriverFailed"] = "DriverFailed"


DriverState = DriverRunning | DriverPassed | DriverFailed


def step(spec: TestSpec[S], state: DriverRunning, rng: S) -> tuple[DriverState, S]:
    """Run the next test of ``spec`` and return the successor state."""
    if state.completed >= spec.total:
        return DriverPassed(), rng
    spec.reporter.report_progress(state.completed, spec.total)
    result, next_rng = spec.test_fn(size_schedule(state.completed, spec.total), rng)
    spec.reporter.clear_progress()
    match result:
        case Pass():
            completed = state.completed + 1
            if completed >= spec.total:
                return DriverPassed(), next_rng
            return DriverRunning(completed), next_rng
        case _:
            return DriverFailed(result=result, completed=state.completed), next_rng


def run_tests(spec: TestSpec[S], initial: S) -> TestReport:
    """Drive ``spec`` to completion or to its first failure."""
    emit_log(LogMessage(level="debug", message=f"checking {spec.prop} with {spec.total} tests"))
    current: DriverState = DriverRunning(0)
    rng = initial
    while isinstance(current, DriverRunning):
        current, rng = step(spec, current, rng)
    match current:
        case DriverPassed():
            spec.reporter.report_success()
            return TestReport(Pass(), spec.prop, spec.total, spec.possible)
        case DriverFailed(result=result, completed=completed):
            spec.reporter.report_failure(result)
            return TestReport(result, spec.prop, completed, spec.possible)
        case _:
            assert_never(current)
