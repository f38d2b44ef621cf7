"""
Applying properties to generated arguments.

:func:`eval_test` is the judging step: it applies a function value to its
arguments one at a time and classifies the outcome.  Runtime faults of the
program under test (:class:`~randcheck.evaluation.EvalError`) become
``FailError`` results; an arity or result-type mismatch is a caller bug and
raises :class:`~randcheck.errors.faults.InternalConsistencyFault`.

:func:`run_one_test` and :func:`return_tests` add argument generation on
top, for the judging and the trace (dump) modes respectively.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from randcheck.backend import pp_value
from randcheck.errors.faults import InternalConsistencyFault
from randcheck.evaluation import Eval, EvalError, force_all
from randcheck.generators import Generator, size_schedule
from randcheck.rng import RNGState
from randcheck.values import VBit, VFun, Value


__all__: list[str] = [
    "FailError",
    "FailFalse",
    "Pass",
    "TestResult",
    "TraceEntry",
    "apply_curried",
    "draw_arguments",
    "eval_test",
    "is_pass",
    "return_one_test",
    "return_tests",
    "run_one_test",
]

_LOCATION = "randcheck.evaluator"


@dataclass(frozen=True)
class Pass:
    kind: Literal["Pass"] = "Pass"


@dataclass(frozen=True)
class FailFalse:
    """The property returned ``False`` for ``arguments``."""

    arguments: tuple[Value, ...]
    kind: Literal["FailFalse"] = "FailFalse"


@dataclass(frozen=True)
class FailError:
    """Forcing the property raised ``error`` for ``arguments``."""

    error: EvalError
    arguments: tuple[Value, ...]
    kind: Literal["FailError"] = "FailError"


TestResult = Pass | FailFalse | FailError


def is_pass(result: TestResult) -> bool:
    return isinstance(result, Pass)


def _diagnostic(fun: Value, args: Sequence[Value]) -> tuple[str, ...]:
    return ("Function:", pp_value(fun), "Arguments:", *(pp_value(a) for a in args))


def apply_curried(fun: Value, args: Sequence[Value]) -> Value:
    """Apply ``fun`` to ``args`` one at a time and force the final value.

    Raises:
        EvalError: When forcing any intermediate or final value fails.
        InternalConsistencyFault: When ``fun`` takes more arguments than
            given (or its result is still a function), or fewer.
    """
    current = fun
    for position, arg in enumerate(args):
        match current:
            case VFun():
                current = current.apply(Eval.ready(arg)).force()
            case _:
                raise InternalConsistencyFault(
                    "too_many_arguments", _LOCATION, _diagnostic(current, args[position:])
                )
    if isinstance(current, VFun):
        raise InternalConsistencyFault("too_few_arguments", _LOCATION, _diagnostic(fun, args))
    return current


def eval_test(fun: Value, args: Sequence[Value]) -> TestResult:
    """Apply a property to ``args`` and classify the outcome."""
    arguments = tuple(args)
    try:
        outcome = apply_curried(fun, arguments)
    except EvalError as exc:
        return FailError(error=exc, arguments=arguments)
    match outcome:
        case VBit(value=True):
            return Pass()
        case VBit(value=False):
            return FailFalse(arguments=arguments)
        case _:
            raise InternalConsistencyFault(
                "not_a_bit", _LOCATION, ("Result:", pp_value(outcome), *_diagnostic(fun, arguments))
            )


def draw_arguments(
    gens: Sequence[Generator], size: int, state: RNGState
) -> tuple[list[Eval[Value]], RNGState]:
    """Draw one argument per generator.

    The state is threaded from the *last* generator to the first, while the
    returned list keeps argument order.
    """
    drawn: list[Eval[Value]] = []
    current = state
    for gen in reversed(gens):
        arg, current = gen(size, current)
        drawn.append(arg)
    drawn.reverse()
    return drawn, current


def run_one_test(
    fun: Value, gens: Sequence[Generator], size: int, state: RNGState
) -> tuple[TestResult, RNGState]:
    """Generate arguments at ``size``, apply ``fun`` and judge the result."""
    args, next_state = draw_arguments(gens, size, state)
    return eval_test(fun, force_all(args)), next_state


@dataclass(frozen=True)
class TraceEntry:
    """One row of a dump run."""

    arguments: tuple[Value, ...]
    result: Value


def return_one_test(
    fun: Value, gens: Sequence[Generator], size: int, state: RNGState
) -> tuple[tuple[Value, ...], Value, RNGState]:
    """Generate arguments and compute ``fun``'s result without judging it.

    Runtime faults raised by ``fun`` propagate as :class:`EvalError`.
    """
    args, next_state = draw_arguments(gens, size, state)
    forced = tuple(force_all(args))
    return forced, apply_curried(fun, forced), next_state


def return_tests(
    state: RNGState, gens: Sequence[Generator], fun: Value, num: int
) -> list[TraceEntry]:
    """Compute ``num`` argument/result pairs with the usual size schedule."""
    entries: list[TraceEntry] = []
    current = state
    for index in range(num):
        args, result, current = return_one_test(fun, gens, size_schedule(index, num), current)
        entries.append(TraceEntry(arguments=args, result=result))
    return entries
