"""
randcheck - type-directed random testing.

Re-exports the public surface for single-import access:

* type and value ADTs (:mod:`randcheck.types`, :mod:`randcheck.values`);
* the generator engine and exhaustive enumerator;
* the evaluator, driver, reporters and the :func:`check_property` entry point.
"""

from __future__ import annotations

from randcheck.backend import CONCRETE, ConcreteBackend, PPOpts, pp_value
from randcheck.check import (
    CheckConfig,
    build_check_config,
    check_property,
    domain_size,
    dump_property,
)
from randcheck.driver import TestReport, TestSpec, run_tests
from randcheck.evaluation import DivideByZero, Eval, EvalError, UserError
from randcheck.evaluator import (
    FailError,
    FailFalse,
    Pass,
    TestResult,
    TraceEntry,
    eval_test,
    return_tests,
    run_one_test,
)
from randcheck.exhaustive import ExhaustivePlan, testable_type, type_size, type_values
from randcheck.generators import (
    Generator,
    dumpable_type,
    random_value,
    testable_type_generators,
)
from randcheck.reporting import LoggingReporter, NullReporter, RecordingReporter, TestReporter
from randcheck.result import Failure, Result, Success
from randcheck.rng import RNGState, seed_rng, split
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
    fun_type,
)
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


__all__ = [
    # Types
    "TypeDescriptor",
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
    "fun_type",
    # Values
    "Value",
    "VBit",
    "VFloat",
    "VFun",
    "VInteger",
    "VRational",
    "VRecord",
    "VSeq",
    "VStream",
    "VTuple",
    "VWord",
    # Evaluation
    "Eval",
    "EvalError",
    "DivideByZero",
    "UserError",
    "CONCRETE",
    "ConcreteBackend",
    "PPOpts",
    "pp_value",
    # RNG
    "RNGState",
    "seed_rng",
    "split",
    # Generation and enumeration
    "Generator",
    "random_value",
    "testable_type_generators",
    "dumpable_type",
    "ExhaustivePlan",
    "testable_type",
    "type_size",
    "type_values",
    # Judging and driving
    "TestResult",
    "Pass",
    "FailFalse",
    "FailError",
    "TraceEntry",
    "eval_test",
    "run_one_test",
    "return_tests",
    "TestSpec",
    "TestReport",
    "run_tests",
    "TestReporter",
    "LoggingReporter",
    "NullReporter",
    "RecordingReporter",
    # Entry points
    "CheckConfig",
    "build_check_config",
    "check_property",
    "domain_size",
    "dump_property",
    # Results
    "Result",
    "Success",
    "Failure",
]
