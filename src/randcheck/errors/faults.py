"""Internal-consistency faults.

These signal that a caller handed the evaluator a function whose arity or
result type does not match the generated arguments.  They are programming
errors of the caller, so they are raised and never converted into a
``TestResult``.
"""

from __future__ import annotations

from typing import Literal


FaultKind = Literal["too_few_arguments", "too_many_arguments", "not_a_bit"]


class InternalConsistencyFault(RuntimeError):
    """A generated argument list does not fit the function it is applied to."""

    def __init__(self, fault: FaultKind, location: str, details: tuple[str, ...] = ()) -> None:
        self.fault = fault
        self.location = location
        self.details = details
        lines = [f"[{location}] {fault.replace('_', ' ')}", *details]
        super().__init__("\n".join(lines))


__all__ = ["FaultKind", "InternalConsistencyFault"]
