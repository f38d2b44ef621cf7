"""randcheck error ADTs."""

from randcheck.errors.config import InvalidCheckConfig, InvalidRNGSnapshot
from randcheck.errors.faults import FaultKind, InternalConsistencyFault
from randcheck.errors.generation import GenerationError, NotTestable, UnsupportedType

CheckError = UnsupportedType | NotTestable

__all__ = [
    "CheckError",
    "FaultKind",
    "GenerationError",
    "InternalConsistencyFault",
    "InvalidCheckConfig",
    "InvalidRNGSnapshot",
    "NotTestable",
    "UnsupportedType",
]
