"""Error ADTs for generator lookup and exhaustive analysis."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class UnsupportedType:
    """No random generator exists for the named type variant."""

    type_name: str
    kind: Literal["UnsupportedType"] = "UnsupportedType"


@dataclass(frozen=True)
class NotTestable:
    """The function type cannot be tested as a property.

    ``reason`` is one of ``"codomain"`` (the final result is not a bit) or
    ``"unbounded"`` (an argument has no known finite cardinality).
    """

    reason: Literal["codomain", "unbounded"]
    type_name: str
    kind: Literal["NotTestable"] = "NotTestable"


GenerationError = UnsupportedType | NotTestable


__all__ = ["UnsupportedType", "NotTestable", "GenerationError"]
