"""Error ADTs for configuration and RNG snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import ValidationError


@dataclass(frozen=True)
class InvalidCheckConfig:
    """Pydantic validation failed when constructing a check configuration."""

    error: ValidationError
    kind: Literal["InvalidCheckConfig"] = "InvalidCheckConfig"


@dataclass(frozen=True)
class InvalidRNGSnapshot:
    """Snapshot bytes do not decode to an RNG state."""

    length: int
    kind: Literal["InvalidRNGSnapshot"] = "InvalidRNGSnapshot"
