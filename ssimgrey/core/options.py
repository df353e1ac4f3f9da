# ssimgrey/core/options.py
"""
Per-call SSIM configuration.

``resolve_options`` normalises ``None`` / mapping / ``SsimOptions`` into a validated,
immutable ``SsimOptions``. Mappings may use the camelCase keys (``windowSize``,
``bitDepth``) or their snake_case aliases; unknown keys are ignored and a key mapped
to ``None`` falls back to the default.
"""
from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ssimgrey.core.errors import (
    InvalidBitDepth,
    InvalidStabilityConstant,
    InvalidWindowSize,
)
from ssimgrey.core.window import dynamic_range, stability_constants

__all__ = ["DEFAULTS", "MAX_BIT_DEPTH", "SsimOptions", "resolve_options"]

logger = logging.getLogger("ssimgrey.core.options")

# samples above 2**53 lose integer precision in float64
MAX_BIT_DEPTH = 53

DEFAULTS: Dict[str, Any] = {
    "window_size": 11,
    "k1": 0.01,
    "k2": 0.03,
    "bit_depth": 8,
}

# alias -> canonical field name
_ALIASES: Dict[str, str] = {
    "windowSize": "window_size",
    "window_size": "window_size",
    "k1": "k1",
    "k2": "k2",
    "bitDepth": "bit_depth",
    "bit_depth": "bit_depth",
}


@dataclass(frozen=True)
class SsimOptions:
    window_size: int = DEFAULTS["window_size"]
    k1: float = DEFAULTS["k1"]
    k2: float = DEFAULTS["k2"]
    bit_depth: int = DEFAULTS["bit_depth"]

    def __post_init__(self) -> None:
        _check_int("window_size", self.window_size, InvalidWindowSize)
        _check_int("bit_depth", self.bit_depth, InvalidBitDepth)
        if self.bit_depth > MAX_BIT_DEPTH:
            raise InvalidBitDepth(f"bit_depth: must be <= {MAX_BIT_DEPTH}, got {self.bit_depth}")
        _check_constant("k1", self.k1)
        _check_constant("k2", self.k2)
        # numpy scalars -> builtins
        object.__setattr__(self, "window_size", int(self.window_size))
        object.__setattr__(self, "bit_depth", int(self.bit_depth))
        object.__setattr__(self, "k1", float(self.k1))
        object.__setattr__(self, "k2", float(self.k2))

    @property
    def dynamic_range(self) -> int:
        """L = 2**bit_depth - 1 (maximum sample value)."""
        return dynamic_range(self.bit_depth)

    @property
    def constants(self) -> Tuple[float, float]:
        """(c1, c2) stability constants for this configuration."""
        return stability_constants(self.k1, self.k2, self.bit_depth)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "windowSize": self.window_size,
            "k1": self.k1,
            "k2": self.k2,
            "bitDepth": self.bit_depth,
        }


# ------------------------------
# Validation helpers
# ------------------------------

def _check_int(name: str, value: Any, exc: type) -> None:
    # bool is an int subclass; True must not pass as window_size=1
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise exc(f"{name}: expected int, got {type(value).__name__}")
    if value < 1:
        raise exc(f"{name}: must be >= 1, got {value}")


def _check_constant(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidStabilityConstant(f"{name}: expected float, got {type(value).__name__}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidStabilityConstant(f"{name}: must be finite and > 0, got {value!r}")


# ------------------------------
# Normalisation
# ------------------------------

def resolve_options(
    options: Optional[Union[SsimOptions, Mapping[str, Any]]] = None,
) -> SsimOptions:
    """Return validated ``SsimOptions`` for ``None``, a mapping or an ``SsimOptions``."""
    if options is None:
        return SsimOptions()
    if isinstance(options, SsimOptions):
        return options
    if not isinstance(options, Mapping):
        raise TypeError(
            f"resolve_options: expected mapping or SsimOptions, got {type(options).__name__}"
        )

    values: Dict[str, Any] = {}
    for key, value in options.items():
        field = _ALIASES.get(key) if isinstance(key, str) else None
        if field is None:
            logger.debug("ignoring unrecognised option %r", key)
            continue
        if value is None:
            continue
        values[field] = value
    return SsimOptions(**values)
