# ssimgrey/core/errors.py
"""
Input-validation errors for MSSIM computation.

Every error derives from ``SsimError`` (a ``ValueError``) and is raised before any
summed-area table is allocated. An image smaller than the window is NOT an error;
see ``ssimgrey.core.window.evaluate_windows``.
"""
from __future__ import annotations

__all__ = [
    "SsimError",
    "InvalidDimensions",
    "InvalidWindowSize",
    "InvalidStabilityConstant",
    "InvalidBitDepth",
    "InvalidSamples",
]


class SsimError(ValueError):
    """Base class: the call cannot be evaluated with the given inputs."""


class InvalidDimensions(SsimError):
    """Width/height not positive, buffer length != width*height, or sizes disagree."""


class InvalidWindowSize(SsimError):
    """Window size is not an integer >= 1."""


class InvalidStabilityConstant(SsimError):
    """k1 or k2 is not a finite number > 0."""


class InvalidBitDepth(SsimError):
    """Bit depth is not an integer >= 1."""


class InvalidSamples(SsimError):
    """Samples are not integers or fall outside [0, 2**bit_depth - 1]."""
