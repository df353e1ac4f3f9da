# ssimgrey/core/__init__.py
from ssimgrey.core.errors import (
    InvalidBitDepth,
    InvalidDimensions,
    InvalidSamples,
    InvalidStabilityConstant,
    InvalidWindowSize,
    SsimError,
)
from ssimgrey.core.options import DEFAULTS, SsimOptions, resolve_options
from ssimgrey.core.sat import SatBundle, build_sats
from ssimgrey.core.ssim import compute, compute_map
from ssimgrey.core.window import OnlineMean, evaluate_windows, ssim_map, window_stats

__all__ = [
    "SsimError",
    "InvalidDimensions",
    "InvalidWindowSize",
    "InvalidStabilityConstant",
    "InvalidBitDepth",
    "InvalidSamples",
    "DEFAULTS",
    "SsimOptions",
    "resolve_options",
    "SatBundle",
    "build_sats",
    "OnlineMean",
    "window_stats",
    "ssim_map",
    "evaluate_windows",
    "compute",
    "compute_map",
]
