# ssimgrey/__init__.py
"""
ssimgrey - Mean SSIM for single-channel greyscale images.

Uniform sliding window over summed-area tables: cost is linear in pixel count
regardless of window size.

    import ssimgrey
    score = ssimgrey.compute(img1, img2, width, height, {"windowSize": 11})
"""
from ssimgrey.core import (
    InvalidBitDepth,
    InvalidDimensions,
    InvalidSamples,
    InvalidStabilityConstant,
    InvalidWindowSize,
    SsimError,
    SsimOptions,
    compute,
    compute_map,
    resolve_options,
)

__version__ = "0.1.0"

__all__ = [
    "compute",
    "compute_map",
    "SsimOptions",
    "resolve_options",
    "SsimError",
    "InvalidDimensions",
    "InvalidWindowSize",
    "InvalidStabilityConstant",
    "InvalidBitDepth",
    "InvalidSamples",
]
