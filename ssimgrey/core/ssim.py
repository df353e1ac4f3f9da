# ssimgrey/core/ssim.py
"""
---
version: 2
kind: module
id: "core-ssim"
created_at: "2026-10-17"
name: "ssimgrey.core.ssim"
author: "ssimgrey"
role: "MSSIM entry point (validate -> SAT build -> window evaluation)"
description: >
  Public computation for two greyscale images given as flat row-major integer sample
  buffers. Inputs are validated up front; images smaller than the window score 1.0.
inputs:
  image1: {dtype: "uint8|uint16|int", shape: "(H*W,)|(H,W)", desc: "reference"}
  image2: {dtype: "uint8|uint16|int", shape: "(H*W,)|(H,W)", desc: "candidate"}
  width: {type: int, min: 1}
  height: {type: int, min: 1}
  options: {type: "SsimOptions|Mapping|None", keys: ["windowSize", "k1", "k2", "bitDepth"]}
outputs:
  score: {type: float, range: "[-1,1]"}
interfaces:
  exports: ["compute", "compute_map", "as_samples"]
  depends_on: ["numpy", "ssimgrey.core.sat", "ssimgrey.core.window", "ssimgrey.core.options"]
  used_by: ["ssimgrey", "ssimgrey.__main__"]
policy:
  fail_fast: true
  deterministic: true
license: "MIT"
---
"""
from __future__ import annotations

import logging
import numbers
from typing import Any, Mapping, Optional, Tuple, Union

import numpy as np

from ssimgrey.core.errors import InvalidDimensions, InvalidSamples
from ssimgrey.core.options import SsimOptions, resolve_options
from ssimgrey.core.sat import build_sats
from ssimgrey.core.window import dynamic_range, evaluate_windows, ssim_map, window_extent

__all__ = ["compute", "compute_map", "as_samples"]

logger = logging.getLogger("ssimgrey.core.ssim")

OptionsLike = Optional[Union[SsimOptions, Mapping[str, Any]]]


# ------------------------------
# Input coercion / validation
# ------------------------------

def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidDimensions(f"{name}: expected int, got {type(value).__name__}")
    if value < 1:
        raise InvalidDimensions(f"{name}: must be >= 1, got {value}")
    return int(value)


def as_samples(image: Any, width: int, height: int, *, bit_depth: int = 8,
               name: str = "image") -> np.ndarray:
    """
    Coerce a sample buffer to an (H, W) integer array (a view for numpy and bytes-like input).
    Accepts bytes-like objects, array.array, sequences of ints and 1D/2D numpy arrays.
    """
    if isinstance(image, (bytes, bytearray)):
        a = np.frombuffer(image, dtype=np.uint8)
    else:
        # memoryview / array.array keep their item type through the buffer protocol
        a = np.asarray(image)

    if a.ndim == 2:
        if a.shape != (height, width):
            raise InvalidDimensions(
                f"{name}: 2D shape {a.shape} does not match (height, width)=({height}, {width})"
            )
    elif a.ndim == 1:
        if a.size != width * height:
            raise InvalidDimensions(
                f"{name}: length {a.size} != width*height = {width * height}"
            )
    else:
        raise InvalidDimensions(f"{name}: expected flat or 2D buffer, got {a.ndim}D")

    if not np.issubdtype(a.dtype, np.integer):
        raise InvalidSamples(f"{name}: expected integer samples, got dtype {a.dtype}")

    lo = int(a.min())
    hi = int(a.max())
    top = dynamic_range(bit_depth)
    if lo < 0 or hi > top:
        raise InvalidSamples(
            f"{name}: samples must lie in [0, {top}] for bit_depth={bit_depth}, got [{lo}, {hi}]"
        )
    return a.reshape(height, width)


def _prepare(image1: Any, image2: Any, width: Any, height: Any,
             options: OptionsLike) -> Tuple[np.ndarray, np.ndarray, int, int, SsimOptions]:
    opts = resolve_options(options)
    w = _check_dimension("width", width)
    h = _check_dimension("height", height)
    x = as_samples(image1, w, h, bit_depth=opts.bit_depth, name="image1")
    y = as_samples(image2, w, h, bit_depth=opts.bit_depth, name="image2")
    return x, y, w, h, opts


# ------------------------------
# Public API
# ------------------------------

def compute(image1: Any, image2: Any, width: int, height: int,
            options: OptionsLike = None) -> float:
    """
    Mean SSIM of two greyscale images (uniform window, summed-area tables).

    Returns 1.0 when the image is smaller than the window in either dimension.
    Raises ``SsimError`` subclasses for invalid dimensions, options or samples.
    """
    x, y, w, h, opts = _prepare(image1, image2, width, height, options)
    ws = opts.window_size

    win_w, win_h = window_extent(w, h, ws)
    if win_w <= 0 or win_h <= 0:
        logger.debug("image %dx%d smaller than window %d; mssim=1.0", w, h, ws)
        return 1.0

    c1, c2 = opts.constants
    sats = build_sats(x, y, w, h)
    mssim = evaluate_windows(sats, ws, c1, c2)
    logger.debug("mssim=%.9f over %d windows (%dx%d, ws=%d)", mssim, win_w * win_h, w, h, ws)
    return float(mssim)


def compute_map(image1: Any, image2: Any, width: int, height: int,
                options: OptionsLike = None) -> np.ndarray:
    """Per-window SSIM values, shape (H-ws+1, W-ws+1); (0, 0) if no window fits."""
    x, y, w, h, opts = _prepare(image1, image2, width, height, options)
    win_w, win_h = window_extent(w, h, opts.window_size)
    if win_w <= 0 or win_h <= 0:
        return np.empty((0, 0), dtype=np.float64)
    c1, c2 = opts.constants
    sats = build_sats(x, y, w, h)
    return ssim_map(sats, opts.window_size, c1, c2)
