# ssimgrey/core/window.py
"""
---
version: 2
kind: module
id: "core-window"
created_at: "2026-10-17"
name: "ssimgrey.core.window"
author: "ssimgrey"
role: "Window Evaluator (local statistics, SSIM map, online mean)"
description: >
  Slides a uniform ws x ws window over every valid position, derives local means,
  biased variances and covariance from four SAT lookups per table, evaluates the SSIM
  formula per window and folds the values into a running (Welford) mean in row-major order.
inputs:
  sats: {type: "SatBundle", dtype: "float64", shape: "(H+1,W+1) x 5"}
  params:
    window_size: {type: int, min: 1}
    c1: {type: float, desc: "(k1*L)^2"}
    c2: {type: float, desc: "(k2*L)^2"}
outputs:
  mssim: {type: float, range: "[-1,1]", desc: "1.0 when no window fits"}
interfaces:
  exports: ["dynamic_range", "stability_constants", "window_extent", "WindowStats", "window_stats",
            "ssim_map", "OnlineMean", "fold_mean", "evaluate_windows"]
  depends_on: ["numpy", "ssimgrey.core.sat"]
  used_by: ["ssimgrey.core.ssim"]
policy:
  deterministic: true
  side_effects: false
constraints:
  - "fold order: wy outer, wx inner"
  - "per-window values use the scalar formula's operation order"
license: "MIT"
---
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from ssimgrey.core.sat import SatBundle, rect_sums

__all__ = [
    "dynamic_range",
    "stability_constants",
    "window_extent",
    "WindowStats",
    "window_stats",
    "ssim_map",
    "OnlineMean",
    "fold_mean",
    "evaluate_windows",
]


def dynamic_range(bit_depth: int) -> int:
    """L = 2**bit_depth - 1, the largest sample value."""
    return (1 << int(bit_depth)) - 1


def stability_constants(k1: float, k2: float, bit_depth: int) -> Tuple[float, float]:
    """c1 = (k1*L)^2, c2 = (k2*L)^2 with L = dynamic_range(bit_depth)."""
    L = float(dynamic_range(bit_depth))
    c1 = k1 * L * (k1 * L)
    c2 = k2 * L * (k2 * L)
    return c1, c2


def window_extent(width: int, height: int, window_size: int) -> Tuple[int, int]:
    """(winW, winH): number of valid window positions per axis; <= 0 means none."""
    return width - window_size + 1, height - window_size + 1


# ------------------------------
# Local statistics
# ------------------------------

@dataclass(frozen=True)
class WindowStats:
    mean_x: np.ndarray
    mean_y: np.ndarray
    var_x: np.ndarray
    var_y: np.ndarray
    cov_xy: np.ndarray

    @property
    def shape(self) -> tuple:
        return self.mean_x.shape


def window_stats(sats: SatBundle, window_size: int) -> WindowStats:
    """
    Per-window mean, biased variance (E[q^2] - mean^2) and covariance
    (E[XY] - meanX*meanY), each shaped (winH, winW).
    """
    ws_sq = float(window_size * window_size)

    mean_x = rect_sums(sats.sx, window_size) / ws_sq
    mean_y = rect_sums(sats.sy, window_size) / ws_sq

    var_x = rect_sums(sats.sxx, window_size) / ws_sq - mean_x * mean_x
    var_y = rect_sums(sats.syy, window_size) / ws_sq - mean_y * mean_y
    cov_xy = rect_sums(sats.sxy, window_size) / ws_sq - mean_x * mean_y

    return WindowStats(mean_x=mean_x, mean_y=mean_y, var_x=var_x, var_y=var_y, cov_xy=cov_xy)


def ssim_map(sats: SatBundle, window_size: int, c1: float, c2: float) -> np.ndarray:
    """
    SSIM value of every valid window, shape (winH, winW); empty (0, 0) if none fits.
    No clipping and no epsilon on the denominator: c1, c2 > 0 keep it positive.
    """
    win_w, win_h = window_extent(sats.width, sats.height, window_size)
    if win_w <= 0 or win_h <= 0:
        return np.empty((0, 0), dtype=np.float64)

    st = window_stats(sats, window_size)
    mx, my = st.mean_x, st.mean_y

    num = (2.0 * mx * my + c1) * (2.0 * st.cov_xy + c2)
    den = (mx * mx + my * my + c1) * (st.var_x + st.var_y + c2)
    return num / den


# ------------------------------
# Online mean
# ------------------------------

class OnlineMean:
    """Incremental mean: count += 1; mean += (value - mean) / count."""

    __slots__ = ("mean", "count")

    def __init__(self) -> None:
        self.mean = 0.0
        self.count = 0

    def push(self, value: float) -> None:
        self.count += 1
        self.mean = self.mean + (value - self.mean) / self.count

    def extend(self, values: Iterable[float]) -> None:
        for v in values:
            self.push(v)


def fold_mean(values: np.ndarray) -> float:
    """Fold values in C (row-major) order into an ``OnlineMean``; 0.0 for no values."""
    acc = OnlineMean()
    # tolist() yields builtin floats; the fold stays in IEEE double
    acc.extend(np.ravel(values, order="C").tolist())
    return acc.mean


def evaluate_windows(sats: SatBundle, window_size: int, c1: float, c2: float) -> float:
    """Mean SSIM over all valid windows; 1.0 if the image is smaller than the window."""
    win_w, win_h = window_extent(sats.width, sats.height, window_size)
    if win_w <= 0 or win_h <= 0:
        return 1.0
    return fold_mean(ssim_map(sats, window_size, c1, c2))
