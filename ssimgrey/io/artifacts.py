#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ssimgrey.io.artifacts - sample-file loading and report writing for the CLI

Inputs
------
- ``.npy``: numpy arrays (1D flat or 2D (H, W)), loaded without pickle support.
- anything else: headerless raw sample dump, read with ``numpy.fromfile`` using the
  requested sample type (``u8`` or ``u16`` little-endian).

No image decoding happens here; encoded formats (PNG, JPEG, ...) are rejected by
the sample validation in ``ssimgrey.core.ssim`` as length mismatches.

Outputs
-------
- JSON reports and ``.npy`` SSIM maps, written atomically (tmp -> rename) in the
  target directory.
"""
from __future__ import annotations

import io
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

__all__ = ["RAW_DTYPES", "load_samples", "write_json", "write_npy"]

PathLike = Union[str, os.PathLike]

RAW_DTYPES: Dict[str, str] = {
    "u8": "u1",
    "u16": "<u2",
}


# ──────────────────────────────────────────────────────────────────────────────
# Reading
# ──────────────────────────────────────────────────────────────────────────────

def load_samples(path: PathLike, *, dtype: str = "u8") -> np.ndarray:
    """Load an integer sample buffer from ``.npy`` or a raw dump."""
    p = Path(path)
    if p.suffix.lower() == ".npy":
        return np.load(p, allow_pickle=False)
    try:
        np_dtype = RAW_DTYPES[dtype]
    except KeyError:
        raise ValueError(f"load_samples: unknown raw dtype {dtype!r} (choose from {sorted(RAW_DTYPES)})")
    return np.fromfile(p, dtype=np.dtype(np_dtype))


# ──────────────────────────────────────────────────────────────────────────────
# Atomic writers
# ──────────────────────────────────────────────────────────────────────────────

def _atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write to a temp file next to ``path`` and rename over it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("wb", delete=False, dir=str(path.parent)) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    tmp_path.replace(path)


def write_json(path: PathLike, obj: Any, *, indent: int = 2) -> Path:
    p = Path(path)
    _atomic_write_bytes(p, json.dumps(obj, ensure_ascii=False, indent=indent).encode("utf-8"))
    return p


def write_npy(path: PathLike, arr: np.ndarray) -> Path:
    p = Path(path)
    buf = io.BytesIO()
    np.save(buf, np.asarray(arr), allow_pickle=False)
    _atomic_write_bytes(p, buf.getvalue())
    return p
