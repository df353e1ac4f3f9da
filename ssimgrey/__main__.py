#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ssimgrey - CLI
Usage (examples):
  # 1) MSSIM of two raw 8-bit dumps
  python -m ssimgrey compare ref.gray test.gray --width 640 --height 480

  # 2) 16-bit samples, 7x7 window, JSON report
  python -m ssimgrey compare ref.raw test.raw --width 512 --height 512 --dtype u16 --bit-depth 16 --window-size 7 --json report.json

  # 3) per-window SSIM map saved as .npy
  python -m ssimgrey map ref.npy test.npy --width 64 --height 32 --out map.npy
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Optional

import numpy as np

from ssimgrey import __version__
from ssimgrey.core.errors import SsimError
from ssimgrey.core.options import resolve_options
from ssimgrey.core.ssim import compute, compute_map
from ssimgrey.io.artifacts import RAW_DTYPES, load_samples, write_json, write_npy

logger = logging.getLogger("ssimgrey.cli")


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────

def _print_err(msg: str) -> None:
    sys.stderr.write(msg.rstrip() + "\n")


def _options_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    # None -> default in resolve_options
    return {
        "windowSize": args.window_size,
        "k1": args.k1,
        "k2": args.k2,
        "bitDepth": args.bit_depth,
    }


def _load_pair(args: argparse.Namespace):
    a = load_samples(args.image1, dtype=args.dtype)
    b = load_samples(args.image2, dtype=args.dtype)
    logger.debug("loaded %s (%d samples) and %s (%d samples)", args.image1, a.size, args.image2, b.size)
    return a, b


# ──────────────────────────────────────────────────────────────────────────────
# Commands
# ──────────────────────────────────────────────────────────────────────────────

def cmd_compare(args: argparse.Namespace) -> int:
    a, b = _load_pair(args)
    opts = resolve_options(_options_from_args(args))
    score = compute(a, b, args.width, args.height, opts)

    if args.json:
        report = {
            "image1": str(args.image1),
            "image2": str(args.image2),
            "width": args.width,
            "height": args.height,
            "options": opts.as_dict(),
            "mssim": score,
        }
        out = write_json(args.json, report)
        print(str(out))
    else:
        print(repr(score))
    return 0


def cmd_map(args: argparse.Namespace) -> int:
    a, b = _load_pair(args)
    opts = resolve_options(_options_from_args(args))
    smap = compute_map(a, b, args.width, args.height, opts)
    out = write_npy(args.out, smap)
    if smap.size:
        print(f"{out} shape={smap.shape} min={float(np.min(smap)):.6f} max={float(np.max(smap)):.6f}")
    else:
        print(f"{out} shape={smap.shape} (image smaller than window)")
    return 0


# ──────────────────────────────────────────────────────────────────────────────
# Main parser
# ──────────────────────────────────────────────────────────────────────────────

def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("image1", help="Reference samples (.npy or raw dump)")
    p.add_argument("image2", help="Candidate samples (.npy or raw dump)")
    p.add_argument("--width", type=int, required=True, help="Image width in samples")
    p.add_argument("--height", type=int, required=True, help="Image height in samples")
    p.add_argument("--dtype", choices=sorted(RAW_DTYPES), default="u8", help="Sample type of raw dumps")
    p.add_argument("--window-size", type=int, default=None, help="Window side (default 11)")
    p.add_argument("--k1", type=float, default=None, help="Stability constant k1 (default 0.01)")
    p.add_argument("--k2", type=float, default=None, help="Stability constant k2 (default 0.03)")
    p.add_argument("--bit-depth", type=int, default=None, help="Sample bit depth (default 8)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ssimgrey", description="Mean SSIM for greyscale sample buffers")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    cmp_ = sub.add_parser("compare", help="Print MSSIM of two images")
    _add_common(cmp_)
    cmp_.add_argument("--json", help="Write a JSON report to this path instead of printing the score")
    cmp_.set_defaults(run=cmd_compare)

    mp = sub.add_parser("map", help="Write the per-window SSIM map as .npy")
    _add_common(mp)
    mp.add_argument("--out", required=True, help="Output .npy path")
    mp.set_defaults(run=cmd_map)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    run = getattr(args, "run", None)
    if not run:
        parser.print_help()
        return 2
    try:
        return int(run(args))
    except (SsimError, OSError, ValueError) as e:
        _print_err(f"{args.cmd}: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
