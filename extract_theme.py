#!/usr/bin/env python3
"""
extract_theme.py
Extract a colour theme (average, target swatches, role colours) from images.

Usage:
  python extract_theme.py INPUT [--max-swatches K] [--bits B] [--sample-size [S]]
                          [--height H] [--jobs J] [--workers W] [--json] [--debug]

Input:
  Any Pillow-readable image, or a folder of them (.png/.jpg/.jpeg/.webp).

Output:
  A readable report per image on stdout, or one JSON object per image with --json.

Notes:
  Decoding lives in palette_theme.image_io; extraction only sees PixelBuffers.
  Folders are extracted with a ThreadPoolExecutor when --jobs > 1; reports are
  printed afterwards in file order.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from palette_theme.config import ExtractionConfig
from palette_theme.constants import HISTOGRAM_BITS, MAX_SWATCHES, SAMPLE_SIZE_RECOMMENDED
from palette_theme.core_types import Color, EmptyInputError
from palette_theme.extract import PaletteResult, extract_palette
from palette_theme.image_io import is_image_file, load_pixel_buffer
from palette_theme.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_percentage,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp"}


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        max_swatches: quantizer cap K
        bits: histogram bits per channel
        sample_size: optional average-colour downsampling cap
        height: optional pre-resize height
        jobs: parallel file workers
        workers: 1 = sequential extraction, >1 = average/quantize in parallel
        json: machine-readable output
        debug: verbose extraction details
    """
    parser = argparse.ArgumentParser(
        prog="extract_theme",
        description="Extract an average colour, target swatches and role colours from image(s).",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--max-swatches",
        type=int,
        default=MAX_SWATCHES,
        help="Maximum quantizer swatches (K)",
    )
    parser.add_argument(
        "--bits",
        type=int,
        default=HISTOGRAM_BITS,
        help="Histogram bits per channel (1..8)",
    )
    parser.add_argument(
        "--sample-size",
        nargs="?",
        const=SAMPLE_SIZE_RECOMMENDED,
        type=int,
        default=None,
        help=f"Downsample to at most S px before averaging. Omit value for {SAMPLE_SIZE_RECOMMENDED}; omit flag for the exact mean.",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Resize so height<=H before extraction. Omit for no resize.",
    )
    parser.add_argument("--jobs", type=int, default=2, help="Files processed in parallel")
    parser.add_argument("--workers", type=int, default=2, help="Internal workers")
    parser.add_argument("--json", action="store_true", help="Print JSON per image")
    parser.add_argument("--debug", action="store_true", help="Verbose extraction details")
    return parser.parse_args(argv)


def _colour_line(label: str, color: Color) -> str:
    alpha = "" if color.alpha == 255 else f"  alpha={color.alpha}"
    return f"  {label:<17} {color.hex}{alpha}"


def _report(result: PaletteResult) -> None:
    theme = result.theme
    log("Theme:")
    log(_colour_line("Average", theme.average_color))
    log(_colour_line("Contrasting tone", theme.contrasting_tone))
    log(_colour_line("Body dark", theme.body_dark))
    log(_colour_line("Body light", theme.body_light))
    log(_colour_line("CTA", theme.cta_color))
    log(_colour_line("CTA contrast", theme.cta_contrast))

    log("Targets:")
    if not result.selection:
        log("  (none)")
    for name, swatch in result.selection.items():
        log(f"  {name:<17} {swatch.color.hex}  pixels={swatch.population:,}")

    total = sum(s.population for s in result.swatches) or 1
    log(f"Swatches ({len(result.swatches)}):")
    for swatch in result.swatches:
        share = format_percentage(swatch.population / total)
        log(f"  {swatch.color.hex}  pixels={swatch.population:,}  share={share}")


def _extract_one(
    src_path: Path,
    config: ExtractionConfig,
    height_cap: Optional[int],
    workers: int,
    debug: bool,
) -> Tuple[Optional[PaletteResult], float]:
    """load -> optional resize -> extract. Returns (result or None, seconds)."""
    t_start = time.perf_counter()
    pixels = load_pixel_buffer(src_path, max_height=height_cap)
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("File", src_path.name),
                    ("Loaded", f"{pixels.width}x{pixels.height}"),
                    ("Workers", workers),
                ]
            )
        )
    try:
        result: Optional[PaletteResult] = extract_palette(
            pixels, config, workers=workers, debug=debug
        )
    except EmptyInputError as e:
        warn(f"{src_path.name}: {e}")
        result = None
    return result, time.perf_counter() - t_start


def _print_result(
    src_path: Path, result: Optional[PaletteResult], seconds: float, as_json: bool
) -> None:
    if as_json:
        if result is None:
            return
        record = {
            "file": src_path.name,
            "theme": result.theme.as_dict(),
            "targets": {n: s.as_dict() for n, s in result.selection.items()},
            "swatches": [s.as_dict() for s in result.swatches],
        }
        print(json.dumps(record), flush=True)
        return

    print_banner(src_path.name)
    if result is None:
        log("No pixels.")
        return
    _report(result)
    log(f"Total time {format_total_duration_compact(seconds)}")


def _collect_files(src: Path) -> List[Path]:
    files = [p for p in src.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_EXTS]
    files.sort(key=lambda p: p.name.lower())
    return files


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Handles a single file or a folder. In folder mode --jobs extracts files in
    parallel; reports are printed afterwards in file order. Returns the exit status.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        config = ExtractionConfig(
            max_swatches=args.max_swatches,
            histogram_bits=args.bits,
            sample_size=args.sample_size,
        )
    except ValueError as e:
        error(str(e))
        return 2

    if args.debug and not args.json:
        print_config_line(
            "run",
            [
                ("Max swatches", config.max_swatches),
                ("Bits", config.histogram_bits),
                ("Sample size", config.sample_size or "-"),
                ("Height cap", args.height or "-"),
                ("Jobs", args.jobs),
                ("Workers", args.workers),
            ],
            debug=True,
        )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    if src.is_dir():
        files = [p for p in _collect_files(src) if is_image_file(p)]
        if args.debug and not args.json:
            debug_log(key_value_pairs_to_string([("Images", len(files))]))
        if args.jobs <= 1:
            for p in files:
                result, secs = _extract_one(
                    p, config, args.height, args.workers, args.debug
                )
                _print_result(p, result, secs, args.json)
        else:
            with ThreadPoolExecutor(max_workers=args.jobs) as ex:
                futures = [
                    ex.submit(
                        _extract_one, p, config, args.height, args.workers, args.debug
                    )
                    for p in files
                ]
                outcomes = [f.result() for f in futures]
            for p, (result, secs) in zip(files, outcomes):
                _print_result(p, result, secs, args.json)
        return 0

    if not is_image_file(src):
        warn(f"not a readable image: {src}")
        return 1
    result, secs = _extract_one(src, config, args.height, args.workers, args.debug)
    _print_result(src, result, secs, args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
