# palette_theme/quantize.py
from __future__ import annotations

"""
Median-cut colour quantizer.

Exports:
  Histogram                                   : bucketed colour population
  ColorCube                                   : one box of the partition
  build_histogram(pixels, bits=5) -> Histogram
  median_cut(hist, max_swatches) -> (order, leaves)
  quantize(pixels, max_swatches=16, *, bits=5, debug=False) -> List[Swatch]

Notes:
  - Every pixel is bucketed to `bits` per channel first, whatever its alpha,
    so the cut works on distinct buckets instead of raw pixels. Each bucket keeps the
    exact 8-bit channel sums of its pixels, so swatch colours are exact
    population-weighted means and populations are exact pixel counts.
  - Cubes live in an arena (a list) and are referenced by index. Each cube
    owns a contiguous slice of the shared `order` array; a split re-sorts
    only that slice.
  - The worklist is a heap keyed by (population, volume), largest first.
"""

import heapq
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .constants import HISTOGRAM_BITS, MAX_HISTOGRAM_BITS, MAX_SWATCHES, MIN_HISTOGRAM_BITS
from .core_types import Color, EmptyInputError, PixelBuffer, Swatch
from .utils import debug_log, key_value_pairs_to_string


@dataclass(frozen=True)
class Histogram:
    """Distinct buckets among all pixels of a buffer."""

    bits: int
    keys: np.ndarray  # (U, 3) int64 bucket coordinates per channel
    counts: np.ndarray  # (U,) int64 pixel population per bucket
    sums: np.ndarray  # (U, 3) int64 sum of original 8-bit channels per bucket

    @property
    def size(self) -> int:
        return int(self.counts.shape[0])

    @property
    def total(self) -> int:
        return int(self.counts.sum())


@dataclass
class ColorCube:
    """
    Inclusive slice [lower, upper] of the histogram order, with its bucket
    bounding box (per-channel min/max) and pixel population.
    """

    lower: int
    upper: int
    population: int
    mins: Tuple[int, int, int]
    maxs: Tuple[int, int, int]
    split: bool = False

    @property
    def distinct(self) -> int:
        return self.upper - self.lower + 1

    @property
    def volume(self) -> int:
        return sum(hi - lo for lo, hi in zip(self.mins, self.maxs))

    @property
    def longest_axis(self) -> int:
        ranges = [hi - lo for lo, hi in zip(self.mins, self.maxs)]
        # Ties resolve red, then green, then blue.
        return int(np.argmax(ranges))

    def can_split(self) -> bool:
        return self.distinct > 1


def _check_bits(bits: int) -> int:
    if not MIN_HISTOGRAM_BITS <= int(bits) <= MAX_HISTOGRAM_BITS:
        raise ValueError(
            f"bits must be in {MIN_HISTOGRAM_BITS}..{MAX_HISTOGRAM_BITS}, got {bits}"
        )
    return int(bits)


def build_histogram(pixels: PixelBuffer, bits: int = HISTOGRAM_BITS) -> Histogram:
    """Bucket every pixel to `bits` per channel and count them."""
    bits = _check_bits(bits)
    rgb = pixels.rgb.reshape(-1, 3).astype(np.int64)
    if rgb.shape[0] == 0:
        empty = np.zeros((0, 3), dtype=np.int64)
        return Histogram(bits, empty, np.zeros((0,), dtype=np.int64), empty.copy())

    q = rgb >> (8 - bits)
    packed = (q[:, 0] << (2 * bits)) | (q[:, 1] << bits) | q[:, 2]
    uniq, inverse, counts = np.unique(packed, return_inverse=True, return_counts=True)
    inverse = inverse.reshape(-1)
    n = uniq.shape[0]

    mask = (1 << bits) - 1
    keys = np.stack(
        [(uniq >> (2 * bits)) & mask, (uniq >> bits) & mask, uniq & mask], axis=1
    ).astype(np.int64)
    sums = np.stack(
        [np.bincount(inverse, weights=rgb[:, c], minlength=n) for c in range(3)],
        axis=1,
    )
    return Histogram(bits, keys, counts.astype(np.int64), np.rint(sums).astype(np.int64))


def _make_cube(hist: Histogram, order: np.ndarray, lower: int, upper: int) -> ColorCube:
    idx = order[lower : upper + 1]
    k = hist.keys[idx]
    mins = k.min(axis=0)
    maxs = k.max(axis=0)
    return ColorCube(
        lower=lower,
        upper=upper,
        population=int(hist.counts[idx].sum()),
        mins=(int(mins[0]), int(mins[1]), int(mins[2])),
        maxs=(int(maxs[0]), int(maxs[1]), int(maxs[2])),
    )


def _split_cube(
    hist: Histogram, order: np.ndarray, cube: ColorCube
) -> Tuple[ColorCube, ColorCube]:
    """
    Sort the cube's buckets along its longest axis and cut at the boundary
    between distinct axis values whose left population is closest to half.
    """
    axis = cube.longest_axis
    others = [c for c in (2, 1, 0) if c != axis]
    idx = order[cube.lower : cube.upper + 1]
    k = hist.keys[idx]
    # lexsort: last key is primary; remaining channels keep the order deterministic
    perm = np.lexsort((k[:, others[0]], k[:, others[1]], k[:, axis]))
    idx = idx[perm]
    order[cube.lower : cube.upper + 1] = idx

    values = hist.keys[idx, axis]
    cum = np.cumsum(hist.counts[idx])
    boundaries = np.nonzero(values[:-1] != values[1:])[0]
    imbalance = np.abs(2 * cum[boundaries] - cube.population)
    cut = cube.lower + int(boundaries[int(np.argmin(imbalance))])

    return (
        _make_cube(hist, order, cube.lower, cut),
        _make_cube(hist, order, cut + 1, cube.upper),
    )


def _cube_to_swatch(hist: Histogram, order: np.ndarray, cube: ColorCube) -> Swatch:
    idx = order[cube.lower : cube.upper + 1]
    total = hist.sums[idx].sum(axis=0)
    pop = cube.population
    # integer round-half-up of total / pop
    r, g, b = ((2 * total + pop) // (2 * pop)).tolist()
    return Swatch(Color(int(r), int(g), int(b)), pop)


def _heap_key(cube: ColorCube, index: int) -> Tuple[int, int, int]:
    return (-cube.population, -cube.volume, index)


def median_cut(
    hist: Histogram, max_swatches: int
) -> Tuple[np.ndarray, List[ColorCube]]:
    """
    Split the histogram into at most `max_swatches` cubes.

    Returns (order, leaves): `order` is the bucket permutation the cubes index
    into, `leaves` the terminal cubes in creation order.
    """
    if int(max_swatches) < 1:
        raise ValueError("max_swatches must be >= 1")
    order = np.arange(hist.size, dtype=np.int64)
    if hist.size == 0:
        return order, []

    arena: List[ColorCube] = [_make_cube(hist, order, 0, hist.size - 1)]
    heap: List[Tuple[int, int, int]] = []
    if arena[0].can_split():
        heap.append(_heap_key(arena[0], 0))

    live = 1
    while heap and live < max_swatches:
        _, _, i = heapq.heappop(heap)
        parent = arena[i]
        left, right = _split_cube(hist, order, parent)
        parent.split = True
        for child in (left, right):
            arena.append(child)
            if child.can_split():
                heapq.heappush(heap, _heap_key(child, len(arena) - 1))
        live += 1

    return order, [c for c in arena if not c.split]


def quantize(
    pixels: PixelBuffer,
    max_swatches: int = MAX_SWATCHES,
    *,
    bits: int = HISTOGRAM_BITS,
    debug: bool = False,
) -> List[Swatch]:
    """
    Reduce the pixels to at most `max_swatches` swatches.

    Raises EmptyInputError for a zero-pixel buffer. Alpha is ignored, so
    populations always add up to the buffer's pixel count.

    Returned swatches are sorted by population (desc), then RGB.
    """
    if pixels.pixel_count == 0:
        raise EmptyInputError("cannot quantize an empty pixel buffer")
    if int(max_swatches) < 1:
        raise ValueError("max_swatches must be >= 1")

    hist = build_histogram(pixels, bits)
    order, leaves = median_cut(hist, max_swatches)

    swatches = [_cube_to_swatch(hist, order, c) for c in leaves]
    swatches.sort(key=lambda s: (-s.population, s.color.rgb))

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixels", hist.total),
                    ("Buckets", hist.size),
                    ("Bits", hist.bits),
                    ("Splits", len(leaves) - 1),
                    ("Swatches", len(swatches)),
                ]
            )
        )
    return swatches


__all__ = ["Histogram", "ColorCube", "build_histogram", "median_cut", "quantize"]
