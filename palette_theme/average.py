# palette_theme/average.py
from __future__ import annotations

"""
Average colour of a pixel buffer (box filter over the whole extent).

Exports:
  downsample_rgb(rgb, sample_size) -> U8Image
  average_color(pixels, *, sample_size=None, debug=False) -> Color

Notes:
  - Default is the exact per-channel mean of every pixel, alpha ignored,
    rounded half-up. The output alpha is always 255.
  - With sample_size set, images larger than sample_size on either side are
    first box-resampled with Pillow so the longer side equals sample_size.
    When the image dimensions are multiples of the reduced size every box has
    the same area and the result equals the full mean within rounding (±1);
    other sizes weight edge pixels slightly differently.
"""

from typing import Optional

import numpy as np
from PIL import Image

from .core_types import Color, EmptyInputError, PixelBuffer, U8Image
from .utils import debug_log, key_value_pairs_to_string


def downsample_rgb(rgb: U8Image, sample_size: int) -> U8Image:
    """Box-resample (H,W,3) so that max(H, W) <= sample_size, keeping aspect."""
    if sample_size <= 0:
        raise ValueError("sample_size must be > 0")
    height, width = rgb.shape[0], rgb.shape[1]
    longest = max(height, width)
    if longest <= sample_size:
        return rgb
    scale = sample_size / float(longest)
    dst_w = max(1, int(round(width * scale)))
    dst_h = max(1, int(round(height * scale)))
    im = Image.fromarray(np.ascontiguousarray(rgb))
    small = im.resize((dst_w, dst_h), resample=Image.Resampling.BOX)
    return np.asarray(small, dtype=np.uint8)


def average_color(
    pixels: PixelBuffer,
    *,
    sample_size: Optional[int] = None,
    debug: bool = False,
) -> Color:
    """
    Mean colour of every pixel, each channel independently.

    Raises EmptyInputError for a zero-pixel buffer.
    """
    if pixels.pixel_count == 0:
        raise EmptyInputError("cannot average an empty pixel buffer")

    rgb = pixels.rgb
    if sample_size is not None:
        rgb = downsample_rgb(rgb, int(sample_size))

    flat = rgb.reshape(-1, 3)
    n = int(flat.shape[0])
    sums = flat.sum(axis=0, dtype=np.int64)
    r, g, b = ((2 * sums + n) // (2 * n)).tolist()
    out = Color(int(r), int(g), int(b))

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Average", out.hex),
                    ("Sampled", f"{rgb.shape[1]}x{rgb.shape[0]}"),
                    ("Source", f"{pixels.width}x{pixels.height}"),
                ]
            )
        )
    return out


__all__ = ["downsample_rgb", "average_color"]
