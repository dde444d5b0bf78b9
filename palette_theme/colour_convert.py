# palette_theme/colour_convert.py
from __future__ import annotations

import numpy as np

from .core_types import Color, HSBTuple, RGBTuple

"""
sRGB ↔ HSB / HSL and the perceptual "light" test. Vectorized NumPy implementations.

Every component (sampler output, cube averages, target scoring, theme
derivation) goes through these routines. The scalar helpers are thin wrappers
over the batch versions so the formulas exist exactly once.

Exports:
- rgb_to_unit(rgb)
- unit_to_u8(values)
- rgb_to_hsb_batch(rgb) / rgb_to_hsb(rgb)
- rgb_to_hsl_batch(rgb) / rgb_to_hsl(rgb)
- hsb_to_rgb_batch(hsb) / hsb_to_rgb(h, s, b)
- perceived_white_batch(rgb) / perceived_white(rgb)
- is_light(color)
- color_from_hsb(h, s, b, alpha)
"""

# Rec. 601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)
LIGHT_THRESHOLD = 0.5


def rgb_to_unit(rgb: np.ndarray) -> np.ndarray:
    """
    Normalise RGB to float64 0..1. Integer dtypes are read as 0..255,
    float dtypes are assumed to already be 0..1. Accepts any shape (..., 3).
    """
    arr = np.asarray(rgb)
    if np.issubdtype(arr.dtype, np.integer):
        return arr.astype(np.float64) / 255.0
    return arr.astype(np.float64, copy=False)


def unit_to_u8(values: np.ndarray) -> np.ndarray:
    """0..1 floats → uint8 with round-half-up."""
    scaled = np.floor(np.asarray(values, dtype=np.float64) * 255.0 + 0.5)
    return np.clip(scaled, 0, 255).astype(np.uint8)


def _hue_max_min(u: np.ndarray):
    r, g, b = u[..., 0], u[..., 1], u[..., 2]
    mx = np.max(u, axis=-1)
    mn = np.min(u, axis=-1)
    delta = mx - mn
    safe = np.where(delta == 0.0, 1.0, delta)
    h = np.where(
        mx == r,
        ((g - b) / safe) % 6.0,
        np.where(mx == g, (b - r) / safe + 2.0, (r - g) / safe + 4.0),
    )
    h = np.where(delta == 0.0, 0.0, h / 6.0) % 1.0
    return h, mx, mn, delta


def rgb_to_hsb_batch(rgb: np.ndarray) -> np.ndarray:
    """
    RGB → HSB (a.k.a. HSV). Hue on the unit circle [0,1); achromatic hue is 0.
    Shape (..., 3) preserved. Returns float64.
    """
    u = rgb_to_unit(rgb)
    h, mx, _mn, delta = _hue_max_min(u)
    s = np.where(mx > 0.0, delta / np.where(mx > 0.0, mx, 1.0), 0.0)
    return np.stack([h, s, mx], axis=-1)


def rgb_to_hsl_batch(rgb: np.ndarray) -> np.ndarray:
    """
    RGB → HSL. Same hue as rgb_to_hsb_batch. Shape (..., 3) preserved.
    """
    u = rgb_to_unit(rgb)
    h, mx, mn, delta = _hue_max_min(u)
    lightness = (mx + mn) / 2.0
    denom = 1.0 - np.abs(2.0 * lightness - 1.0)
    s = np.where(delta > 0.0, delta / np.where(denom > 0.0, denom, 1.0), 0.0)
    return np.stack([h, np.clip(s, 0.0, 1.0), lightness], axis=-1)


def hsb_to_rgb_batch(hsb: np.ndarray) -> np.ndarray:
    """
    HSB → RGB floats 0..1. Hue wraps modulo 1; s and b are clipped to 0..1.
    """
    arr = np.asarray(hsb, dtype=np.float64)
    h = arr[..., 0] % 1.0
    s = np.clip(arr[..., 1], 0.0, 1.0)
    v = np.clip(arr[..., 2], 0.0, 1.0)

    h6 = h * 6.0
    sector = np.floor(h6).astype(np.int64) % 6
    f = h6 - np.floor(h6)
    p = v * (1.0 - s)
    q = v * (1.0 - f * s)
    t = v * (1.0 - (1.0 - f) * s)

    conds = [sector == i for i in range(6)]
    r = np.select(conds, [v, q, p, p, t, v])
    g = np.select(conds, [t, v, v, q, p, p])
    b = np.select(conds, [p, p, t, v, v, q])
    return np.stack([r, g, b], axis=-1)


def perceived_white_batch(rgb: np.ndarray) -> np.ndarray:
    """Grey value (Rec. 601 luma) in 0..1 for (..., 3) RGB."""
    return rgb_to_unit(rgb) @ LUMA_WEIGHTS


# Scalar wrappers


def rgb_to_hsb(rgb: RGBTuple) -> HSBTuple:
    h, s, v = rgb_to_hsb_batch(np.array([rgb], dtype=np.uint8))[0]
    return float(h), float(s), float(v)


def rgb_to_hsl(rgb: RGBTuple) -> HSBTuple:
    h, s, lightness = rgb_to_hsl_batch(np.array([rgb], dtype=np.uint8))[0]
    return float(h), float(s), float(lightness)


def hsb_to_rgb(hue: float, saturation: float, brightness: float) -> RGBTuple:
    row = unit_to_u8(hsb_to_rgb_batch(np.array([[hue, saturation, brightness]])))[0]
    return int(row[0]), int(row[1]), int(row[2])


def perceived_white(rgb: RGBTuple) -> float:
    return float(perceived_white_batch(np.array([rgb], dtype=np.uint8))[0])


def is_light(color: Color) -> bool:
    """True when the colour's grey value is at least 0.5."""
    return perceived_white(color.rgb) >= LIGHT_THRESHOLD


def color_from_hsb(
    hue: float, saturation: float, brightness: float, alpha: int = 255
) -> Color:
    return Color(*hsb_to_rgb(hue, saturation, brightness), alpha=alpha)


__all__ = [
    "LUMA_WEIGHTS",
    "LIGHT_THRESHOLD",
    "rgb_to_unit",
    "unit_to_u8",
    "rgb_to_hsb_batch",
    "rgb_to_hsl_batch",
    "hsb_to_rgb_batch",
    "perceived_white_batch",
    "rgb_to_hsb",
    "rgb_to_hsl",
    "hsb_to_rgb",
    "perceived_white",
    "is_light",
    "color_from_hsb",
]
