# palette_theme/constants.py
"""
Tunables used across the project.

- Quantizer constants (MAX_SWATCHES, HISTOGRAM_BITS)
- Target matcher constants (weights, fit shaping, hue threshold, target table)
- Theme derivation constants (THEME_*)
- Average sampler constants (SAMPLE_*)
"""
from __future__ import annotations

from typing import List, Tuple

# ==========
# Quantizer
# ==========
MAX_SWATCHES: int = 16
HISTOGRAM_BITS: int = 5
MIN_HISTOGRAM_BITS: int = 1
MAX_HISTOGRAM_BITS: int = 8

# ===============
# Target matcher
# ===============
W_SATURATION: float = 0.35
W_LIGHTNESS: float = 0.45
W_POPULATION: float = 0.20

# In-range fit spans [1 - IN_RANGE_SPREAD, 1]; out-of-range fit spans [0, OUT_OF_RANGE_FIT].
IN_RANGE_SPREAD: float = 0.5
OUT_OF_RANGE_FIT: float = 0.25

HUE_DISTINCT_THRESHOLD: float = 1.0 / 12.0
# HSL saturation below this has no hue and never clashes.
ACHROMATIC_SATURATION: float = 1e-6
MIN_ACCEPTABLE_SCORE: float = 0.5

VIBRANT_SAT: Tuple[float, float, float] = (0.35, 1.0, 1.0)
MUTED_SAT: Tuple[float, float, float] = (0.0, 0.3, 0.4)
LIGHT_L: Tuple[float, float, float] = (0.55, 0.74, 1.0)
NORMAL_L: Tuple[float, float, float] = (0.3, 0.5, 0.7)
DARK_L: Tuple[float, float, float] = (0.0, 0.26, 0.45)

# (name, saturation, lightness) in selection priority order
TARGET_TABLE: List[Tuple[str, Tuple[float, float, float], Tuple[float, float, float]]] = [
    ("Vibrant", VIBRANT_SAT, NORMAL_L),
    ("LightVibrant", VIBRANT_SAT, LIGHT_L),
    ("DarkVibrant", VIBRANT_SAT, DARK_L),
    ("Muted", MUTED_SAT, NORMAL_L),
    ("LightMuted", MUTED_SAT, LIGHT_L),
    ("DarkMuted", MUTED_SAT, DARK_L),
]

# ===================
# Theme derivation
# ===================
THEME_TONE_ON_LIGHT_S: float = 0.9
THEME_TONE_ON_LIGHT_B: float = 0.1
THEME_TONE_ON_DARK_MAX_S: float = 0.15
THEME_TONE_ON_DARK_B: float = 0.95

THEME_BODY_DARK_MAX_S: float = 0.8
THEME_BODY_DARK_MAX_B: float = 0.2
THEME_BODY_LIGHT_MAX_S: float = 0.2
THEME_BODY_LIGHT_MIN_B: float = 0.9

THEME_CTA_HUE_SHIFT: float = 0.05
THEME_CTA_S_GAIN: float = 2.0
THEME_CTA_MAX_S: float = 0.8
THEME_CTA_B_GAIN: float = 3.0
THEME_CTA_MAX_B: float = 0.9

THEME_CTA_CONTRAST_MAX_S: float = 0.1
THEME_CTA_CONTRAST_ON_LIGHT_B: float = 0.05
THEME_CTA_CONTRAST_ON_DARK_B: float = 0.95

# ===============
# Average sampler
# ===============
# None: exact mean over every pixel. Recommended cap when downsampling: 64.
SAMPLE_SIZE_DEFAULT = None
SAMPLE_SIZE_RECOMMENDED: int = 64

__all__ = [
    "MAX_SWATCHES",
    "HISTOGRAM_BITS",
    "MIN_HISTOGRAM_BITS",
    "MAX_HISTOGRAM_BITS",
    "W_SATURATION",
    "W_LIGHTNESS",
    "W_POPULATION",
    "IN_RANGE_SPREAD",
    "OUT_OF_RANGE_FIT",
    "HUE_DISTINCT_THRESHOLD",
    "ACHROMATIC_SATURATION",
    "MIN_ACCEPTABLE_SCORE",
    "VIBRANT_SAT",
    "MUTED_SAT",
    "LIGHT_L",
    "NORMAL_L",
    "DARK_L",
    "TARGET_TABLE",
    "THEME_TONE_ON_LIGHT_S",
    "THEME_TONE_ON_LIGHT_B",
    "THEME_TONE_ON_DARK_MAX_S",
    "THEME_TONE_ON_DARK_B",
    "THEME_BODY_DARK_MAX_S",
    "THEME_BODY_DARK_MAX_B",
    "THEME_BODY_LIGHT_MAX_S",
    "THEME_BODY_LIGHT_MIN_B",
    "THEME_CTA_HUE_SHIFT",
    "THEME_CTA_S_GAIN",
    "THEME_CTA_MAX_S",
    "THEME_CTA_B_GAIN",
    "THEME_CTA_MAX_B",
    "THEME_CTA_CONTRAST_MAX_S",
    "THEME_CTA_CONTRAST_ON_LIGHT_B",
    "THEME_CTA_CONTRAST_ON_DARK_B",
    "SAMPLE_SIZE_DEFAULT",
    "SAMPLE_SIZE_RECOMMENDED",
]
