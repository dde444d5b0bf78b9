# palette_theme/__init__.py
"""
palette_theme package.

Purpose:
  Extract a small colour theme from decoded pixels: one average colour, a
  handful of target swatches (Vibrant/Muted at light/normal/dark), and role
  colours derived from the average. See extract_theme.py for the CLI.

Public API:
  extract_theme   : pixels -> ColorTheme.
  extract_palette : pixels -> PaletteResult (average, swatches, selection, theme).
  average_color   : box-filter mean of a PixelBuffer.
  quantize        : median-cut swatches of a PixelBuffer.
  match_targets   : best swatch per named target.
  derive_theme    : role colours from the average and the selection.
  colour_convert  : canonical HSB/HSL/luma transforms.
  core_types      : value objects (Color, PixelBuffer, Swatch, Target, ColorTheme).
  image_io        : Pillow file -> PixelBuffer adapter.

Quick start:
  from palette_theme import PixelBuffer, extract_theme
  theme = extract_theme(PixelBuffer.from_array(rgba_u8))
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import constants
from . import core_types
from . import image_io
from . import utils

from .core_types import (  # noqa: E402
    Color,
    ColorTheme,
    EmptyInputError,
    PixelBuffer,
    Swatch,
    Target,
)
from .config import DEFAULT_CONFIG, ExtractionConfig  # noqa: E402
from .average import average_color  # noqa: E402
from .quantize import quantize  # noqa: E402
from .targets import DEFAULT_TARGETS, TARGET_ORDER, match_targets  # noqa: E402
from .theme import derive_theme  # noqa: E402
from .extract import PaletteResult, extract_palette, extract_theme  # noqa: E402

__all__ = [
    "__version__",
    "colour_convert",
    "constants",
    "core_types",
    "image_io",
    "utils",
    "Color",
    "ColorTheme",
    "EmptyInputError",
    "PixelBuffer",
    "Swatch",
    "Target",
    "DEFAULT_CONFIG",
    "ExtractionConfig",
    "average_color",
    "quantize",
    "DEFAULT_TARGETS",
    "TARGET_ORDER",
    "match_targets",
    "derive_theme",
    "PaletteResult",
    "extract_palette",
    "extract_theme",
]
