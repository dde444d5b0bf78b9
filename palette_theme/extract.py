# palette_theme/extract.py
from __future__ import annotations

"""
Extraction entry points.

Provides:
  extract_palette(pixels, config=DEFAULT_CONFIG, *, workers=2, debug=False) -> PaletteResult
  extract_theme(pixels, config=DEFAULT_CONFIG, *, workers=2, debug=False) -> ColorTheme

Flow:
  pixels ─┬─ average_color ────────────────┐
          └─ quantize ── match_targets ────┴─ derive_theme ─> ColorTheme

  The average and the quantizer share no data, so with workers > 1 they run on
  a ThreadPoolExecutor and are joined before derivation. workers=1 runs them in
  sequence; both paths give identical output. Every call keeps its own state.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .average import average_color
from .config import DEFAULT_CONFIG, ExtractionConfig
from .core_types import Color, ColorTheme, EmptyInputError, PixelBuffer, Selection, Swatch
from .quantize import quantize
from .targets import match_targets
from .theme import derive_theme
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string, print_config_line


@dataclass(frozen=True)
class PaletteResult:
    """Everything one extraction produced."""

    average: Color
    swatches: Tuple[Swatch, ...]
    selection: Selection
    theme: ColorTheme

    def target(self, name: str) -> Optional[Swatch]:
        return self.selection.get(name)

    @property
    def vibrant(self) -> Optional[Swatch]:
        return self.target("Vibrant")

    @property
    def light_vibrant(self) -> Optional[Swatch]:
        return self.target("LightVibrant")

    @property
    def dark_vibrant(self) -> Optional[Swatch]:
        return self.target("DarkVibrant")

    @property
    def muted(self) -> Optional[Swatch]:
        return self.target("Muted")

    @property
    def light_muted(self) -> Optional[Swatch]:
        return self.target("LightMuted")

    @property
    def dark_muted(self) -> Optional[Swatch]:
        return self.target("DarkMuted")


def _sample_and_quantize(
    pixels: PixelBuffer, config: ExtractionConfig, workers: int, debug: bool
) -> Tuple[Color, List[Swatch]]:
    if workers > 1:
        with ThreadPoolExecutor(max_workers=2) as ex:
            fut_avg = ex.submit(
                average_color, pixels, sample_size=config.sample_size, debug=debug
            )
            fut_q = ex.submit(
                quantize,
                pixels,
                config.max_swatches,
                bits=config.histogram_bits,
                debug=debug,
            )
            # .result() re-raises worker exceptions here
            return fut_avg.result(), fut_q.result()
    average = average_color(pixels, sample_size=config.sample_size, debug=debug)
    swatches = quantize(
        pixels, config.max_swatches, bits=config.histogram_bits, debug=debug
    )
    return average, swatches


def extract_palette(
    pixels: PixelBuffer,
    config: ExtractionConfig = DEFAULT_CONFIG,
    *,
    workers: int = 2,
    debug: bool = False,
) -> PaletteResult:
    """
    Run the full pipeline and keep the intermediate swatches and selection.

    Raises EmptyInputError for a zero-pixel buffer before any work starts.
    """
    if pixels.pixel_count == 0:
        raise EmptyInputError("no pixels to extract a theme from")

    t_start = time.perf_counter()
    if debug:
        print_config_line(
            "extract",
            [
                ("Size", f"{pixels.width}x{pixels.height}"),
                ("Max swatches", config.max_swatches),
                ("Histogram bits", config.histogram_bits),
                ("Sample size", config.sample_size or "-"),
                ("Workers", workers),
            ],
            debug=True,
        )

    average, swatches = _sample_and_quantize(pixels, config, workers, debug)
    t_sampled = time.perf_counter()

    if debug:
        debug_log("targets:")
    selection = match_targets(
        swatches,
        config.targets,
        hue_threshold=config.hue_threshold,
        min_score=config.min_score,
        debug=debug,
    )
    theme = derive_theme(average, selection, [t.name for t in config.targets])
    t_done = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Swatches", len(swatches)),
                    ("Matched", len(selection)),
                    ("Sample+quantize", format_seconds_compact(t_sampled - t_start)),
                    ("Match+derive", format_seconds_compact(t_done - t_sampled)),
                ]
            )
        )

    return PaletteResult(
        average=average,
        swatches=tuple(swatches),
        selection=selection,
        theme=theme,
    )


def extract_theme(
    pixels: PixelBuffer,
    config: ExtractionConfig = DEFAULT_CONFIG,
    *,
    workers: int = 2,
    debug: bool = False,
) -> ColorTheme:
    """Pixels in, ColorTheme out. See extract_palette for errors."""
    return extract_palette(pixels, config, workers=workers, debug=debug).theme


__all__ = ["PaletteResult", "extract_palette", "extract_theme"]
