# palette_theme/config.py
from __future__ import annotations

"""
Extraction settings.

Exports:
  ExtractionConfig : frozen settings record, validated on construction
  DEFAULT_CONFIG   : ExtractionConfig() with every default from constants
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import (
    HISTOGRAM_BITS,
    HUE_DISTINCT_THRESHOLD,
    MAX_HISTOGRAM_BITS,
    MAX_SWATCHES,
    MIN_ACCEPTABLE_SCORE,
    MIN_HISTOGRAM_BITS,
    SAMPLE_SIZE_DEFAULT,
)
from .core_types import Target
from .targets import DEFAULT_TARGETS


@dataclass(frozen=True)
class ExtractionConfig:
    max_swatches: int = MAX_SWATCHES
    histogram_bits: int = HISTOGRAM_BITS
    hue_threshold: float = HUE_DISTINCT_THRESHOLD
    min_score: float = MIN_ACCEPTABLE_SCORE
    sample_size: Optional[int] = SAMPLE_SIZE_DEFAULT
    targets: Tuple[Target, ...] = DEFAULT_TARGETS

    def __post_init__(self) -> None:
        if self.max_swatches < 1:
            raise ValueError("max_swatches must be >= 1")
        if not MIN_HISTOGRAM_BITS <= self.histogram_bits <= MAX_HISTOGRAM_BITS:
            raise ValueError(
                f"histogram_bits must be in {MIN_HISTOGRAM_BITS}..{MAX_HISTOGRAM_BITS}"
            )
        if not 0.0 <= self.hue_threshold <= 0.5:
            raise ValueError("hue_threshold must be in 0..0.5 (unit hue circle)")
        if self.sample_size is not None and self.sample_size < 1:
            raise ValueError("sample_size must be >= 1 or None")
        names = [t.name for t in self.targets]
        if len(set(names)) != len(names):
            raise ValueError("target names must be unique")
        object.__setattr__(self, "targets", tuple(self.targets))


DEFAULT_CONFIG = ExtractionConfig()

__all__ = ["ExtractionConfig", "DEFAULT_CONFIG"]
