# palette_theme/targets.py
from __future__ import annotations

"""
Target table and swatch-to-target matching.

Exports:
  DEFAULT_TARGETS : six built-in targets in selection priority order
  TARGET_ORDER    : their names, same order
  axis_fit(value, rng) -> float
  score_swatch(saturation, lightness, population, max_population, target) -> float
  match_targets(swatches, targets=DEFAULT_TARGETS, *, hue_threshold, min_score, debug)
    -> Dict[str, Swatch]

Scoring:
  score = w_sat * fit(S) + w_light * fit(L) + w_pop * population / max_population
  fit() is in [0.5, 1] inside the target range (closer to the target value is
  higher) and in [0, 0.25] outside it (closer to the range is higher). Out of
  range is penalised, never excluded.

Selection:
  Targets are processed in order; each takes the best unused swatch. If that
  swatch's hue is within hue_threshold of a swatch already picked for another
  target, the best non-clashing alternative scoring >= min_score is taken
  instead; with no such alternative the clashing best is kept. Greys (HSL
  saturation ~0) have no hue: they never clash and are never clashed with.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .colour_convert import rgb_to_hsl_batch
from .constants import (
    ACHROMATIC_SATURATION,
    HUE_DISTINCT_THRESHOLD,
    IN_RANGE_SPREAD,
    MIN_ACCEPTABLE_SCORE,
    OUT_OF_RANGE_FIT,
    TARGET_TABLE,
    W_LIGHTNESS,
    W_POPULATION,
    W_SATURATION,
)
from .core_types import Range3, Selection, Swatch, Target, hue_distance
from .utils import debug_log


def _build_targets() -> Tuple[Target, ...]:
    return tuple(
        Target(
            name=name,
            saturation=sat,
            lightness=light,
            saturation_weight=W_SATURATION,
            lightness_weight=W_LIGHTNESS,
            population_weight=W_POPULATION,
        )
        for name, sat, light in TARGET_TABLE
    )


DEFAULT_TARGETS: Tuple[Target, ...] = _build_targets()
TARGET_ORDER: Tuple[str, ...] = tuple(t.name for t in DEFAULT_TARGETS)


def axis_fit(value: float, rng: Range3) -> float:
    lo, mid, hi = rng
    if value < lo:
        return OUT_OF_RANGE_FIT * (1.0 - (lo - value))
    if value > hi:
        return OUT_OF_RANGE_FIT * (1.0 - (value - hi))
    span = max(mid - lo, hi - mid)
    if span <= 0.0:
        return 1.0
    return 1.0 - IN_RANGE_SPREAD * abs(value - mid) / span


def score_swatch(
    saturation: float,
    lightness: float,
    population: int,
    max_population: int,
    target: Target,
) -> float:
    pop_fit = population / max_population if max_population > 0 else 0.0
    return (
        target.saturation_weight * axis_fit(saturation, target.saturation)
        + target.lightness_weight * axis_fit(lightness, target.lightness)
        + target.population_weight * pop_fit
    )


def _clashes(hue: Optional[float], picked_hues: List[float], threshold: float) -> bool:
    if hue is None:
        return False
    return any(hue_distance(hue, other) < threshold for other in picked_hues)


def match_targets(
    swatches: Sequence[Swatch],
    targets: Sequence[Target] = DEFAULT_TARGETS,
    *,
    hue_threshold: float = HUE_DISTINCT_THRESHOLD,
    min_score: float = MIN_ACCEPTABLE_SCORE,
    debug: bool = False,
) -> Selection:
    """
    Pick at most one swatch per target. Targets left without a swatch are
    absent from the result; an empty swatch list gives an empty dict.
    """
    if not swatches:
        return {}

    rgb = np.array([s.color.rgb for s in swatches], dtype=np.uint8)
    hsl = rgb_to_hsl_batch(rgb)
    sats = hsl[:, 1].tolist()
    hues: List[Optional[float]] = [
        None if s < ACHROMATIC_SATURATION else h for h, s in zip(hsl[:, 0].tolist(), sats)
    ]
    lights = hsl[:, 2].tolist()
    max_pop = max(s.population for s in swatches)

    used: set = set()
    picked_hues: List[float] = []
    selection: Dict[str, Swatch] = {}

    for target in targets:
        candidates = [i for i in range(len(swatches)) if i not in used]
        if not candidates:
            break
        scores = {
            i: score_swatch(sats[i], lights[i], swatches[i].population, max_pop, target)
            for i in candidates
        }
        # Stable tie-break on input order.
        ranked = sorted(candidates, key=lambda i: (-scores[i], i))

        pick = ranked[0]
        if _clashes(hues[pick], picked_hues, hue_threshold):
            for alt in ranked[1:]:
                if scores[alt] < min_score:
                    break
                if not _clashes(hues[alt], picked_hues, hue_threshold):
                    pick = alt
                    break

        used.add(pick)
        if hues[pick] is not None:
            picked_hues.append(hues[pick])
        selection[target.name] = swatches[pick]

        if debug:
            debug_log(
                f"  {target.name:<13} -> {swatches[pick].color.hex}  "
                f"score={scores[pick]:.3f}  pop={swatches[pick].population:,}"
            )

    return selection


__all__ = [
    "DEFAULT_TARGETS",
    "TARGET_ORDER",
    "axis_fit",
    "score_swatch",
    "match_targets",
]
