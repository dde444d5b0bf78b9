# palette_theme/theme.py
from __future__ import annotations

"""
Role colours from the average colour and the matched swatches.

Exports:
  contrasting_tone(color) -> Color
  body_dark(color) / body_light(color) -> Color
  cta_color(color) -> Color
  cta_contrast(cta) -> Color
  derive_theme(average, selected, order=TARGET_ORDER) -> ColorTheme

All transforms work in HSB through colour_convert and keep the source alpha.
"Light" means is_light() from colour_convert, used for every branch.
"""

from typing import List, Mapping, Sequence

from .colour_convert import color_from_hsb, is_light, rgb_to_hsb
from .constants import (
    THEME_BODY_DARK_MAX_B,
    THEME_BODY_DARK_MAX_S,
    THEME_BODY_LIGHT_MAX_S,
    THEME_BODY_LIGHT_MIN_B,
    THEME_CTA_B_GAIN,
    THEME_CTA_CONTRAST_MAX_S,
    THEME_CTA_CONTRAST_ON_DARK_B,
    THEME_CTA_CONTRAST_ON_LIGHT_B,
    THEME_CTA_HUE_SHIFT,
    THEME_CTA_MAX_B,
    THEME_CTA_MAX_S,
    THEME_CTA_S_GAIN,
    THEME_TONE_ON_DARK_B,
    THEME_TONE_ON_DARK_MAX_S,
    THEME_TONE_ON_LIGHT_B,
    THEME_TONE_ON_LIGHT_S,
)
from .core_types import Color, ColorTheme, Swatch
from .targets import TARGET_ORDER


def contrasting_tone(color: Color) -> Color:
    """Near-black on light colours, near-white on dark ones, same hue."""
    h, s, _v = rgb_to_hsb(color.rgb)
    if is_light(color):
        return color_from_hsb(h, THEME_TONE_ON_LIGHT_S, THEME_TONE_ON_LIGHT_B, color.alpha)
    return color_from_hsb(
        h, min(s, THEME_TONE_ON_DARK_MAX_S), THEME_TONE_ON_DARK_B, color.alpha
    )


def body_dark(color: Color) -> Color:
    h, s, v = rgb_to_hsb(color.rgb)
    return color_from_hsb(
        h, min(s, THEME_BODY_DARK_MAX_S), min(v, THEME_BODY_DARK_MAX_B), color.alpha
    )


def body_light(color: Color) -> Color:
    h, s, v = rgb_to_hsb(color.rgb)
    return color_from_hsb(
        h, min(s, THEME_BODY_LIGHT_MAX_S), max(v, THEME_BODY_LIGHT_MIN_B), color.alpha
    )


def cta_color(color: Color) -> Color:
    h, s, v = rgb_to_hsb(color.rgb)
    return color_from_hsb(
        (h + THEME_CTA_HUE_SHIFT) % 1.0,
        min(s * THEME_CTA_S_GAIN, THEME_CTA_MAX_S),
        min(v * THEME_CTA_B_GAIN, THEME_CTA_MAX_B),
        color.alpha,
    )


def cta_contrast(cta: Color) -> Color:
    """Text colour for a call-to-action fill, from the fill's own HSB."""
    h, s, _v = rgb_to_hsb(cta.rgb)
    brightness = (
        THEME_CTA_CONTRAST_ON_LIGHT_B if is_light(cta) else THEME_CTA_CONTRAST_ON_DARK_B
    )
    return color_from_hsb(h, min(THEME_CTA_CONTRAST_MAX_S, s), brightness, cta.alpha)


def derive_theme(
    average: Color,
    selected: Mapping[str, Swatch],
    order: Sequence[str] = TARGET_ORDER,
) -> ColorTheme:
    """
    Build the ColorTheme. all_colors is the average followed by the selected
    swatch colours in target priority order; names outside `order` follow in
    mapping order.
    """
    names: List[str] = [n for n in order if n in selected]
    names += [n for n in selected if n not in order]

    cta = cta_color(average)
    return ColorTheme(
        average_color=average,
        contrasting_tone=contrasting_tone(average),
        body_dark=body_dark(average),
        body_light=body_light(average),
        cta_color=cta,
        cta_contrast=cta_contrast(cta),
        all_colors=(average,) + tuple(selected[n].color for n in names),
    )


__all__ = [
    "contrasting_tone",
    "body_dark",
    "body_light",
    "cta_color",
    "cta_contrast",
    "derive_theme",
]
