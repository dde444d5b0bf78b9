# palette_theme/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str
HSBTuple = Tuple[float, float, float]  # hue in [0, 1), saturation, brightness

U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Mask = NDArray[np.uint8]  # (H, W)
U8RGBA = NDArray[np.uint8]  # (H, W, 4)

Range3 = Tuple[float, float, float]  # (min, target, max)


class EmptyInputError(ValueError):
    """Raised when an extraction step receives a buffer with zero pixels."""


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def hue_distance(hue_a: float, hue_b: float) -> float:
    """Minimal distance between two hues on the unit circle (0..0.5]."""
    d = abs(hue_a - hue_b) % 1.0
    return 1.0 - d if d > 0.5 else d


def rgb_to_hex(rgb: Sequence[int]) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{int(rgb[0]):02x}{int(rgb[1]):02x}{int(rgb[2]):02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def _check_channel(name: str, value: int) -> int:
    v = int(value)
    if not 0 <= v <= 255:
        raise ValueError(f"{name} must be in 0..255, got {value}")
    return v


# Value objects


@dataclass(frozen=True)
class Color:
    """8-bit RGBA colour. Never mutated; derive new colours instead."""

    r: int
    g: int
    b: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "alpha"):
            object.__setattr__(self, name, _check_channel(name, getattr(self, name)))

    @classmethod
    def from_hex(cls, hex_str: str, alpha: int = 255) -> "Color":
        return cls(*hex_to_rgb(hex_str), alpha=alpha)

    @property
    def rgb(self) -> RGBTuple:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> HexStr:
        return rgb_to_hex(self.rgb)

    def with_opacity(self, opacity: float) -> "Color":
        """Same RGB with alpha scaled by opacity (0..1)."""
        a = int(np.floor(self.alpha * clamp_value(opacity, 0.0, 1.0) + 0.5))
        return Color(self.r, self.g, self.b, a)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Decoded pixels as a (H, W, 4) uint8 RGBA array.

    The buffer belongs to the caller; extraction reads it and keeps no
    reference once a call returns.
    """

    rgba: U8RGBA

    def __post_init__(self) -> None:
        arr = self.rgba
        if not isinstance(arr, np.ndarray):
            raise TypeError("rgba must be a numpy array")
        if arr.dtype != np.uint8 or arr.ndim != 3 or arr.shape[-1] != 4:
            raise TypeError("expected uint8 (H,W,4) RGBA array")

    @classmethod
    def from_array(cls, image: np.ndarray) -> "PixelBuffer":
        """Wrap a uint8 (H,W,3) or (H,W,4) array; RGB input is made opaque."""
        if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] not in (3, 4):
            raise TypeError("expected uint8 (H,W,3/4) image")
        if image.shape[-1] == 4:
            return cls(image)
        h, w, _ = image.shape
        out = np.full((h, w, 4), 255, dtype=np.uint8)
        out[..., :3] = image
        return cls(out)

    @classmethod
    def from_rgba_bytes(cls, data: bytes, width: int, height: int) -> "PixelBuffer":
        """Row-major RGBA8 bytes, as handed over by an image decoder."""
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")
        if len(data) != width * height * 4:
            raise ValueError(
                f"expected {width * height * 4} bytes for {width}x{height}, got {len(data)}"
            )
        arr = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4)
        return cls(arr)

    @classmethod
    def from_colors(
        cls, colors: Sequence[Union[Color, Sequence[int]]], width: int, height: int
    ) -> "PixelBuffer":
        """Build a buffer from a row-major list of Colors or RGB(A) tuples."""
        if len(colors) != width * height:
            raise ValueError(f"expected {width * height} colours, got {len(colors)}")
        out = np.empty((height * width, 4), dtype=np.uint8)
        for i, c in enumerate(colors):
            if isinstance(c, Color):
                out[i] = (c.r, c.g, c.b, c.alpha)
            else:
                out[i, :3] = c[:3]
                out[i, 3] = c[3] if len(c) > 3 else 255
        return cls(out.reshape(height, width, 4))

    @property
    def width(self) -> int:
        return int(self.rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self.rgba.shape[0])

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def rgb(self) -> U8Image:
        return self.rgba[..., :3]

    @property
    def alpha(self) -> U8Mask:
        return self.rgba[..., 3]


@dataclass(frozen=True)
class Swatch:
    """Representative colour of one terminal cube and the pixels it stands for."""

    color: Color
    population: int

    def as_dict(self) -> Dict[str, object]:
        return {"hex": self.color.hex, "population": self.population}


@dataclass(frozen=True)
class Target:
    """
    Named saturation/lightness profile used to pick a swatch.

    saturation and lightness are (min, target, max) in HSL space, 0..1.
    """

    name: str
    saturation: Range3
    lightness: Range3
    saturation_weight: float
    lightness_weight: float
    population_weight: float

    def __post_init__(self) -> None:
        for label, (lo, mid, hi) in (
            ("saturation", self.saturation),
            ("lightness", self.lightness),
        ):
            if not 0.0 <= lo <= mid <= hi <= 1.0:
                raise ValueError(f"{self.name}: {label} must satisfy 0<=min<=target<=max<=1")


@dataclass(frozen=True)
class ColorTheme:
    """Role colours derived from one image."""

    average_color: Color
    contrasting_tone: Color
    body_dark: Color
    body_light: Color
    cta_color: Color
    cta_contrast: Color
    all_colors: Tuple[Color, ...] = field(default_factory=tuple)

    def body_colors(self, dark_mode: bool) -> Tuple[Color, Color]:
        """(background, text) for the current appearance."""
        if dark_mode:
            return self.body_dark, self.body_light
        return self.body_light, self.body_dark

    def as_dict(self) -> Dict[str, object]:
        """Plain record of hex strings and HSB triples, for fixtures and JSON."""
        # Local import: colour_convert depends on this module.
        from .colour_convert import rgb_to_hsb

        def entry(c: Color) -> Dict[str, object]:
            h, s, v = rgb_to_hsb(c.rgb)
            return {
                "hex": c.hex,
                "alpha": c.alpha,
                "hsb": [round(h, 4), round(s, 4), round(v, 4)],
            }

        roles = (
            "average_color",
            "contrasting_tone",
            "body_dark",
            "body_light",
            "cta_color",
            "cta_contrast",
        )
        out: Dict[str, object] = {name: entry(getattr(self, name)) for name in roles}
        out["all_colors"] = [c.hex for c in self.all_colors]
        return out


SwatchList = List[Swatch]
Selection = Dict[str, Swatch]  # target name -> chosen swatch (absent if none)


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "HSBTuple",
    "U8Image",
    "U8Mask",
    "U8RGBA",
    "Range3",
    "SwatchList",
    "Selection",
    # errors
    "EmptyInputError",
    # value objects
    "Color",
    "PixelBuffer",
    "Swatch",
    "Target",
    "ColorTheme",
    # helpers
    "clamp_value",
    "hue_distance",
    "rgb_to_hex",
    "hex_to_rgb",
]
