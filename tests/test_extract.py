from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from conftest import RED, WHITE, solid
from palette_theme import (
    Color,
    ColorTheme,
    EmptyInputError,
    ExtractionConfig,
    PixelBuffer,
    Swatch,
    extract_palette,
    extract_theme,
)
from palette_theme.colour_convert import perceived_white, rgb_to_hsb


def test_red_and_white_end_to_end():
    buf = PixelBuffer.from_colors([RED, RED, WHITE, WHITE], 2, 2)
    result = extract_palette(buf)

    assert result.average == Color(255, 128, 128)
    assert result.swatches == (Swatch(Color(*RED), 2), Swatch(Color(*WHITE), 2))
    assert result.vibrant == Swatch(Color(*RED), 2)
    assert result.muted is None
    assert result.light_muted is None
    assert result.dark_muted is None

    theme = result.theme
    assert theme.average_color == result.average
    assert perceived_white(theme.body_light.rgb) > 0.8
    _h, s, v = rgb_to_hsb(theme.body_dark.rgb)
    assert v <= 0.2 + 1e-9 and s <= 0.8 + 1e-9
    assert theme.all_colors[0] == result.average
    assert Color(*RED) in theme.all_colors


def test_sequential_and_threaded_are_identical(noisy_buffer):
    threaded = extract_palette(noisy_buffer, workers=2)
    sequential = extract_palette(noisy_buffer, workers=1)
    assert threaded == sequential
    assert extract_palette(noisy_buffer) == threaded


def test_concurrent_calls_do_not_interfere(noisy_buffer):
    other = solid((20, 140, 220), width=9, height=9)
    expected = [extract_theme(noisy_buffer, workers=1), extract_theme(other, workers=1)]
    with ThreadPoolExecutor(max_workers=4) as ex:
        futures = [
            ex.submit(extract_theme, buf)
            for _ in range(4)
            for buf in (noisy_buffer, other)
        ]
        got = [f.result() for f in futures]
    assert got == expected * 4


@pytest.mark.parametrize("workers", [1, 2])
def test_empty_buffer_aborts(workers):
    empty = PixelBuffer(np.zeros((0, 0, 4), dtype=np.uint8))
    with pytest.raises(EmptyInputError):
        extract_theme(empty, workers=workers)


def test_flat_image_is_a_valid_theme():
    result = extract_palette(solid((30, 120, 60), width=5, height=5))
    assert result.swatches == (Swatch(Color(30, 120, 60), 25),)
    assert len(result.selection) == 1
    assert result.theme.all_colors == (Color(30, 120, 60), Color(30, 120, 60))


def test_transparent_image_still_counts_every_pixel():
    result = extract_palette(solid((30, 120, 60), alpha=0))
    assert result.swatches == (Swatch(Color(30, 120, 60), 12),)
    assert len(result.selection) == 1
    assert result.theme.all_colors == (Color(30, 120, 60), Color(30, 120, 60))


def test_config_is_honoured(noisy_buffer):
    result = extract_palette(noisy_buffer, ExtractionConfig(max_swatches=3))
    assert len(result.swatches) <= 3
    assert sum(s.population for s in result.swatches) == noisy_buffer.pixel_count


def test_extract_theme_returns_theme(noisy_buffer):
    theme = extract_theme(noisy_buffer)
    assert isinstance(theme, ColorTheme)
    assert theme == extract_palette(noisy_buffer).theme


def test_debug_output(capsys, noisy_buffer):
    extract_theme(noisy_buffer, debug=True)
    out = capsys.readouterr().out
    assert "[debug] [extract]" in out
    assert "Vibrant" in out


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_swatches": 0},
        {"histogram_bits": 9},
        {"hue_threshold": 0.7},
        {"sample_size": 0},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        ExtractionConfig(**kwargs)
