from itertools import combinations

import pytest

from palette_theme.colour_convert import rgb_to_hsl
from palette_theme.core_types import Color, Swatch, hue_distance
from palette_theme.targets import (
    DEFAULT_TARGETS,
    TARGET_ORDER,
    axis_fit,
    match_targets,
    score_swatch,
)

# One swatch per target, hues 60 degrees apart.
IDEAL = {
    "Vibrant": (255, 0, 0),
    "LightVibrant": (255, 255, 122),
    "DarkVibrant": (0, 133, 0),
    "Muted": (89, 166, 166),
    "LightMuted": (169, 169, 209),
    "DarkMuted": (86, 46, 86),
}


def _swatches(rgbs, population=10):
    return [Swatch(Color(*rgb), population) for rgb in rgbs]


def test_default_target_order():
    assert TARGET_ORDER == (
        "Vibrant",
        "LightVibrant",
        "DarkVibrant",
        "Muted",
        "LightMuted",
        "DarkMuted",
    )
    assert [t.name for t in DEFAULT_TARGETS] == list(TARGET_ORDER)


def test_axis_fit_prefers_in_range():
    vibrant_sat = (0.35, 1.0, 1.0)
    assert axis_fit(1.0, vibrant_sat) == pytest.approx(1.0)
    assert axis_fit(0.35, vibrant_sat) == pytest.approx(0.5)
    assert axis_fit(0.3, vibrant_sat) == pytest.approx(0.25 * 0.95)
    assert axis_fit(0.0, vibrant_sat) < axis_fit(0.3, vibrant_sat)


def test_population_breaks_ties():
    target = DEFAULT_TARGETS[0]
    high = score_swatch(1.0, 0.5, 100, 100, target)
    low = score_swatch(1.0, 0.5, 10, 100, target)
    assert high > low
    assert score_swatch(1.0, 0.5, 100, 100, target) == pytest.approx(1.0)


def test_empty_swatch_list_gives_empty_mapping():
    assert match_targets([]) == {}


def test_each_target_finds_its_ideal_swatch():
    swatches = _swatches(IDEAL.values())
    selection = match_targets(list(reversed(swatches)))
    assert list(selection) == list(TARGET_ORDER)
    for name, rgb in IDEAL.items():
        assert selection[name].color.rgb == rgb


def test_selected_hues_are_distinct():
    selection = match_targets(_swatches(IDEAL.values()))
    hues = [rgb_to_hsl(s.color.rgb)[0] for s in selection.values()]
    for a, b in combinations(hues, 2):
        assert hue_distance(a, b) >= 1 / 12


def test_red_and_white_leave_muted_unfilled():
    red = Swatch(Color(255, 0, 0), 2)
    white = Swatch(Color(255, 255, 255), 2)
    selection = match_targets([red, white])
    assert selection["Vibrant"] == red
    assert not any(name.endswith("Muted") for name in selection)


def test_swatch_used_once():
    selection = match_targets(_swatches([(255, 0, 0)]))
    assert list(selection) == ["Vibrant"]


def test_hue_clash_prefers_acceptable_alternative():
    red = Swatch(Color(255, 0, 0), 100)
    light_red = Swatch(Color(255, 128, 128), 50)
    light_cyan = Swatch(Color(128, 255, 255), 10)
    swatches = [red, light_red, light_cyan]

    selection = match_targets(swatches)
    assert selection["Vibrant"] == red
    assert selection["LightVibrant"] == light_cyan

    strict = match_targets(swatches, min_score=0.95)
    assert strict["LightVibrant"] == light_red

    no_threshold = match_targets(swatches, hue_threshold=0.0)
    assert no_threshold["LightVibrant"] == light_red


def test_greys_have_no_hue_to_clash():
    red = Swatch(Color(255, 0, 0), 100)
    grey = Swatch(Color(128, 128, 128), 100)
    teal = Swatch(Color(89, 166, 166), 10)
    vibrant, muted = DEFAULT_TARGETS[0], DEFAULT_TARGETS[3]

    selection = match_targets([red, grey, teal], [vibrant, muted])
    assert selection == {"Vibrant": red, "Muted": grey}

    # A grey pick does not push a later red out for an acceptable teal.
    soft_red = Swatch(Color(200, 60, 60), 10)
    small_teal = Swatch(Color(89, 166, 166), 5)
    selection = match_targets([grey, soft_red, small_teal], [muted, vibrant])
    assert selection == {"Muted": grey, "Vibrant": soft_red}


def test_custom_target_subset():
    selection = match_targets(_swatches(IDEAL.values()), DEFAULT_TARGETS[3:4])
    assert list(selection) == ["Muted"]
    assert selection["Muted"].color.rgb == IDEAL["Muted"]
