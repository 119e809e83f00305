from __future__ import annotations

import random

import pytest

from chromakit.convert import InvalidFormat, InvalidRange
from chromakit.harmony import (
    custom_palette,
    generate,
    generate_kind,
    gradient_palette,
    random_palette,
    stepped_gradient,
)
from chromakit.models import Color, HarmonyKind

RED = Color.from_hex("#FF0000")


def _hues(harmony):
    return [color.hsl.h for color in harmony.colors]


def test_family_has_five_sets_in_order():
    family = generate(RED)

    assert [item.kind for item in family] == [
        HarmonyKind.COMPLEMENTARY,
        HarmonyKind.ANALOGOUS,
        HarmonyKind.TRIADIC,
        HarmonyKind.TETRADIC,
        HarmonyKind.MONOCHROMATIC,
    ]
    assert len(family) == 5
    assert all(item.colors[0] == RED for item in family)


def test_tetradic_can_be_left_out():
    family = generate(RED, include_tetradic=False)

    assert family.tetradic is None
    assert len(family) == 4
    assert [item["type"] for item in family.to_dict()["harmonies"]] == [
        "Complementary",
        "Analogous",
        "Triadic",
        "Monochromatic",
    ]


def test_complementary_of_red_is_cyan():
    harmony = generate_kind(HarmonyKind.COMPLEMENTARY, RED)
    assert [color.hex for color in harmony.colors] == ["#FF0000", "#00FFFF"]


def test_rotations_for_red():
    family = generate(RED)

    assert _hues(family.analogous) == [0, 30, 60, 90, 120]
    assert family.analogous.colors[1].hex == "#FF8000"
    assert _hues(family.triadic) == [0, 120, 240]
    assert _hues(family.tetradic) == [0, 90, 180, 270]


def test_fixed_size_harmonies_ignore_count():
    assert len(generate_kind("complementary", RED, count=8).colors) == 2
    assert len(generate_kind("triadic", RED, count=8).colors) == 3
    assert len(generate_kind("tetradic", RED, count=8).colors) == 4
    assert len(generate_kind("analogous", RED, count=8).colors) == 8


def test_monochromatic_lightness_steps():
    harmony = generate_kind(HarmonyKind.MONOCHROMATIC, RED)
    assert [color.hsl.l for color in harmony.colors] == [50, 30, 50, 70, 90]
    assert all(color.hsl.h == 0 for color in harmony.colors)


def test_monochromatic_lightness_is_clamped():
    pale = Color.from_hsl(0, 100, 95)
    harmony = generate_kind(HarmonyKind.MONOCHROMATIC, pale, count=4)
    assert [color.hsl.l for color in harmony.colors[1:]] == [75, 90, 90]


def test_saturation_and_lightness_overrides_apply_to_derived_colors():
    harmony = generate_kind("triadic", RED, saturation=40, lightness=25)

    assert harmony.colors[0] == RED
    assert all(color.hsl.s == 40 and color.hsl.l == 25 for color in harmony.colors[1:])


@pytest.mark.parametrize("count", [1, 13])
def test_count_out_of_range(count):
    with pytest.raises(InvalidRange):
        generate(RED, count=count)


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        generate_kind("square", RED)


def test_random_palette_is_seedable():
    first = random_palette(6, rng=random.Random(7))
    second = random_palette(6, rng=random.Random(7))

    assert len(first) == 6
    assert [color.hex for color in first] == [color.hex for color in second]


def test_custom_palette_validates_each_color():
    assert [color.hex for color in custom_palette(["#ff0000", "00ff00"])] == [
        "#FF0000",
        "#00FF00",
    ]
    with pytest.raises(InvalidFormat):
        custom_palette(["#FF0000", "nope"])


def test_gradient_palette_includes_both_ends():
    colors = gradient_palette(Color.from_hex("#000000"), Color.from_hex("#FFFFFF"), steps=3)
    assert [color.hex for color in colors] == ["#000000", "#808080", "#FFFFFF"]

    with pytest.raises(InvalidRange):
        gradient_palette(RED, RED, steps=1)


def test_stepped_gradient_passes_through_middle_stops():
    colors = stepped_gradient(
        [Color.from_hex("#FF0000"), Color.from_hex("#00FF00"), Color.from_hex("#0000FF")],
        steps=3,
    )
    assert [color.hex for color in colors] == ["#FF0000", "#00FF00", "#0000FF"]
