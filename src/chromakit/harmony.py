from __future__ import annotations

import random
from typing import Iterable, Sequence

from .convert import InvalidRange
from .gradient import at
from .models import Color, Gradient, HarmonyFamily, HarmonyKind, HarmonySet

MIN_COUNT = 2
MAX_COUNT = 12
DEFAULT_COUNT = 5

# Hue step in degrees and intrinsic size (None means the caller's count).
_HUE_ROTATIONS: dict[HarmonyKind, tuple[int, int | None]] = {
    HarmonyKind.COMPLEMENTARY: (180, 2),
    HarmonyKind.ANALOGOUS: (30, None),
    HarmonyKind.TRIADIC: (120, 3),
    HarmonyKind.TETRADIC: (90, 4),
}


def generate(
    base: Color,
    count: int = DEFAULT_COUNT,
    include_tetradic: bool = True,
    saturation: int | None = None,
    lightness: int | None = None,
) -> HarmonyFamily:
    """Build every harmony for ``base``.

    ``saturation`` and ``lightness`` replace the base's values for the derived
    colors only; the first color of every set is always ``base`` itself.
    """
    _check_count(count)

    def build(kind: HarmonyKind) -> HarmonySet:
        return generate_kind(
            kind, base, count=count, saturation=saturation, lightness=lightness
        )

    return HarmonyFamily(
        complementary=build(HarmonyKind.COMPLEMENTARY),
        analogous=build(HarmonyKind.ANALOGOUS),
        triadic=build(HarmonyKind.TRIADIC),
        tetradic=build(HarmonyKind.TETRADIC) if include_tetradic else None,
        monochromatic=build(HarmonyKind.MONOCHROMATIC),
    )


def generate_kind(
    kind: HarmonyKind | str,
    base: Color,
    count: int = DEFAULT_COUNT,
    saturation: int | None = None,
    lightness: int | None = None,
) -> HarmonySet:
    _check_count(count)
    kind = HarmonyKind(kind)
    hue = base.hsl.h
    sat = base.hsl.s if saturation is None else saturation
    light = base.hsl.l if lightness is None else lightness

    colors = [base]
    if kind is HarmonyKind.MONOCHROMATIC:
        for step in range(1, count):
            shifted = max(10, min(90, light + (step - 2) * 20))
            colors.append(Color.from_hsl(hue, sat, shifted))
    else:
        rotation, intrinsic = _HUE_ROTATIONS[kind]
        size = count if intrinsic is None else intrinsic
        for step in range(1, size):
            colors.append(Color.from_hsl((hue + step * rotation) % 360, sat, light))

    return HarmonySet(kind=kind, colors=tuple(colors))


def random_color(rng: random.Random | None = None) -> Color:
    rng = rng or random.Random()
    value = rng.randrange(0xFFFFFF)
    return Color.from_hex(f"{value:06X}")


def random_palette(
    count: int = DEFAULT_COUNT, rng: random.Random | None = None
) -> list[Color]:
    _check_count(count)
    rng = rng or random.Random()
    return [random_color(rng) for _ in range(count)]


def custom_palette(hex_values: Iterable[str]) -> list[Color]:
    return [Color.from_hex(value) for value in hex_values]


def gradient_palette(start: Color, end: Color, steps: int = DEFAULT_COUNT) -> list[Color]:
    return stepped_gradient([start, end], steps=steps)


def stepped_gradient(
    colors: Sequence[Color], steps: int = DEFAULT_COUNT
) -> list[Color]:
    """Sample ``steps`` colors from evenly spaced stops, both ends included."""
    if steps < 2:
        raise InvalidRange(f"gradient needs at least 2 steps, got {steps}")
    gradient = Gradient.evenly_spaced(colors)
    last = steps - 1
    return [at(gradient, index / last) for index in range(steps)]


def _check_count(count: int) -> None:
    if not MIN_COUNT <= count <= MAX_COUNT:
        raise InvalidRange(
            f"palette size {count} outside {MIN_COUNT}..{MAX_COUNT}"
        )
