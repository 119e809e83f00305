from __future__ import annotations

import math
import re
from typing import NamedTuple

_HEX_PATTERN = re.compile(r"#?[0-9A-Fa-f]{6}")


class ColorError(ValueError):
    pass


class InvalidFormat(ColorError):
    pass


class InvalidRange(ColorError):
    pass


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    h: float
    s: float
    l: float


class HSV(NamedTuple):
    h: float
    s: float
    v: float


def round_half_up(value: float) -> int:
    """Round like the browser tools do (0.5 goes up), not to even."""
    return int(math.floor(value + 0.5))


def parse_hex(value: str) -> RGB:
    if not isinstance(value, str) or not _HEX_PATTERN.fullmatch(value):
        raise InvalidFormat(f"invalid hex color '{value}'")

    normalized = value[1:] if value.startswith("#") else value
    return RGB(
        int(normalized[0:2], 16),
        int(normalized[2:4], 16),
        int(normalized[4:6], 16),
    )


def normalize_hex(value: str) -> str:
    return rgb_to_hex(*parse_hex(value))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    _check_rgb(r, g, b)
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    _check_rgb(r, g, b)
    rf, gf, bf = r / 255, g / 255, b / 255
    high = max(rf, gf, bf)
    low = min(rf, gf, bf)
    lightness = (high + low) / 2

    hue = 0.0
    saturation = 0.0
    if high != low:
        delta = high - low
        if lightness > 0.5:
            saturation = delta / (2 - high - low)
        else:
            saturation = delta / (high + low)
        hue = _hue_fraction(rf, gf, bf, high, delta)

    return HSL(
        (hue * 360) % 360,
        _clamp_percent(saturation * 100),
        _clamp_percent(lightness * 100),
    )


def rgb_to_hsv(r: int, g: int, b: int) -> HSV:
    _check_rgb(r, g, b)
    rf, gf, bf = r / 255, g / 255, b / 255
    high = max(rf, gf, bf)
    low = min(rf, gf, bf)
    delta = high - low

    saturation = 0.0 if high == 0 else delta / high
    hue = 0.0
    if high != low:
        hue = _hue_fraction(rf, gf, bf, high, delta)

    return HSV(
        (hue * 360) % 360,
        _clamp_percent(saturation * 100),
        _clamp_percent(high * 100),
    )


def round_hsl(hsl: HSL) -> HSL:
    """Whole degrees and percents, the resolution stored on a ``Color``."""
    h, s, l = hsl
    return HSL(round_half_up(h) % 360, round_half_up(s), round_half_up(l))


def round_hsv(hsv: HSV) -> HSV:
    h, s, v = hsv
    return HSV(round_half_up(h) % 360, round_half_up(s), round_half_up(v))


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    _check_cylindrical(h, s, l, "lightness")
    sf = s / 100
    lf = l / 100
    chroma = (1 - abs(2 * lf - 1)) * sf
    match = lf - chroma / 2
    return _from_chroma(h, chroma, match)


def hsv_to_rgb(h: float, s: float, v: float) -> RGB:
    _check_cylindrical(h, s, v, "value")
    sf = s / 100
    vf = v / 100
    chroma = vf * sf
    match = vf - chroma
    return _from_chroma(h, chroma, match)


def rgb_css(rgb: RGB) -> str:
    return f"rgb({rgb[0]}, {rgb[1]}, {rgb[2]})"


def hsl_css(hsl: HSL) -> str:
    return f"hsl({hsl[0]}, {hsl[1]}%, {hsl[2]}%)"


def _hue_fraction(
    rf: float, gf: float, bf: float, high: float, delta: float
) -> float:
    # Red wins ties with green/blue, then green; same order as the max switch.
    if high == rf:
        hue = (gf - bf) / delta + (6 if gf < bf else 0)
    elif high == gf:
        hue = (bf - rf) / delta + 2
    else:
        hue = (rf - gf) / delta + 4
    return hue / 6


def _from_chroma(h: float, chroma: float, match: float) -> RGB:
    x = chroma * (1 - abs((h / 60) % 2 - 1))

    if h < 60:
        r, g, b = chroma, x, 0.0
    elif h < 120:
        r, g, b = x, chroma, 0.0
    elif h < 180:
        r, g, b = 0.0, chroma, x
    elif h < 240:
        r, g, b = 0.0, x, chroma
    elif h < 300:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    return RGB(
        _clamp_channel(round_half_up((r + match) * 255)),
        _clamp_channel(round_half_up((g + match) * 255)),
        _clamp_channel(round_half_up((b + match) * 255)),
    )


def _clamp_channel(value: int) -> int:
    return max(0, min(255, value))


def _clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def _check_rgb(r: int, g: int, b: int) -> None:
    for label, value in (("red", r), ("green", g), ("blue", b)):
        if not 0 <= value <= 255:
            raise InvalidRange(f"{label} channel {value} outside 0..255")


def _check_cylindrical(h: float, s: float, third: float, third_label: str) -> None:
    if not 0 <= h < 360:
        raise InvalidRange(f"hue {h} outside [0, 360)")
    if not 0 <= s <= 100:
        raise InvalidRange(f"saturation {s} outside 0..100")
    if not 0 <= third <= 100:
        raise InvalidRange(f"{third_label} {third} outside 0..100")
