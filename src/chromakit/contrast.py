from __future__ import annotations

from .models import Color, ContrastResult, Rating

AAA_THRESHOLD = 7.0
AA_THRESHOLD = 4.5

_DESCRIPTIONS = {
    Rating.AAA: "Excellent contrast - meets AAA standards",
    Rating.AA: "Good contrast - meets AA standards",
    Rating.FAIL: "Poor contrast - does not meet accessibility standards",
}


def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: Color) -> float:
    r, g, b = color.rgb
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def contrast_ratio(first: Color, second: Color) -> float:
    l1 = relative_luminance(first)
    l2 = relative_luminance(second)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def rating_for(ratio: float) -> Rating:
    if ratio >= AAA_THRESHOLD:
        return Rating.AAA
    if ratio >= AA_THRESHOLD:
        return Rating.AA
    return Rating.FAIL


def evaluate(foreground: Color, background: Color) -> ContrastResult:
    ratio = contrast_ratio(foreground, background)
    rating = rating_for(ratio)
    return ContrastResult(ratio=ratio, rating=rating, description=_DESCRIPTIONS[rating])
