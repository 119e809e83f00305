from __future__ import annotations

import numpy as np

from .convert import round_half_up
from .models import Color, Gradient


def _clamp_unit(t: float) -> float:
    return max(0.0, min(1.0, float(t)))


def interpolate(first: Color, second: Color, t: float) -> Color:
    """Linear blend in sRGB space, channel by channel.

    Not perceptually uniform; midpoints of saturated pairs come out muddy.
    """
    t = _clamp_unit(t)
    if t == 0.0:
        return first
    if t == 1.0:
        return second

    r1, g1, b1 = first.rgb
    r2, g2, b2 = second.rgb
    return Color.from_rgb(
        round_half_up(r1 + (r2 - r1) * t),
        round_half_up(g1 + (g2 - g1) * t),
        round_half_up(b1 + (b2 - b1) * t),
    )


def at(gradient: Gradient, t: float) -> Color:
    t = _clamp_unit(t)
    stops = gradient.stops

    if t <= stops[0].position:
        return stops[0].color
    if t >= stops[-1].position:
        return stops[-1].color

    for left, right in zip(stops, stops[1:]):
        if left.position <= t <= right.position:
            span = right.position - left.position
            if span == 0:
                return right.color
            return interpolate(left.color, right.color, (t - left.position) / span)

    return stops[-1].color


def diagonal_progress(x: int, y: int, width: int) -> float:
    return (x + y) / (2 * width)


def tint_dark_pixels(
    bitmap: np.ndarray,
    gradient: Gradient,
    dark_threshold: int = 128,
    width: int | None = None,
) -> np.ndarray:
    """Recolor the dark modules of a rendered code bitmap along a diagonal.

    A pixel is dark when its red channel is below ``dark_threshold``. Its new
    color is ``at(gradient, (x + y) / (2 * width))``; alpha is left alone.
    """
    if bitmap.ndim != 3 or bitmap.shape[2] not in (3, 4):
        raise ValueError("bitmap must have shape (H, W, 3) or (H, W, 4)")

    height, bitmap_width = bitmap.shape[:2]
    width = bitmap_width if width is None else int(width)
    if width <= 0:
        raise ValueError("width must be positive")

    tinted = bitmap.copy()
    dark = bitmap[..., 0] < dark_threshold
    if not np.any(dark):
        return tinted

    ys, xs = np.nonzero(dark)
    diagonals = xs + ys
    # At most 2 * width - 1 distinct diagonals, so look each up once.
    unique_diagonals, inverse = np.unique(diagonals, return_inverse=True)
    lookup = np.array(
        [
            at(gradient, diagonal_progress(int(d), 0, width)).rgb
            for d in unique_diagonals
        ],
        dtype=np.uint8,
    )
    tinted[ys, xs, :3] = lookup[inverse.reshape(-1)]
    return tinted
