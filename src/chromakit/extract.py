from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from loguru import logger

from .convert import InvalidRange, rgb_to_hsl, round_half_up, round_hsl
from .models import Color, PaletteSwatch

DEFAULT_TOP_K = 8


@dataclass(frozen=True)
class ExtractionSettings:
    """Tunable constants of the palette scan.

    The defaults are empirical and reproduce the picker's output; they are
    not derived from any color model.
    """

    alpha_threshold: int = 128
    min_brightness: float = 30.0
    max_brightness: float = 240.0
    quantization_step: int = 16
    hue_bin: float = 30.0
    saturation_bin: float = 20.0
    lightness_bin: float = 20.0


DEFAULT_SETTINGS = ExtractionSettings()


@dataclass(frozen=True)
class ColorBucket:
    rgb: tuple[int, int, int]
    count: int
    first_seen: int


@dataclass
class _Group:
    representative: ColorBucket
    score: float


def extract_palette(
    pixels: Any,
    width: int,
    height: int,
    k: int = DEFAULT_TOP_K,
    settings: ExtractionSettings | None = None,
) -> list[PaletteSwatch]:
    """Return up to ``k`` swatches ranked by saturation, lightness and frequency.

    ``pixels`` is a decoded RGBA8 buffer: either flat (``bytes``, a list or a
    1-D array of ``width * height * 4`` values) or an ``(height, width, 4)``
    array. An image with no qualifying pixels yields an empty list.
    """
    validate_k(k)
    settings = settings or DEFAULT_SETTINGS
    buckets = count_buckets(pixels, width, height, settings=settings)
    if not buckets:
        logger.warning(
            "no qualifying pixels in {}x{} image, returning empty palette",
            width,
            height,
        )
        return []
    return rank_buckets(buckets, k=k, settings=settings)


def count_buckets(
    pixels: Any,
    width: int,
    height: int,
    settings: ExtractionSettings | None = None,
) -> list[ColorBucket]:
    """Filter and quantize pixels, returning buckets in first-seen order."""
    settings = settings or DEFAULT_SETTINGS
    rgba = _as_rgba_rows(pixels, width, height)

    channels = rgba[:, :3].astype(np.int64)
    keep = rgba[:, 3] >= settings.alpha_threshold
    brightness = channels.sum(axis=1) / 3.0
    keep &= brightness >= settings.min_brightness
    keep &= brightness <= settings.max_brightness

    kept_indices = np.nonzero(keep)[0]
    logger.debug(
        "scanned {} pixels, {} qualify", rgba.shape[0], int(kept_indices.shape[0])
    )
    if kept_indices.shape[0] == 0:
        return []

    step = settings.quantization_step
    quantized = np.floor(channels[kept_indices] / step + 0.5) * step
    quantized = np.minimum(quantized, 255).astype(np.int64)

    keys = (quantized[:, 0] << 16) | (quantized[:, 1] << 8) | quantized[:, 2]
    unique_keys, first_index, counts = np.unique(
        keys, return_index=True, return_counts=True
    )
    order = np.argsort(first_index, kind="stable")

    buckets = [
        ColorBucket(
            rgb=(
                int(unique_keys[i] >> 16) & 0xFF,
                int(unique_keys[i] >> 8) & 0xFF,
                int(unique_keys[i]) & 0xFF,
            ),
            count=int(counts[i]),
            first_seen=int(kept_indices[first_index[i]]),
        )
        for i in order
    ]
    logger.debug("{} distinct quantized colors", len(buckets))
    return buckets


def score_bucket(bucket: ColorBucket) -> float:
    """Favor saturated, mid-lightness, frequent colors.

    Frequency enters through ``ln(count + 1)`` so one large background does
    not crowd everything else out.
    """
    _, saturation, lightness = round_hsl(rgb_to_hsl(*bucket.rgb))
    return (
        saturation / 100 * min(lightness, 100 - lightness) / 50 * math.log(bucket.count + 1)
    )


def group_key(
    rgb: tuple[int, int, int], settings: ExtractionSettings | None = None
) -> tuple[int, int, int]:
    settings = settings or DEFAULT_SETTINGS
    hue, saturation, lightness = round_hsl(rgb_to_hsl(*rgb))
    return (
        round_half_up(hue / settings.hue_bin),
        round_half_up(saturation / settings.saturation_bin),
        round_half_up(lightness / settings.lightness_bin),
    )


def rank_buckets(
    buckets: list[ColorBucket],
    k: int = DEFAULT_TOP_K,
    settings: ExtractionSettings | None = None,
) -> list[PaletteSwatch]:
    validate_k(k)
    settings = settings or DEFAULT_SETTINGS

    # dicts keep insertion order, so groups stay in first-seen order.
    groups: dict[tuple[int, int, int], _Group] = {}
    for bucket in sorted(buckets, key=lambda item: item.first_seen):
        score = score_bucket(bucket)
        key = group_key(bucket.rgb, settings)
        group = groups.get(key)
        if group is None:
            groups[key] = _Group(representative=bucket, score=score)
            continue
        if bucket.count > group.representative.count:
            group.representative = bucket
        group.score = max(group.score, score)

    logger.debug("{} buckets merged into {} groups", len(buckets), len(groups))

    ranked = sorted(groups.values(), key=lambda group: group.score, reverse=True)
    return [
        PaletteSwatch(
            color=Color.from_rgb(*group.representative.rgb),
            weight=group.representative.count,
            score=group.score,
        )
        for group in ranked[:k]
    ]


def validate_k(k: int) -> None:
    if k < 1:
        raise InvalidRange(f"palette size must be at least 1, got {k}")


def _as_rgba_rows(pixels: Any, width: int, height: int) -> np.ndarray:
    if width < 0 or height < 0:
        raise ValueError("width and height must not be negative")

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        array = np.frombuffer(pixels, dtype=np.uint8)
    else:
        array = np.asarray(pixels)

    if array.ndim == 3 and array.shape != (height, width, 4):
        raise ValueError(
            f"pixel array has shape {array.shape}, expected ({height}, {width}, 4)"
        )

    expected = width * height * 4
    if array.size != expected:
        raise ValueError(
            f"pixel buffer holds {array.size} values, expected {expected} "
            f"for a {width}x{height} RGBA image"
        )
    return array.reshape(-1, 4).astype(np.int64)
