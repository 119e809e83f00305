from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from .convert import normalize_hex
from .models import NamedColorEntry, PaletteSwatch

DistanceFn = Callable[[str, str], int]

NAMED_COLORS: tuple[NamedColorEntry, ...] = (
    NamedColorEntry("#FF0000", "Red"),
    NamedColorEntry("#FF4500", "Orange Red"),
    NamedColorEntry("#FFA500", "Orange"),
    NamedColorEntry("#FFD700", "Gold"),
    NamedColorEntry("#FFFF00", "Yellow"),
    NamedColorEntry("#9ACD32", "Yellow Green"),
    NamedColorEntry("#00FF00", "Lime"),
    NamedColorEntry("#00FA9A", "Medium Spring Green"),
    NamedColorEntry("#00FFFF", "Cyan"),
    NamedColorEntry("#00BFFF", "Deep Sky Blue"),
    NamedColorEntry("#0000FF", "Blue"),
    NamedColorEntry("#8A2BE2", "Blue Violet"),
    NamedColorEntry("#FF00FF", "Magenta"),
    NamedColorEntry("#FF1493", "Deep Pink"),
    NamedColorEntry("#FF69B4", "Hot Pink"),
    NamedColorEntry("#FFC0CB", "Pink"),
    NamedColorEntry("#F5F5DC", "Beige"),
    NamedColorEntry("#F5DEB3", "Wheat"),
    NamedColorEntry("#DEB887", "Burly Wood"),
    NamedColorEntry("#D2691E", "Chocolate"),
    NamedColorEntry("#8B4513", "Saddle Brown"),
    NamedColorEntry("#A0522D", "Sienna"),
    NamedColorEntry("#CD853F", "Peru"),
    NamedColorEntry("#DAA520", "Golden Rod"),
    NamedColorEntry("#BDB76B", "Dark Khaki"),
    NamedColorEntry("#F0E68C", "Khaki"),
    NamedColorEntry("#EEE8AA", "Pale Golden Rod"),
    NamedColorEntry("#98FB98", "Pale Green"),
    NamedColorEntry("#90EE90", "Light Green"),
    NamedColorEntry("#32CD32", "Lime Green"),
    NamedColorEntry("#228B22", "Forest Green"),
    NamedColorEntry("#006400", "Dark Green"),
    NamedColorEntry("#008B8B", "Dark Cyan"),
    NamedColorEntry("#20B2AA", "Light Sea Green"),
    NamedColorEntry("#48D1CC", "Medium Turquoise"),
    NamedColorEntry("#40E0D0", "Turquoise"),
    NamedColorEntry("#7FFFD4", "Aquamarine"),
    NamedColorEntry("#66CDAA", "Medium Aquamarine"),
    NamedColorEntry("#4682B4", "Steel Blue"),
    NamedColorEntry("#5F9EA0", "Cadet Blue"),
    NamedColorEntry("#B0C4DE", "Light Steel Blue"),
    NamedColorEntry("#B0E0E6", "Powder Blue"),
    NamedColorEntry("#ADD8E6", "Light Blue"),
    NamedColorEntry("#87CEEB", "Sky Blue"),
    NamedColorEntry("#87CEFA", "Light Sky Blue"),
    NamedColorEntry("#4169E1", "Royal Blue"),
    NamedColorEntry("#191970", "Midnight Blue"),
    NamedColorEntry("#483D8B", "Dark Slate Blue"),
    NamedColorEntry("#6A5ACD", "Slate Blue"),
    NamedColorEntry("#9370DB", "Medium Purple"),
    NamedColorEntry("#9400D3", "Dark Violet"),
    NamedColorEntry("#9932CC", "Dark Orchid"),
    NamedColorEntry("#BA55D3", "Medium Orchid"),
    NamedColorEntry("#DA70D6", "Orchid"),
    NamedColorEntry("#EE82EE", "Violet"),
    NamedColorEntry("#DDA0DD", "Plum"),
    NamedColorEntry("#E6E6FA", "Lavender"),
    NamedColorEntry("#F8F8FF", "Ghost White"),
    NamedColorEntry("#FFFFFF", "White"),
    NamedColorEntry("#F5F5F5", "White Smoke"),
    NamedColorEntry("#DCDCDC", "Gainsboro"),
    NamedColorEntry("#D3D3D3", "Light Gray"),
    NamedColorEntry("#C0C0C0", "Silver"),
    NamedColorEntry("#A9A9A9", "Dark Gray"),
    NamedColorEntry("#808080", "Gray"),
    NamedColorEntry("#696969", "Dim Gray"),
    NamedColorEntry("#2F4F4F", "Dark Slate Gray"),
    NamedColorEntry("#000000", "Black"),
)

_NAMES_BY_HEX: Mapping[str, str] = MappingProxyType(
    {entry.hex: entry.name for entry in NAMED_COLORS}
)


def packed_distance(a: str, b: str) -> int:
    """Difference between two hex colors read as packed 24-bit integers.

    Not perceptual: a one-step change in red moves the value 65536 times
    further than a one-step change in blue. Kept for naming compatibility.
    """
    return abs(int(a.lstrip("#"), 16) - int(b.lstrip("#"), 16))


def nearest_name(
    hex_value: str,
    table: Sequence[NamedColorEntry] = NAMED_COLORS,
    distance: DistanceFn = packed_distance,
) -> str:
    if not table:
        raise ValueError("color name table must contain at least one entry")

    query = normalize_hex(hex_value)
    if table is NAMED_COLORS:
        exact = _NAMES_BY_HEX.get(query)
        if exact is not None:
            return exact
    else:
        for entry in table:
            if normalize_hex(entry.hex) == query:
                return entry.name

    best_name = table[0].name
    best_distance: int | None = None
    for entry in table:
        current = distance(query, normalize_hex(entry.hex))
        if best_distance is None or current < best_distance:
            best_distance = current
            best_name = entry.name
    return best_name


def assign_names(
    swatches: Sequence[PaletteSwatch],
    table: Sequence[NamedColorEntry] = NAMED_COLORS,
    distance: DistanceFn = packed_distance,
) -> list[PaletteSwatch]:
    return [
        replace(
            swatch,
            name=nearest_name(swatch.color.hex, table=table, distance=distance),
        )
        for swatch in swatches
    ]
