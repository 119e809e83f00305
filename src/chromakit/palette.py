from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable

from .convert import InvalidFormat, normalize_hex
from .models import Color, NamedColorEntry

FORMATS = ("hex", "rgb", "hsl", "all")


class PaletteValidationError(ValueError):
    pass


def load_palette(palette_path: str | Path) -> list[NamedColorEntry]:
    path = Path(palette_path)
    if not path.exists():
        raise PaletteValidationError(f"palette file does not exist: {path}")

    if path.suffix.lower() == ".csv":
        entries = _load_csv(path)
    elif path.suffix.lower() == ".json":
        entries = _load_json(path)
    else:
        raise PaletteValidationError(
            f"unsupported palette format '{path.suffix}'. Use .csv or .json"
        )

    if not entries:
        raise PaletteValidationError(f"palette has no usable entries: {path}")
    return entries


def palette_colors(entries: Iterable[NamedColorEntry]) -> list[Color]:
    return [Color.from_hex(entry.hex) for entry in entries]


def format_palette(colors: Iterable[Color], fmt: str = "hex") -> str:
    if fmt not in FORMATS:
        raise ValueError(f"unknown palette format '{fmt}', expected one of {FORMATS}")

    lines = []
    for color in colors:
        if fmt == "hex":
            lines.append(color.hex)
        elif fmt == "rgb":
            lines.append(color.rgb_css())
        elif fmt == "hsl":
            lines.append(color.hsl_css())
        else:
            lines.append(f"{color.hex} {color.rgb_css()} {color.hsl_css()}")
    return "\n".join(lines)


def _load_csv(path: Path) -> list[NamedColorEntry]:
    with path.open("r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise PaletteValidationError(f"palette csv has no header: {path}")

        entries: list[NamedColorEntry] = []
        for idx, row in enumerate(reader, start=2):
            entries.append(_parse_entry(row, f"{path}:{idx}"))
        return entries


def _load_json(path: Path) -> list[NamedColorEntry]:
    payload = json.loads(path.read_text(encoding="utf-8"))

    if isinstance(payload, dict):
        if "colors" not in payload or not isinstance(payload["colors"], list):
            raise PaletteValidationError(
                f"json palette at {path} must be a list or include a 'colors' list"
            )
        records = payload["colors"]
    elif isinstance(payload, list):
        records = payload
    else:
        raise PaletteValidationError(
            f"json palette at {path} must be a list or object with 'colors'"
        )

    entries: list[NamedColorEntry] = []
    for idx, record in enumerate(records, start=1):
        if isinstance(record, str):
            # Bare hex strings are allowed; they are named after themselves.
            record = {"hex": record}
        if not isinstance(record, dict):
            raise PaletteValidationError(
                f"invalid palette entry at {path}:{idx} (expected object)"
            )
        entries.append(_parse_entry(record, f"{path}:{idx}"))
    return entries


def _parse_entry(raw_entry: dict[str, object], location: str) -> NamedColorEntry:
    normalized: dict[str, object] = {
        str(key).strip().lower(): value
        for key, value in raw_entry.items()
        if key is not None
    }

    hex_value = _as_clean_str(normalized.get("hex"))
    if not hex_value:
        raise PaletteValidationError(f"{location}: missing required field 'hex'")

    try:
        canonical_hex = normalize_hex(hex_value)
    except InvalidFormat as exc:
        raise PaletteValidationError(
            f"{location}: invalid hex color '{hex_value}'"
        ) from exc

    name = _as_clean_str(normalized.get("name")) or canonical_hex
    return NamedColorEntry(hex=canonical_hex, name=name)


def _as_clean_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None
