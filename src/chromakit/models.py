from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Sequence

from .convert import (
    HSL,
    HSV,
    RGB,
    InvalidRange,
    hsl_css,
    hsl_to_rgb,
    hsv_to_rgb,
    parse_hex,
    rgb_css,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_hsv,
    round_hsl,
    round_hsv,
)


@dataclass(frozen=True)
class Color:
    hex: str
    rgb: RGB
    hsl: HSL
    hsv: HSV

    @classmethod
    def from_hex(cls, value: str) -> Color:
        return cls.from_rgb(*parse_hex(value))

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Color:
        hex_value = rgb_to_hex(r, g, b)
        rgb = RGB(int(r), int(g), int(b))
        return cls(
            hex=hex_value,
            rgb=rgb,
            hsl=round_hsl(rgb_to_hsl(*rgb)),
            hsv=round_hsv(rgb_to_hsv(*rgb)),
        )

    @classmethod
    def from_hsl(cls, h: float, s: float, l: float) -> Color:
        rgb = hsl_to_rgb(h, s, l)
        return cls(
            hex=rgb_to_hex(*rgb),
            rgb=rgb,
            hsl=round_hsl(HSL(h, s, l)),
            hsv=round_hsv(rgb_to_hsv(*rgb)),
        )

    @classmethod
    def from_hsv(cls, h: float, s: float, v: float) -> Color:
        rgb = hsv_to_rgb(h, s, v)
        return cls(
            hex=rgb_to_hex(*rgb),
            rgb=rgb,
            hsl=round_hsl(rgb_to_hsl(*rgb)),
            hsv=round_hsv(HSV(h, s, v)),
        )

    def rgb_css(self) -> str:
        return rgb_css(self.rgb)

    def hsl_css(self) -> str:
        return hsl_css(self.hsl)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hex": self.hex,
            "rgb": {"r": self.rgb.r, "g": self.rgb.g, "b": self.rgb.b},
            "hsl": {"h": self.hsl.h, "s": self.hsl.s, "l": self.hsl.l},
            "hsv": {"h": self.hsv.h, "s": self.hsv.s, "v": self.hsv.v},
        }


@dataclass(frozen=True)
class NamedColorEntry:
    hex: str
    name: str


class HarmonyKind(str, Enum):
    COMPLEMENTARY = "complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    MONOCHROMATIC = "monochromatic"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class HarmonySet:
    kind: HarmonyKind
    colors: tuple[Color, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.label,
            "colors": [color.to_dict() for color in self.colors],
        }


@dataclass(frozen=True)
class HarmonyFamily:
    complementary: HarmonySet
    analogous: HarmonySet
    triadic: HarmonySet
    tetradic: HarmonySet | None
    monochromatic: HarmonySet

    def __iter__(self) -> Iterator[HarmonySet]:
        for harmony in (
            self.complementary,
            self.analogous,
            self.triadic,
            self.tetradic,
            self.monochromatic,
        ):
            if harmony is not None:
                yield harmony

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def to_dict(self) -> dict[str, Any]:
        return {"harmonies": [harmony.to_dict() for harmony in self]}


class Rating(str, Enum):
    AAA = "AAA"
    AA = "AA"
    FAIL = "Fail"


@dataclass(frozen=True)
class ContrastResult:
    ratio: float
    rating: Rating
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "ratio": float(self.ratio),
            "rating": self.rating.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class PaletteSwatch:
    color: Color
    weight: int
    score: float = 0.0
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = self.color.to_dict()
        payload.update(
            {
                "weight": int(self.weight),
                "score": float(self.score),
                "name": self.name,
            }
        )
        return payload


@dataclass(frozen=True)
class GradientStop:
    color: Color
    position: float


@dataclass(frozen=True)
class Gradient:
    stops: tuple[GradientStop, ...]

    def __post_init__(self) -> None:
        stops = tuple(self.stops)
        object.__setattr__(self, "stops", stops)
        if len(stops) < 2:
            raise InvalidRange("a gradient needs at least two stops")
        previous = 0.0
        for stop in stops:
            if not 0.0 <= stop.position <= 1.0:
                raise InvalidRange(f"stop position {stop.position} outside 0..1")
            if stop.position < previous:
                raise InvalidRange("gradient stop positions must not decrease")
            previous = stop.position

    @classmethod
    def evenly_spaced(cls, colors: Sequence[Color]) -> Gradient:
        if len(colors) < 2:
            raise InvalidRange("a gradient needs at least two colors")
        last = len(colors) - 1
        return cls(
            tuple(
                GradientStop(color=color, position=index / last)
                for index, color in enumerate(colors)
            )
        )


@dataclass(frozen=True)
class ExtractionResult:
    palette: list[PaletteSwatch]
    width: int
    height: int
    qualifying_pixels: int
    warnings: list[str] = field(default_factory=list)

    @property
    def primary(self) -> PaletteSwatch | None:
        return self.palette[0] if self.palette else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "palette": [swatch.to_dict() for swatch in self.palette],
            "width": int(self.width),
            "height": int(self.height),
            "qualifying_pixels": int(self.qualifying_pixels),
            "warnings": list(self.warnings),
        }
