from loguru import logger

from .contrast import evaluate
from .convert import ColorError, InvalidFormat, InvalidRange
from .extract import ExtractionSettings, extract_palette
from .gradient import at, interpolate
from .harmony import generate, generate_kind
from .models import (
    Color,
    ContrastResult,
    ExtractionResult,
    Gradient,
    GradientStop,
    HarmonyFamily,
    HarmonyKind,
    HarmonySet,
    PaletteSwatch,
    Rating,
)
from .naming import nearest_name
from .pipeline import PaletteExtractionPipeline

logger.disable("chromakit")

__all__ = [
    "Color",
    "ColorError",
    "ContrastResult",
    "ExtractionResult",
    "ExtractionSettings",
    "Gradient",
    "GradientStop",
    "HarmonyFamily",
    "HarmonyKind",
    "HarmonySet",
    "InvalidFormat",
    "InvalidRange",
    "PaletteExtractionPipeline",
    "PaletteSwatch",
    "Rating",
    "at",
    "evaluate",
    "extract_palette",
    "generate",
    "generate_kind",
    "interpolate",
    "nearest_name",
]
