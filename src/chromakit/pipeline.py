from __future__ import annotations

from pathlib import Path
from typing import Sequence

from loguru import logger

from .extract import (
    DEFAULT_TOP_K,
    ExtractionSettings,
    count_buckets,
    rank_buckets,
    validate_k,
)
from .io import DEFAULT_TIMEOUT, read_image_rgba, resize_to_max_side
from .models import ExtractionResult, NamedColorEntry
from .naming import NAMED_COLORS, assign_names
from .palette import load_palette


class PaletteExtractionPipeline:
    def __init__(
        self,
        settings: ExtractionSettings | None = None,
        names_path: str | Path | None = None,
        max_side: int = 0,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.max_side = max_side
        self.timeout = timeout
        self.name_table: Sequence[NamedColorEntry] = (
            NAMED_COLORS if names_path is None else load_palette(names_path)
        )

    def run(self, image_path: str, top_k: int = DEFAULT_TOP_K) -> ExtractionResult:
        validate_k(top_k)
        image_rgba = read_image_rgba(image_path, timeout=self.timeout)
        image_rgba = resize_to_max_side(image_rgba, self.max_side)
        height, width = image_rgba.shape[:2]
        logger.info("extracting palette from {} ({}x{})", image_path, width, height)

        warnings: list[str] = []
        buckets = count_buckets(image_rgba, width, height, settings=self.settings)
        qualifying = sum(bucket.count for bucket in buckets)

        if not buckets:
            warnings.append("no_qualifying_pixels")
            return ExtractionResult(
                palette=[],
                width=width,
                height=height,
                qualifying_pixels=0,
                warnings=warnings,
            )

        swatches = rank_buckets(buckets, k=top_k, settings=self.settings)
        if len(swatches) < top_k:
            warnings.append("palette_smaller_than_requested")

        return ExtractionResult(
            palette=assign_names(swatches, table=self.name_table),
            width=width,
            height=height,
            qualifying_pixels=qualifying,
            warnings=warnings,
        )
