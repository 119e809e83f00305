"""Runtime settings for the command line and HTTP surfaces.

Values come from ``CHROMAKIT_*`` environment variables; the color engine
itself takes everything as explicit arguments.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    http_timeout: float = 10.0
    max_image_side: int = 0  # 0 disables downscaling
    palette_size: int = 8

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            log_level=env.get("CHROMAKIT_LOG_LEVEL", "INFO").upper(),
            http_timeout=float(env.get("CHROMAKIT_HTTP_TIMEOUT", "10")),
            max_image_side=int(env.get("CHROMAKIT_MAX_IMAGE_SIDE", "0")),
            palette_size=int(env.get("CHROMAKIT_PALETTE_SIZE", "8")),
        )
