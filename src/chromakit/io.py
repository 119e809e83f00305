from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any, Protocol

import numpy as np
import requests
from PIL import Image

DEFAULT_TIMEOUT = 10.0


class SupportsToDict(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


def read_image_rgba(
    image_path: str | Path, timeout: float = DEFAULT_TIMEOUT
) -> np.ndarray:
    path_str = str(image_path)
    if path_str.startswith(("http://", "https://")):
        response = requests.get(path_str, timeout=timeout)
        response.raise_for_status()
        image_data = io.BytesIO(response.content)
        with Image.open(image_data) as image:
            rgba = image.convert("RGBA")
            return np.asarray(rgba, dtype=np.uint8)

    path = Path(image_path)
    with Image.open(path) as image:
        rgba = image.convert("RGBA")
        return np.asarray(rgba, dtype=np.uint8)


def resize_to_max_side(image_rgba: np.ndarray, max_side: int) -> np.ndarray:
    height, width = image_rgba.shape[:2]
    longest = max(height, width)
    if max_side <= 0 or longest <= max_side:
        return image_rgba

    scale = max_side / float(longest)
    new_h = max(1, int(round(height * scale)))
    new_w = max(1, int(round(width * scale)))
    resized = Image.fromarray(image_rgba).resize(
        (new_w, new_h), Image.Resampling.BILINEAR
    )
    return np.asarray(resized, dtype=np.uint8)


def save_image_rgba(image_rgba: np.ndarray, output_path: str | Path) -> None:
    if image_rgba.ndim != 3 or image_rgba.shape[2] != 4:
        raise ValueError("image must have shape (H, W, 4)")

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(image_rgba.astype(np.uint8)).save(path)


def write_result_json(result: SupportsToDict, output_path: str | Path) -> None:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(result.to_dict(), indent=2)
    path.write_text(payload + "\n", encoding="utf-8")
