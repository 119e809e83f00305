from __future__ import annotations

import json

import numpy as np
import pytest
from PIL import Image

from chromakit.convert import InvalidRange
from chromakit.io import write_result_json
from chromakit.pipeline import PaletteExtractionPipeline


def _write_image(path, rgb, size=(8, 8)):
    image = np.zeros((size[1], size[0], 3), dtype=np.uint8)
    image[:, :] = rgb
    Image.fromarray(image).save(path)


def test_pipeline_names_swatches_from_custom_table(tmp_path):
    image_path = tmp_path / "solid.png"
    _write_image(image_path, [30, 120, 210])

    names_path = tmp_path / "names.csv"
    names_path.write_text("name,hex\nAzure,#1E78D2\n", encoding="utf-8")

    result = PaletteExtractionPipeline(names_path=names_path).run(str(image_path), top_k=3)

    assert result.width == 8 and result.height == 8
    assert result.qualifying_pixels == 64
    assert len(result.palette) == 1
    assert result.primary.color.hex == "#2080D0"
    assert result.primary.name == "Azure"
    assert result.primary.weight == 64
    assert result.warnings == ["palette_smaller_than_requested"]


def test_pipeline_uses_builtin_names_by_default(tmp_path):
    image_path = tmp_path / "red.png"
    _write_image(image_path, [255, 0, 0])

    result = PaletteExtractionPipeline().run(str(image_path), top_k=1)

    assert result.primary.name == "Red"
    assert result.warnings == []


def test_pipeline_reports_images_without_qualifying_pixels(tmp_path):
    image_path = tmp_path / "white.png"
    _write_image(image_path, [255, 255, 255])

    result = PaletteExtractionPipeline().run(str(image_path))

    assert result.palette == []
    assert result.primary is None
    assert result.qualifying_pixels == 0
    assert result.warnings == ["no_qualifying_pixels"]


def test_pipeline_downscales_large_images(tmp_path):
    image_path = tmp_path / "large.png"
    _write_image(image_path, [255, 0, 0], size=(64, 32))

    result = PaletteExtractionPipeline(max_side=16).run(str(image_path), top_k=1)

    assert (result.width, result.height) == (16, 8)
    assert result.qualifying_pixels == 128


def test_result_json_round_trip(tmp_path):
    image_path = tmp_path / "red.png"
    _write_image(image_path, [255, 0, 0])
    result = PaletteExtractionPipeline().run(str(image_path), top_k=1)

    out_path = tmp_path / "out" / "result.json"
    write_result_json(result, out_path)

    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["palette"][0]["hex"] == "#FF0000"
    assert payload["palette"][0]["rgb"] == {"r": 255, "g": 0, "b": 0}
    assert payload["palette"][0]["name"] == "Red"
    assert payload["qualifying_pixels"] == 64


def test_pipeline_rejects_empty_palette_request(tmp_path):
    image_path = tmp_path / "white.png"
    _write_image(image_path, [255, 255, 255])

    with pytest.raises(InvalidRange):
        PaletteExtractionPipeline().run(str(image_path), top_k=0)
