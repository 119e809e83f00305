from __future__ import annotations

import importlib

from fastapi.testclient import TestClient

from chromakit import api
from chromakit.models import Color, ExtractionResult, PaletteSwatch


def test_extract_endpoint_returns_swatches(monkeypatch):
    class FakePipeline:
        def run(self, image_path: str, top_k: int):
            assert image_path == "https://example.com/image.jpg"
            assert top_k == 2
            return ExtractionResult(
                palette=[
                    PaletteSwatch(
                        color=Color.from_hex("#123456"), weight=30, score=0.8, name="Navy"
                    ),
                    PaletteSwatch(
                        color=Color.from_hex("#FF0000"), weight=10, score=0.5, name="Red"
                    ),
                ],
                width=10,
                height=4,
                qualifying_pixels=40,
            )

    monkeypatch.setattr(api, "_build_pipeline", lambda max_side: FakePipeline())

    client = TestClient(api.app)
    response = client.post(
        "/extract", json={"image_url": "https://example.com/image.jpg", "top_k": 2}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["qualifying_pixels"] == 40
    assert payload["warnings"] == []
    assert len(payload["colors"]) == 2
    assert payload["colors"][0]["hex"] == "#123456"
    assert payload["colors"][0]["name"] == "Navy"
    assert payload["colors"][0]["weight"] == 30
    assert payload["colors"][1]["rgb"] == "rgb(255, 0, 0)"


def test_extract_endpoint_reports_failures(monkeypatch):
    class BrokenPipeline:
        def run(self, image_path: str, top_k: int):
            raise OSError("cannot identify image file")

    monkeypatch.setattr(api, "_build_pipeline", lambda max_side: BrokenPipeline())

    client = TestClient(api.app)
    response = client.post("/extract", json={"image_url": "https://example.com/x.jpg"})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("failed_to_extract_colors")


def test_convert_endpoint():
    client = TestClient(api.app)
    response = client.post("/convert", json={"hex": "00ff00"})

    assert response.status_code == 200
    assert response.json() == {
        "hex": "#00FF00",
        "rgb": "rgb(0, 255, 0)",
        "hsl": "hsl(120, 100%, 50%)",
        "name": "Lime",
    }


def test_convert_endpoint_rejects_bad_hex():
    client = TestClient(api.app)
    response = client.post("/convert", json={"hex": "#12"})
    assert response.status_code == 400


def test_harmony_endpoint_single_kind():
    client = TestClient(api.app)
    response = client.post(
        "/harmony", json={"base": "#FF0000", "kind": "triadic"}
    )

    assert response.status_code == 200
    harmonies = response.json()["harmonies"]
    assert len(harmonies) == 1
    assert harmonies[0]["type"] == "Triadic"
    assert [color["hex"] for color in harmonies[0]["colors"]] == [
        "#FF0000",
        "#00FF00",
        "#0000FF",
    ]


def test_harmony_endpoint_all_kinds():
    client = TestClient(api.app)
    response = client.post("/harmony", json={"base": "#3366CC", "count": 4})

    assert response.status_code == 200
    assert len(response.json()["harmonies"]) == 5


def test_harmony_endpoint_validates_count():
    client = TestClient(api.app)
    response = client.post("/harmony", json={"base": "#FF0000", "count": 20})
    assert response.status_code == 422


def test_contrast_endpoint():
    client = TestClient(api.app)
    response = client.post(
        "/contrast", json={"foreground": "#767676", "background": "#FFFFFF"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["rating"] == "AA"
    assert payload["description"] == "Good contrast - meets AA standards"


def test_oversized_palette_setting_is_clamped(monkeypatch):
    monkeypatch.setenv("CHROMAKIT_PALETTE_SIZE", "50")
    module = importlib.reload(api)
    try:
        assert module.DEFAULT_TOP_K == module.MAX_TOP_K
        assert module.ExtractRequest(image_url="https://example.com/a.png").top_k == 32
    finally:
        monkeypatch.delenv("CHROMAKIT_PALETTE_SIZE")
        importlib.reload(api)
