from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from .config import Settings
from .contrast import evaluate
from .convert import ColorError
from .harmony import DEFAULT_COUNT, MAX_COUNT, MIN_COUNT, generate, generate_kind
from .log import configure_logging
from .models import Color, HarmonyKind
from .naming import nearest_name
from .pipeline import PaletteExtractionPipeline

settings = Settings.from_env()

MAX_TOP_K = 32
DEFAULT_TOP_K = max(1, min(settings.palette_size, MAX_TOP_K))


class ExtractRequest(BaseModel):
    image_url: str = Field(..., description="HTTP(S) image URL")
    top_k: int = Field(
        default=DEFAULT_TOP_K, ge=1, le=MAX_TOP_K, description="Maximum colors to return"
    )
    max_side: int = Field(
        default=settings.max_image_side,
        ge=0,
        description="Downscale so the longest side is at most this (0 keeps size)",
    )


class ColorItem(BaseModel):
    hex: str
    rgb: str
    hsl: str
    name: str | None = None


class SwatchItem(ColorItem):
    weight: int
    score: float


class ExtractResponse(BaseModel):
    colors: list[SwatchItem]
    qualifying_pixels: int
    warnings: list[str]


class ConvertRequest(BaseModel):
    hex: str = Field(..., description="Color as #RRGGBB")


class HarmonyRequest(BaseModel):
    base: str = Field(..., description="Base color as #RRGGBB")
    count: int = Field(default=DEFAULT_COUNT, ge=MIN_COUNT, le=MAX_COUNT)
    kind: HarmonyKind | None = Field(
        default=None, description="Single harmony to build; all when omitted"
    )
    saturation: int | None = Field(default=None, ge=0, le=100)
    lightness: int | None = Field(default=None, ge=0, le=100)


class HarmonyItem(BaseModel):
    type: str
    colors: list[ColorItem]


class HarmonyResponse(BaseModel):
    harmonies: list[HarmonyItem]


class ContrastRequest(BaseModel):
    foreground: str = Field(..., description="Foreground color as #RRGGBB")
    background: str = Field(..., description="Background color as #RRGGBB")


class ContrastResponse(BaseModel):
    ratio: float
    rating: str
    description: str


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.log_level)
    yield


app = FastAPI(
    lifespan=lifespan,
    title="chromakit API",
    version="1.0.0",
    description="Color conversion, harmonies, contrast checks and image palettes.",
)


def _build_pipeline(max_side: int) -> PaletteExtractionPipeline:
    return PaletteExtractionPipeline(max_side=max_side, timeout=settings.http_timeout)


def _color_item(color: Color) -> ColorItem:
    return ColorItem(
        hex=color.hex,
        rgb=color.rgb_css(),
        hsl=color.hsl_css(),
        name=nearest_name(color.hex),
    )


@app.post("/extract", response_model=ExtractResponse)
async def extract_colors(payload: ExtractRequest) -> ExtractResponse:
    pipeline = _build_pipeline(max_side=payload.max_side)
    try:
        result = await run_in_threadpool(pipeline.run, payload.image_url, payload.top_k)
    except Exception as exc:
        raise HTTPException(
            status_code=400, detail=f"failed_to_extract_colors: {exc}"
        ) from exc

    colors = [
        SwatchItem(
            hex=swatch.color.hex,
            rgb=swatch.color.rgb_css(),
            hsl=swatch.color.hsl_css(),
            name=swatch.name,
            weight=int(swatch.weight),
            score=float(swatch.score),
        )
        for swatch in result.palette
    ]
    return ExtractResponse(
        colors=colors,
        qualifying_pixels=int(result.qualifying_pixels),
        warnings=result.warnings,
    )


@app.post("/convert", response_model=ColorItem)
async def convert_color(payload: ConvertRequest) -> ColorItem:
    try:
        color = Color.from_hex(payload.hex)
    except ColorError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _color_item(color)


@app.post("/harmony", response_model=HarmonyResponse)
async def harmony(payload: HarmonyRequest) -> HarmonyResponse:
    try:
        base = Color.from_hex(payload.base)
        if payload.kind is not None:
            sets = [
                generate_kind(
                    payload.kind,
                    base,
                    count=payload.count,
                    saturation=payload.saturation,
                    lightness=payload.lightness,
                )
            ]
        else:
            sets = list(
                generate(
                    base,
                    count=payload.count,
                    saturation=payload.saturation,
                    lightness=payload.lightness,
                )
            )
    except ColorError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return HarmonyResponse(
        harmonies=[
            HarmonyItem(
                type=item.kind.label,
                colors=[_color_item(color) for color in item.colors],
            )
            for item in sets
        ]
    )


@app.post("/contrast", response_model=ContrastResponse)
async def contrast(payload: ContrastRequest) -> ContrastResponse:
    try:
        result = evaluate(
            Color.from_hex(payload.foreground), Color.from_hex(payload.background)
        )
    except ColorError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return ContrastResponse(
        ratio=float(result.ratio),
        rating=result.rating.value,
        description=result.description,
    )
