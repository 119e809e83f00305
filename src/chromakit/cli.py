from __future__ import annotations

import argparse
import json
import random
from pathlib import Path
from typing import Any

from .config import Settings
from .contrast import evaluate
from .convert import ColorError
from .extract import ExtractionSettings
from .gradient import tint_dark_pixels
from .harmony import (
    DEFAULT_COUNT,
    custom_palette,
    generate,
    generate_kind,
    random_palette,
    stepped_gradient,
)
from .io import read_image_rgba, save_image_rgba
from .log import configure_logging
from .models import Color, Gradient, HarmonyKind
from .naming import nearest_name
from .palette import FORMATS, format_palette, load_palette, palette_colors
from .pipeline import PaletteExtractionPipeline

PALETTE_KINDS = ["random", "custom", "gradient"] + [kind.value for kind in HarmonyKind]


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chromakit",
        description="Color conversion, harmonies, contrast checks and image palettes.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Log level for stderr output (default from CHROMAKIT_LOG_LEVEL).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser(
        "extract", help="Extract a ranked palette from an image."
    )
    extract.add_argument("--image", required=True, help="Path or URL to the input image.")
    extract.add_argument(
        "--top-k",
        type=int,
        default=settings.palette_size,
        help="Maximum number of palette colors to return.",
    )
    extract.add_argument(
        "--max-side",
        type=int,
        default=settings.max_image_side,
        help="Downscale so the longest side is at most this many pixels (0 keeps size).",
    )
    extract.add_argument(
        "--names",
        default=None,
        help="Optional .csv/.json table of name,hex entries used for color names.",
    )
    extract.add_argument(
        "--out",
        default=None,
        help="Optional JSON output path. If omitted, prints JSON to stdout.",
    )

    convert = subparsers.add_parser(
        "convert", help="Show every representation and the nearest name of a color."
    )
    convert.add_argument("--hex", required=True, help="Color as #RRGGBB.")

    harmony = subparsers.add_parser("harmony", help="Generate color harmonies.")
    harmony.add_argument("--base", required=True, help="Base color as #RRGGBB.")
    harmony.add_argument("--count", type=int, default=DEFAULT_COUNT)
    harmony.add_argument(
        "--kind",
        choices=[kind.value for kind in HarmonyKind],
        default=None,
        help="Only generate this harmony. All five are generated when omitted.",
    )
    harmony.add_argument("--saturation", type=int, default=None)
    harmony.add_argument("--lightness", type=int, default=None)

    palette = subparsers.add_parser(
        "palette", help="Generate a palette and print it in a copyable format."
    )
    palette.add_argument("--kind", choices=PALETTE_KINDS, default="random")
    palette.add_argument("--count", type=int, default=DEFAULT_COUNT)
    palette.add_argument("--base", default=None, help="Base color for harmony kinds.")
    palette.add_argument(
        "--colors",
        nargs="+",
        default=None,
        help="Colors for custom palettes, or the stops of a gradient.",
    )
    palette.add_argument(
        "--file", default=None, help="A .csv/.json palette file for custom palettes."
    )
    palette.add_argument("--seed", type=int, default=None, help="Seed for random palettes.")
    palette.add_argument("--format", choices=FORMATS, default="hex")

    contrast = subparsers.add_parser(
        "contrast", help="Check WCAG contrast between two colors."
    )
    contrast.add_argument("--fg", required=True, help="Foreground color as #RRGGBB.")
    contrast.add_argument("--bg", required=True, help="Background color as #RRGGBB.")

    tint = subparsers.add_parser(
        "tint", help="Recolor the dark pixels of a bitmap with a diagonal gradient."
    )
    tint.add_argument("--image", required=True, help="Path or URL to the bitmap.")
    tint.add_argument(
        "--colors", nargs="+", required=True, help="Two or more gradient colors."
    )
    tint.add_argument("--out", required=True, help="Output image path.")
    tint.add_argument("--threshold", type=int, default=128)

    return parser


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def _run_extract(args: argparse.Namespace, settings: Settings) -> None:
    pipeline = PaletteExtractionPipeline(
        settings=ExtractionSettings(),
        names_path=args.names,
        max_side=args.max_side,
        timeout=settings.http_timeout,
    )
    result = pipeline.run(args.image, top_k=args.top_k)
    payload = json.dumps(result.to_dict(), indent=2)

    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)


def _run_palette(args: argparse.Namespace) -> str:
    if args.kind == "random":
        rng = random.Random(args.seed)
        colors = random_palette(args.count, rng=rng)
    elif args.kind == "custom":
        if args.file:
            colors = palette_colors(load_palette(args.file))
        elif args.colors:
            colors = custom_palette(args.colors)
        else:
            raise ColorError("custom palettes need --colors or --file")
    elif args.kind == "gradient":
        if not args.colors or len(args.colors) < 2:
            raise ColorError("gradient palettes need at least two --colors")
        colors = stepped_gradient(
            [Color.from_hex(value) for value in args.colors], steps=args.count
        )
    else:
        if not args.base:
            raise ColorError(f"{args.kind} palettes need --base")
        harmony = generate_kind(args.kind, Color.from_hex(args.base), count=args.count)
        colors = list(harmony.colors)
    return format_palette(colors[: args.count], args.format)


def main(argv: list[str] | None = None) -> None:
    settings = Settings.from_env()
    parser = _build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "extract":
            _run_extract(args, settings)
            return

        if args.command == "convert":
            color = Color.from_hex(args.hex)
            payload = color.to_dict()
            payload["name"] = nearest_name(color.hex)
            payload["css"] = {"rgb": color.rgb_css(), "hsl": color.hsl_css()}
            _print_json(payload)
            return

        if args.command == "harmony":
            base = Color.from_hex(args.base)
            if args.kind:
                harmony = generate_kind(
                    args.kind,
                    base,
                    count=args.count,
                    saturation=args.saturation,
                    lightness=args.lightness,
                )
                _print_json({"harmonies": [harmony.to_dict()]})
            else:
                family = generate(
                    base,
                    count=args.count,
                    saturation=args.saturation,
                    lightness=args.lightness,
                )
                _print_json(family.to_dict())
            return

        if args.command == "palette":
            print(_run_palette(args))
            return

        if args.command == "contrast":
            result = evaluate(Color.from_hex(args.fg), Color.from_hex(args.bg))
            _print_json(result.to_dict())
            return

        if args.command == "tint":
            gradient = Gradient.evenly_spaced(
                [Color.from_hex(value) for value in args.colors]
            )
            bitmap = read_image_rgba(args.image, timeout=settings.http_timeout)
            tinted = tint_dark_pixels(bitmap, gradient, dark_threshold=args.threshold)
            save_image_rgba(tinted, args.out)
            return
    except ColorError as exc:
        parser.error(str(exc))

    parser.error("unknown command")


if __name__ == "__main__":
    main()
