"""Command line entry point: ``python -m fieldlab`` / ``fieldlab``."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Dict, Optional, Sequence

from .controls import all_controls, apply_preset, build_params, randomize_seed
from .depth import DepthModel, acquire_depth_field, depth_field_to_image, load_image
from .geometry import Style
from .logging_config import setup_logging
from .patterns import PATTERNS, get_pattern
from .render import save_png, save_svg

logger = logging.getLogger(__name__)


def parse_size(s: str) -> int:
    """Canvas side in pixels: '700' or a square '700x700'."""
    parts = s.lower().split("x")
    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError("Size must be like 700 or 700x700") from None
    if len(values) > 2 or len(set(values)) != 1 or values[0] <= 0:
        raise argparse.ArgumentTypeError("Size must be a positive square, like 700 or 700x700")
    return values[0]


def parse_assignment(s: str):
    if "=" not in s:
        raise argparse.ArgumentTypeError("Expected id=value")
    key, value = s.split("=", 1)
    return key.strip(), value.strip()


def list_patterns() -> str:
    lines = []
    for key, d in PATTERNS.items():
        lines.append(f"{key:10s} {d.label}")
        lines.append(f"  presets: {', '.join(d.presets)}")
        for c in all_controls(d):
            if c.kind == "range":
                lines.append(f"  {c.id:14s} {c.min}..{c.max} (default {c.default}){c.suffix}")
            else:
                lines.append(f"  {c.id:14s} {c.kind} (default {c.default})")
    return "\n".join(lines)


async def _depth_field(image_path: str, use_ai: bool):
    image = load_image(image_path)
    model = None
    if use_ai:
        model = DepthModel()
        await model.load()
    acquired = await acquire_depth_field(image, model)
    logger.info("depth source: %s", acquired.status)
    return acquired.field


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Generate procedural field patterns as SVG and PNG")
    ap.add_argument("--pattern", default="flow", choices=list(PATTERNS))
    ap.add_argument("--preset", default=None, help="Named preset applied over the defaults")
    ap.add_argument("--params", default=None, help="Path to a JSON object of parameter values")
    ap.add_argument("--set", dest="assignments", action="append", type=parse_assignment, default=[],
                    metavar="ID=VALUE", help="Override one parameter (repeatable)")
    seeding = ap.add_mutually_exclusive_group()
    seeding.add_argument("--seed", type=int, default=None)
    seeding.add_argument("--random-seed", action="store_true", help="Pick a fresh seed in [0, 9999)")
    ap.add_argument("--size", type=parse_size, default=700, help="Canvas side, e.g. 700 or 700x700")
    ap.add_argument("--stroke-color", default="#ffffff")
    ap.add_argument("--bg-color", default="#1a4d5c")
    ap.add_argument("--svg", default=None, help="Output SVG path")
    ap.add_argument("--png", default=None, help="Output PNG path")
    ap.add_argument("--image", default=None, help="Source image for the depthtopo pattern")
    ap.add_argument("--ai-depth", action="store_true", help="Estimate depth with a transformers model")
    ap.add_argument("--depth-png", default=None, help="Save the processed depth map (depthtopo only)")
    ap.add_argument("--list", action="store_true", help="List patterns, presets and controls")
    ap.add_argument("--log-level", default="WARNING")
    ap.add_argument("--log-file", default=None)
    args = ap.parse_args(argv)

    try:
        setup_logging(args.log_level, args.log_file)
    except ValueError as exc:
        ap.error(str(exc))

    if args.list:
        print(list_patterns())
        return 0
    if not args.svg and not args.png and not args.depth_png:
        ap.error("nothing to write: pass --svg, --png and/or --depth-png")

    descriptor = get_pattern(args.pattern)
    if args.depth_png and not descriptor.needs_field:
        ap.error(f"--depth-png needs a depth pattern, not {descriptor.key!r}")

    values: Dict[str, object] = {}
    if args.params:
        with open(args.params, "r", encoding="utf-8") as jf:
            loaded = json.load(jf)
        if not isinstance(loaded, dict):
            ap.error("--params JSON must be an object of id: value pairs")
        values.update(loaded)
    values.update(dict(args.assignments))
    if args.seed is not None and hasattr(descriptor.params_type(), "seed"):
        values["seed"] = args.seed

    params = descriptor.params_type()
    try:
        if args.preset:
            params = apply_preset(descriptor, params, args.preset)
        params = build_params(descriptor, values, base=params)
    except ValueError as exc:
        ap.error(str(exc))
    if args.random_seed:
        params = randomize_seed(params)
        if hasattr(params, "seed"):
            print(f"seed: {params.seed}", file=sys.stderr)

    field = None
    if descriptor.needs_field:
        if not args.image:
            ap.error(f"pattern {descriptor.key!r} needs --image")
        field = asyncio.run(_depth_field(args.image, args.ai_depth))

    style = Style(stroke_color=args.stroke_color, bg_color=args.bg_color, canvas_size=args.size)
    artwork = descriptor.generate(params, style, field)
    logger.info("%s: %d primitives", descriptor.key, len(artwork.shapes))

    if args.svg:
        print(save_svg(artwork, args.svg))
    if args.png:
        print(save_png(artwork, args.png))
    if args.depth_png:
        depth_field_to_image(artwork.field).save(args.depth_png, format="PNG", optimize=True)
        print(args.depth_png)
    return 0
