"""Hatching: short strokes on a regular grid, rotated by a noise field."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..controls import range_control
from ..geometry import Artwork, DrawParams, LineShape, Style
from ..noise import NoiseField

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HatchParams:
    spacing: float = 24
    length: float = 20
    direction: float = 45
    variation: float = 15
    scale: float = 0.003
    stroke: float = 1.5
    opacity: float = 0.9
    seed: int = 1234


CONTROLS = (
    range_control("spacing", "Grid Spacing", 8, 60, 1, 24),
    range_control("length", "Line Length", 5, 50, 1, 20),
    range_control("direction", "Direction", 0, 360, 1, 45, suffix="°"),
    range_control("variation", "Variation", 0, 60, 1, 15, suffix="°"),
    range_control("scale", "Flow Scale", 0.001, 0.02, 0.001, 0.003),
    range_control("stroke", "Stroke Width", 0.5, 4, 0.25, 1.5),
    range_control("opacity", "Opacity", 0.1, 1, 0.05, 0.9),
    range_control("seed", "Seed", 1, 9999, 1, 1234),
)

PRESETS = {
    "smooth": dict(spacing=24, length=20, direction=45, variation=15, scale=0.003, stroke=1.5, opacity=0.9),
    "rain": dict(spacing=20, length=28, direction=70, variation=10, scale=0.002, stroke=1.0, opacity=0.85),
    "wave": dict(spacing=26, length=22, direction=30, variation=25, scale=0.004, stroke=1.5, opacity=0.9),
    "chaotic": dict(spacing=20, length=18, direction=0, variation=60, scale=0.012, stroke=1.25, opacity=0.8),
}


def _grid_positions(spacing: float, size: int):
    positions = []
    v = spacing / 2
    while v < size:
        positions.append(v)
        v += spacing
    return np.array(positions, dtype=np.float64)


def generate(params: HatchParams, style: Style, field: Optional[np.ndarray] = None) -> Artwork:
    size = style.canvas_size
    noise = NoiseField(params.seed)
    art = Artwork(size, size, style.bg_color)
    if params.spacing <= 0:
        return art

    coords = _grid_positions(params.spacing, size)
    gx, gy = np.meshgrid(coords, coords)
    base = params.direction * math.pi / 180
    spread = params.variation * math.pi / 180
    angle = base + noise.noise2d(gx * params.scale, gy * params.scale) * spread
    half = params.length / 2
    dx = np.cos(angle) * half
    dy = np.sin(angle) * half

    paint = DrawParams(stroke=style.stroke_color, width=params.stroke,
                       opacity=params.opacity, linecap="round")
    for x, y, ddx, ddy in zip(gx.ravel().tolist(), gy.ravel().tolist(),
                              dx.ravel().tolist(), dy.ravel().tolist()):
        art.add(LineShape(x - ddx, y - ddy, x + ddx, y + ddy, paint, precision=1))
    logger.debug("hatch: %d strokes", len(art.shapes))
    return art
