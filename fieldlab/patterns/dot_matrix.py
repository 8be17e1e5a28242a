"""Halftone-like dot grid; dot radius follows a noise field."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..controls import range_control
from ..geometry import Artwork, CircleShape, DrawParams, Style
from ..noise import NoiseField

logger = logging.getLogger(__name__)

MIN_RADIUS = 0.1


@dataclass(frozen=True)
class DotMatrixParams:
    grid: int = 30
    maxsize: float = 8
    minsize: float = 0.5
    scale: float = 0.008
    opacity: float = 0.7
    seed: int = 1234


CONTROLS = (
    range_control("grid", "Grid Size", 10, 80, 1, 30),
    range_control("maxsize", "Max Dot Size", 2, 20, 1, 8),
    range_control("minsize", "Min Dot Size", 0, 5, 0.5, 0.5),
    range_control("scale", "Noise Scale", 0.002, 0.02, 0.001, 0.008),
    range_control("opacity", "Opacity", 0.1, 1, 0.05, 0.7),
    range_control("seed", "Seed", 1, 9999, 1, 1234),
)

PRESETS = {
    "halftone": dict(grid=25, maxsize=10, minsize=0.5, scale=0.008, opacity=0.7),
    "fine": dict(grid=50, maxsize=4, minsize=0.25, scale=0.006, opacity=0.6),
    "coarse": dict(grid=15, maxsize=15, minsize=1, scale=0.005, opacity=0.8),
    "gradient": dict(grid=30, maxsize=8, minsize=0, scale=0.003, opacity=0.75),
}


def generate(params: DotMatrixParams, style: Style, field: Optional[np.ndarray] = None) -> Artwork:
    size = style.canvas_size
    noise = NoiseField(params.seed)
    art = Artwork(size, size, style.bg_color)

    grid = int(params.grid)
    if grid <= 0:
        return art
    spacing = size / grid
    centers = (np.arange(grid, dtype=np.float64) + 0.5) * spacing
    px, py = np.meshgrid(centers, centers)
    values = (noise.noise2d(px * params.scale, py * params.scale) + 1) / 2
    radii = params.minsize + values * (params.maxsize - params.minsize)

    paint = DrawParams(fill=style.stroke_color, opacity=params.opacity)
    for x, y, r in zip(px.ravel().tolist(), py.ravel().tolist(), radii.ravel().tolist()):
        if r > MIN_RADIUS:
            art.add(CircleShape(x, y, r, paint, precision=2))
    logger.debug("dot matrix: %d of %d dots drawn", len(art.shapes), grid * grid)
    return art
