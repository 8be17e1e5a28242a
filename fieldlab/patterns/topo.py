"""Topographic contours of a (optionally domain-warped) fractal noise height field."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..contours import connect_edges, trace_edges
from ..controls import range_control
from ..geometry import Artwork, DrawParams, PathShape, Polyline, Style
from ..noise import NoiseField
from ..paths import simplify_path, smooth_path

logger = logging.getLogger(__name__)

RESOLUTION = 2


@dataclass(frozen=True)
class TopoParams:
    levels: int = 20
    scale: float = 0.006
    octaves: int = 3
    smooth: int = 2
    warp: float = 0
    stroke: float = 0.75
    opacity: float = 0.5
    seed: int = 1234


CONTROLS = (
    range_control("levels", "Contour Levels", 5, 50, 1, 20),
    range_control("scale", "Noise Scale", 0.002, 0.02, 0.001, 0.006),
    range_control("octaves", "Noise Octaves", 1, 6, 1, 3),
    range_control("smooth", "Smoothness", 1, 8, 1, 2),
    range_control("warp", "Warp", 0, 100, 1, 0),
    range_control("stroke", "Stroke Width", 0.25, 3, 0.25, 0.75),
    range_control("opacity", "Opacity", 0.1, 1, 0.05, 0.5),
    range_control("seed", "Seed", 1, 9999, 1, 1234),
)

PRESETS = {
    "organic": dict(levels=10, scale=0.003, octaves=2, smooth=6, warp=50, stroke=1.5, opacity=0.8),
    "terrain": dict(levels=20, scale=0.006, octaves=3, smooth=2, warp=0, stroke=0.75, opacity=0.5),
    "fine": dict(levels=40, scale=0.008, octaves=4, smooth=2, warp=20, stroke=0.35, opacity=0.4),
    "bold": dict(levels=12, scale=0.004, octaves=2, smooth=4, warp=30, stroke=2.0, opacity=0.9),
}


def height_field(noise: NoiseField, size: int, scale: float, octaves: int, warp: float) -> np.ndarray:
    """Heights in [0, 1] sampled every RESOLUTION pixels."""
    n = int(math.ceil(size / RESOLUTION))
    idx = np.arange(n, dtype=np.float64)
    px, py = np.meshgrid(idx * RESOLUTION * scale, idx * RESOLUTION * scale)
    warp_scale = warp / 100
    if warp_scale > 0:
        warp_x = noise.noise2d(px * 2, py * 2) * warp_scale * 50
        warp_y = noise.noise2d(px * 2 + 100, py * 2 + 100) * warp_scale * 50
        px = px + warp_x
        py = py + warp_y
    return (noise.octave_noise2d(px, py, octaves) + 1) / 2


def contour_paths(heights: np.ndarray, levels: int, smooth: int) -> List[Polyline]:
    tolerance = 1.5 if smooth > 4 else 0.5
    paths = []
    for level in range(int(levels)):
        threshold = level / levels
        for path in connect_edges(trace_edges(heights > threshold, RESOLUTION)):
            if len(path) < 2:
                continue
            simplified = simplify_path(smooth_path(path, smooth, closed=False), tolerance)
            if len(simplified) >= 2:
                paths.append(simplified)
    return paths


def generate(params: TopoParams, style: Style, field: Optional[np.ndarray] = None) -> Artwork:
    size = style.canvas_size
    noise = NoiseField(params.seed)
    heights = height_field(noise, size, params.scale, params.octaves, params.warp)

    art = Artwork(size, size, style.bg_color)
    paint = DrawParams(stroke=style.stroke_color, width=params.stroke, opacity=params.opacity)
    for path in contour_paths(heights, params.levels, params.smooth):
        art.add(PathShape(tuple(path), paint, precision=1))
    logger.debug("topo: %d levels, %d paths", params.levels, len(art.shapes))
    return art
