"""
Depth topo: contour lines of an external depth field.

The field (from :mod:`fieldlab.depth`) is blurred, optionally inverted and
contoured on a coarse grid. Unlike the noise-driven Topo generator, edges are
emitted straight from the extractor without stitching or smoothing. This
generator has its own colors (``contour_color``, ``bg_color``) and ignores the
shared style colors; the canvas size is the size of the field.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..contours import trace_edges
from ..controls import Control, range_control
from ..depth import apply_gaussian_blur
from ..geometry import Artwork, DrawParams, PathShape, Point, Style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepthTopoParams:
    levels: int = 20
    stroke: float = 0.75
    opacity: float = 0.6
    smoothing: int = 2
    resolution: int = 3
    invert: bool = False
    contour_color: str = "#ffffff"
    bg_color: str = "#1a4d5c"


CONTROLS = (
    range_control("levels", "Contour Levels", 5, 50, 1, 20),
    range_control("stroke", "Line Width", 0.25, 3, 0.25, 0.75),
    range_control("opacity", "Opacity", 0.1, 1, 0.05, 0.6),
    range_control("smoothing", "Smoothing", 0, 5, 1, 2),
    range_control("resolution", "Resolution (lower = more detail)", 1, 8, 1, 3),
    Control("invert", "Invert Depth", False, kind="checkbox"),
)

COLOR_CONTROLS = (
    Control("contour_color", "Contour Color", "#ffffff", kind="color"),
    Control("bg_color", "Background Color", "#1a4d5c", kind="color"),
)

PRESETS = {
    "terrain": dict(levels=20, stroke=0.75, opacity=0.6, smoothing=2, resolution=3),
    "fine": dict(levels=35, stroke=0.5, opacity=0.5, smoothing=1, resolution=2),
    "bold": dict(levels=12, stroke=1.5, opacity=0.8, smoothing=3, resolution=4),
    "minimal": dict(levels=8, stroke=1.0, opacity=0.7, smoothing=4, resolution=5),
}


def process_field(field: np.ndarray, smoothing: int, invert: bool) -> np.ndarray:
    processed = apply_gaussian_blur(field, smoothing)
    if invert:
        processed = 1 - processed
    return processed


def sample_grid(field: np.ndarray, resolution: int) -> np.ndarray:
    """Field values at every ``resolution``-th pixel, indices clamped to the field."""
    height, width = field.shape
    cols = width // resolution
    rows = height // resolution
    xs = np.minimum(np.arange(cols) * resolution, width - 1)
    ys = np.minimum(np.arange(rows) * resolution, height - 1)
    return field[ys[:, None], xs[None, :]]


def generate(params: DepthTopoParams, style: Style, field: Optional[np.ndarray] = None) -> Artwork:
    if field is None:
        raise ValueError("depth topo needs a depth field; see fieldlab.depth.acquire_depth_field")
    field = np.asarray(field, dtype=np.float64)
    height, width = field.shape
    processed = process_field(field, params.smoothing, params.invert)

    art = Artwork(width, height, params.bg_color, field=processed)
    paint = DrawParams(stroke=params.contour_color, width=params.stroke, opacity=params.opacity)
    res = int(params.resolution)
    samples = sample_grid(processed, res)

    for level in range(int(params.levels)):
        threshold = level / params.levels
        for e in trace_edges(samples > threshold, res):
            art.add(PathShape((Point(e.x1, e.y1), Point(e.x2, e.y2)), paint, precision=1))
    logger.debug("depth topo: %dx%d field, %d segments", width, height, len(art.shapes))
    return art
