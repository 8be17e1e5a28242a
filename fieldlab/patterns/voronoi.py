"""Voronoi cells: filled, borderless cells separated by rounded gaps."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..controls import range_control
from ..geometry import Artwork, DrawParams, PathShape, Point, Style
from ..noise import seeded_random
from ..voronoi import apply_morphological_smoothing, assign_cells, extract_cell_contours, lloyd_relax

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoronoiParams:
    cells: int = 50
    gap: float = 8
    radius: float = 5
    relax: int = 2
    seed: int = 1234


CONTROLS = (
    range_control("cells", "Cell Count", 10, 300, 1, 50),
    range_control("gap", "Gap Size", 0, 30, 1, 8),
    range_control("radius", "Corner Radius", 0, 20, 1, 5),
    range_control("relax", "Relaxation", 0, 5, 1, 2),
    range_control("seed", "Seed", 1, 9999, 1, 1234),
)

PRESETS = {
    "cells": dict(cells=80, gap=4, radius=3, relax=1),
    "giraffe": dict(cells=40, gap=12, radius=8, relax=3),
    "organic": dict(cells=60, gap=8, radius=5, relax=2),
    "foam": dict(cells=150, gap=3, radius=2, relax=0),
}


def generate(params: VoronoiParams, style: Style, field: Optional[np.ndarray] = None) -> Artwork:
    size = style.canvas_size
    fill = style.stroke_color
    random = seeded_random(params.seed)
    points = [Point(random() * size, random() * size) for _ in range(int(params.cells))]
    for _ in range(int(params.relax)):
        points = lloyd_relax(points, size)

    mask = assign_cells(points, size, params.gap).mask
    if params.radius > 0:
        mask = apply_morphological_smoothing(mask, size, params.radius)

    art = Artwork(size, size, style.bg_color, mask=mask, mask_color=fill)
    paint = DrawParams(fill=fill)
    for ring in extract_cell_contours(mask, size):
        art.add(PathShape(tuple(ring), paint, closed=True, precision=1))
    logger.debug("voronoi: %d seeds, %d cell paths", len(points), len(art.shapes))
    return art
