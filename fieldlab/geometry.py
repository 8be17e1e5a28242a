"""
geometry.py
===========

Plain data shared by every stage of a generation: points, edges, paint
parameters, the vector primitives a generator emits and the ``Artwork`` that
bundles them for the raster and SVG consumers in :mod:`fieldlab.render`.

Everything here is created inside a single ``generate`` call and thrown away
afterwards; nothing is shared between generators.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple, Union

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


class Edge(NamedTuple):
    """Undirected segment produced by the contour extractor before stitching."""
    x1: float
    y1: float
    x2: float
    y2: float


Polyline = List[Point]


# ---------------------------- Paint -----------------------------------------

@dataclass(frozen=True)
class DrawParams:
    fill: Optional[str] = None      # hex color or None for no fill
    stroke: Optional[str] = None    # hex color or None for no stroke
    width: float = 1.0              # stroke width in pixels
    opacity: float = 1.0
    linecap: Optional[str] = None   # "round" or None for the default butt cap


@dataclass(frozen=True)
class Style:
    """Colors and canvas size shared by all generators except DepthTopo."""
    stroke_color: str = "#ffffff"
    bg_color: str = "#1a4d5c"
    canvas_size: int = 700


# ---------------------------- Primitives ------------------------------------

@dataclass(frozen=True)
class PathShape:
    points: Tuple[Point, ...]
    paint: DrawParams
    closed: bool = False
    precision: int = 1


@dataclass(frozen=True)
class LineShape:
    x1: float
    y1: float
    x2: float
    y2: float
    paint: DrawParams
    precision: int = 1


@dataclass(frozen=True)
class CircleShape:
    cx: float
    cy: float
    r: float
    paint: DrawParams
    precision: int = 2


Shape = Union[PathShape, LineShape, CircleShape]


@dataclass
class Artwork:
    """Result of one generation.

    ``shapes`` is the vector description in generation order. ``mask`` is an
    optional boolean layer (rows x cols) that the rasterizer paints in
    ``mask_color`` instead of filling the shapes, and ``field`` carries an
    auxiliary scalar field (the processed depth map for DepthTopo).
    """
    width: int
    height: int
    background: str
    shapes: List[Shape] = field(default_factory=list)
    mask: Optional[np.ndarray] = None
    mask_color: Optional[str] = None
    field: Optional[np.ndarray] = None

    def add(self, shape: Shape) -> None:
        self.shapes.append(shape)

