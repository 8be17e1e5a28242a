"""Proximity network: nodes joined by edges that fade with distance."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..controls import range_control
from ..geometry import Artwork, CircleShape, DrawParams, LineShape, Point, Style
from ..noise import seeded_random

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkParams:
    nodes: int = 80
    distance: float = 80
    nodesize: float = 2
    linewidth: float = 0.5
    opacity: float = 0.5
    seed: int = 1234


CONTROLS = (
    range_control("nodes", "Node Count", 20, 300, 1, 80),
    range_control("distance", "Connection Distance", 30, 200, 1, 80),
    range_control("nodesize", "Node Size", 1, 8, 1, 2),
    range_control("linewidth", "Line Width", 0.25, 2, 0.25, 0.5),
    range_control("opacity", "Opacity", 0.1, 1, 0.05, 0.5),
    range_control("seed", "Seed", 1, 9999, 1, 1234),
)

PRESETS = {
    "sparse": dict(nodes=50, distance=100, nodesize=3, linewidth=0.5, opacity=0.6),
    "dense": dict(nodes=200, distance=60, nodesize=2, linewidth=0.35, opacity=0.4),
    "clustered": dict(nodes=120, distance=80, nodesize=2.5, linewidth=0.5, opacity=0.5),
    "web": dict(nodes=80, distance=120, nodesize=1.5, linewidth=0.75, opacity=0.55),
}


def generate(params: NetworkParams, style: Style, field: Optional[np.ndarray] = None) -> Artwork:
    size = style.canvas_size
    random = seeded_random(params.seed)
    nodes = [Point(random() * size, random() * size) for _ in range(int(params.nodes))]
    art = Artwork(size, size, style.bg_color)

    if len(nodes) > 1:
        xy = np.array(nodes, dtype=np.float64)
        ii, jj = np.triu_indices(len(nodes), k=1)
        dist = np.hypot(xy[ii, 0] - xy[jj, 0], xy[ii, 1] - xy[jj, 1])
        near = dist < params.distance
        for i, j, d in zip(ii[near].tolist(), jj[near].tolist(), dist[near].tolist()):
            line_opacity = round((1 - d / params.distance) * params.opacity, 3)
            paint = DrawParams(stroke=style.stroke_color, width=params.linewidth, opacity=line_opacity)
            a, b = nodes[i], nodes[j]
            art.add(LineShape(a.x, a.y, b.x, b.y, paint, precision=2))

    node_paint = DrawParams(fill=style.stroke_color, opacity=params.opacity)
    for node in nodes:
        art.add(CircleShape(node.x, node.y, params.nodesize, node_paint, precision=2))
    logger.debug("network: %d nodes, %d edges", len(nodes), len(art.shapes) - len(nodes))
    return art
