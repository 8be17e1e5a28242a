"""Flow field: particles advected along a noise-driven heading."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..controls import range_control
from ..geometry import Artwork, DrawParams, PathShape, Point, Style
from ..noise import NoiseField, seeded_random

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlowFieldParams:
    particles: int = 800
    length: int = 80
    scale: float = 0.005
    octaves: int = 2
    curve: float = 2.0
    stroke: float = 0.5
    opacity: float = 0.4
    seed: int = 1234


CONTROLS = (
    range_control("particles", "Particle Count", 100, 3000, 1, 800),
    range_control("length", "Line Length", 10, 300, 1, 80),
    range_control("scale", "Noise Scale", 0.001, 0.02, 0.001, 0.005),
    range_control("octaves", "Noise Octaves", 1, 6, 1, 2),
    range_control("curve", "Curve Strength", 0.5, 8, 0.1, 2.0),
    range_control("stroke", "Stroke Width", 0.25, 3, 0.25, 0.5),
    range_control("opacity", "Opacity", 0.05, 1, 0.05, 0.4),
    range_control("seed", "Seed", 1, 9999, 1, 1234),
)

PRESETS = {
    "calm": dict(particles=600, length=120, scale=0.003, octaves=1, curve=1.5, stroke=0.5, opacity=0.3),
    "turbulent": dict(particles=1500, length=60, scale=0.012, octaves=4, curve=4.0, stroke=0.5, opacity=0.25),
    "streams": dict(particles=400, length=200, scale=0.004, octaves=2, curve=2.0, stroke=0.75, opacity=0.5),
    "vortex": dict(particles=1000, length=100, scale=0.008, octaves=3, curve=6.0, stroke=0.5, opacity=0.35),
    "silk": dict(particles=2000, length=150, scale=0.002, octaves=1, curve=1.0, stroke=0.25, opacity=0.2),
}


def generate(params: FlowFieldParams, style: Style, field: Optional[np.ndarray] = None) -> Artwork:
    size = style.canvas_size
    noise = NoiseField(params.seed)
    random = seeded_random(params.seed)
    art = Artwork(size, size, style.bg_color)

    n = int(params.particles)
    if n <= 0:
        return art

    starts = [(random() * size, random() * size) for _ in range(n)]
    xs = np.array([s[0] for s in starts], dtype=np.float64)
    ys = np.array([s[1] for s in starts], dtype=np.float64)
    trails = [[Point(x, y)] for x, y in starts]

    # All particles step together; a particle stops at its first out-of-bounds step.
    alive = np.ones(n, dtype=bool)
    for _ in range(int(params.length)):
        idx = np.nonzero(alive)[0]
        if idx.size == 0:
            break
        angle = noise.octave_noise2d(xs[idx] * params.scale, ys[idx] * params.scale,
                                     params.octaves) * math.pi * params.curve
        nx = xs[idx] + np.cos(angle)
        ny = ys[idx] + np.sin(angle)
        inside = (nx >= 0) & (nx <= size) & (ny >= 0) & (ny <= size)
        alive[idx[~inside]] = False
        xs[idx] = nx
        ys[idx] = ny
        for k, x, y in zip(idx[inside].tolist(), nx[inside].tolist(), ny[inside].tolist()):
            trails[k].append(Point(x, y))

    paint = DrawParams(stroke=style.stroke_color, width=params.stroke,
                       opacity=params.opacity, linecap="round")
    for trail in trails:
        if len(trail) >= 2:
            art.add(PathShape(tuple(trail), paint, precision=2))
    logger.debug("flow field: %d particles, %d paths", n, len(art.shapes))
    return art
