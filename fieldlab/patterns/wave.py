"""Wave interference: horizontal scanlines displaced by damped radial waves."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..controls import range_control
from ..geometry import Artwork, DrawParams, PathShape, Point, Style
from ..noise import seeded_random

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaveParams:
    sources: int = 2
    frequency: float = 25
    lines: int = 80
    amplitude: float = 10
    decay: float = 0.003
    stroke: float = 0.5
    opacity: float = 0.6
    seed: int = 1234


CONTROLS = (
    range_control("sources", "Wave Sources", 1, 6, 1, 2),
    range_control("frequency", "Wave Frequency", 5, 80, 1, 25),
    range_control("lines", "Line Count", 20, 200, 1, 80),
    range_control("amplitude", "Amplitude", 1, 30, 1, 10),
    range_control("decay", "Decay", 0.001, 0.01, 0.001, 0.003),
    range_control("stroke", "Stroke Width", 0.25, 2, 0.25, 0.5),
    range_control("opacity", "Opacity", 0.1, 1, 0.05, 0.6),
    range_control("seed", "Seed", 1, 9999, 1, 1234),
)

PRESETS = {
    "ripple": dict(sources=1, frequency=30, lines=60, amplitude=8, decay=0.002, stroke=0.5, opacity=0.7),
    "interference": dict(sources=2, frequency=25, lines=80, amplitude=10, decay=0.003, stroke=0.5, opacity=0.6),
    "dense": dict(sources=3, frequency=50, lines=150, amplitude=5, decay=0.004, stroke=0.25, opacity=0.4),
    "sparse": dict(sources=2, frequency=15, lines=40, amplitude=15, decay=0.002, stroke=1.0, opacity=0.8),
    "chaos": dict(sources=5, frequency=35, lines=100, amplitude=12, decay=0.005, stroke=0.5, opacity=0.5),
}


def generate(params: WaveParams, style: Style, field: Optional[np.ndarray] = None) -> Artwork:
    size = style.canvas_size
    random = seeded_random(params.seed)
    sources = [Point(random() * size, random() * size) for _ in range(int(params.sources))]

    art = Artwork(size, size, style.bg_color)
    paint = DrawParams(stroke=style.stroke_color, width=params.stroke, opacity=params.opacity)

    n_lines = int(params.lines)
    if n_lines <= 0:
        return art
    spacing = size / n_lines
    xs = np.arange(0, size + 1, 2, dtype=np.float64)

    for i in range(n_lines):
        base_y = i * spacing
        displacement = np.zeros_like(xs)
        for src in sources:
            dist = np.sqrt((xs - src.x) ** 2 + (base_y - src.y) ** 2)
            displacement += np.sin(dist * params.decay * params.frequency) * params.amplitude * np.exp(-dist * params.decay * 0.5)
        ys = base_y + displacement
        points = tuple(Point(x, y) for x, y in zip(xs.tolist(), ys.tolist()))
        art.add(PathShape(points, paint, precision=2))

    logger.debug("wave: %d sources, %d lines", len(sources), n_lines)
    return art
