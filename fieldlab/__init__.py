"""
fieldlab
========

Procedural pattern generator that turns noise, wave, Voronoi and depth fields
into vector paths and raster pixels. Every pattern is generated once as an
in-memory :class:`~fieldlab.geometry.Artwork` and can then be rasterized
(Pillow) or serialized to SVG (svgwrite) without re-running the generator.

Patterns
--------
- flow       particles advected through fractal noise
- wave       scanlines displaced by interfering damped waves
- topo       contour lines of a warped noise height field
- dots       noise-modulated dot grid
- net        proximity network of random nodes
- voronoi    filled cells with rounded gaps
- hatch      noise-rotated hatch strokes
- depthtopo  contour lines of a depth map (AI model or image luminance)

Output is deterministic: the same params, style and seed always produce the
same SVG bytes.

Quick start
-----------
>>> from fieldlab import PATTERNS, Style, build_params, to_svg
>>> topo = PATTERNS["topo"]
>>> art = topo.generate(build_params(topo, {"levels": 12, "seed": 7}), Style(canvas_size=400))
>>> svg = to_svg(art)

Command line
------------
$ python -m fieldlab --pattern voronoi --preset giraffe --seed 42 \
    --svg cells.svg --png cells.png
"""

from .controls import Control, apply_preset, build_params, default_params, randomize_seed
from .geometry import Artwork, CircleShape, DrawParams, Edge, LineShape, PathShape, Point, Style
from .noise import NoiseField, seeded_random
from .patterns import PATTERNS, PatternDescriptor, generate, get_pattern
from .render import rasterize, save_png, save_svg, to_svg

__version__ = "0.1.0"

__all__ = [
    "Artwork", "CircleShape", "Control", "DrawParams", "Edge", "LineShape",
    "NoiseField", "PATTERNS", "PathShape", "PatternDescriptor", "Point", "Style",
    "apply_preset", "build_params", "default_params", "generate", "get_pattern",
    "randomize_seed", "rasterize", "save_png", "save_svg", "seeded_random", "to_svg",
]
