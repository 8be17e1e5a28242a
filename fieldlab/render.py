"""
render.py
=========

The two consumers of an :class:`~fieldlab.geometry.Artwork`:

- ``rasterize``: paint it onto a Pillow image (a new one, or a surface the
  caller owns). Per-primitive opacity is blended with ``ImageDraw`` in RGBA
  mode; stroke widths are rounded to whole pixels.
- ``to_svg``: serialize it with svgwrite. Coordinates are written with the
  fixed number of decimals each primitive carries, so the same artwork always
  serializes to the same bytes.

Neither consumer re-runs generation; both read the same in-memory geometry.
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np
import svgwrite
from PIL import Image, ImageDraw

from .geometry import Artwork, CircleShape, DrawParams, LineShape, PathShape, Point

logger = logging.getLogger(__name__)


# ---------------------------- Utilities ------------------------------------

def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' to (r,g,b). Handles shorthand '#RGB' too."""
    h = hex_color.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c*2 for c in h)
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    try:
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
    except ValueError:
        raise ValueError(f"Invalid hex color: {hex_color!r}") from None


def _rgba(color: str, opacity: float) -> Tuple[int, int, int, int]:
    alpha = int(round(max(0.0, min(1.0, opacity)) * 255))
    return hex_to_rgb(color) + (alpha,)


def _px_width(width: float) -> int:
    return max(1, int(round(width)))


def _num(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def _short(value: float) -> str:
    """Attribute values like opacity and stroke width: '0.5', '1', '0.125'."""
    return format(value, "g")


# ---------------------------- Raster ----------------------------------------

def _draw_path(draw: ImageDraw.ImageDraw, shape: PathShape) -> None:
    p = shape.paint
    pts = [(pt.x, pt.y) for pt in shape.points]
    if shape.closed and p.fill:
        draw.polygon(pts, fill=_rgba(p.fill, p.opacity))
    if p.stroke and len(pts) >= 2:
        if shape.closed:
            pts = pts + [pts[0]]
        draw.line(pts, fill=_rgba(p.stroke, p.opacity), width=_px_width(p.width), joint="curve")


def _draw_line(draw: ImageDraw.ImageDraw, shape: LineShape) -> None:
    p = shape.paint
    draw.line([(shape.x1, shape.y1), (shape.x2, shape.y2)],
              fill=_rgba(p.stroke, p.opacity), width=_px_width(p.width))


def _draw_circle(draw: ImageDraw.ImageDraw, shape: CircleShape) -> None:
    p = shape.paint
    left, top = shape.cx - shape.r, shape.cy - shape.r
    right, bottom = shape.cx + shape.r, shape.cy + shape.r
    fill = _rgba(p.fill, p.opacity) if p.fill else None
    outline = _rgba(p.stroke, p.opacity) if p.stroke else None
    draw.ellipse([left, top, right, bottom], fill=fill, outline=outline)


def rasterize(artwork: Artwork, image: Optional[Image.Image] = None) -> Image.Image:
    """Paint ``artwork`` and return the image.

    When ``artwork.mask`` is set it is painted in ``mask_color`` and stands in
    for the filled shapes, which are then not drawn a second time.
    """
    size = (artwork.width, artwork.height)
    bg = hex_to_rgb(artwork.background)
    if image is None:
        image = Image.new("RGB", size, color=bg)
    else:
        ImageDraw.Draw(image).rectangle([0, 0, size[0], size[1]], fill=bg)

    if artwork.mask is not None:
        pixels = np.array(image.convert("RGB"))
        mask = np.asarray(artwork.mask, dtype=bool)
        h = min(mask.shape[0], pixels.shape[0])
        w = min(mask.shape[1], pixels.shape[1])
        pixels[:h, :w][mask[:h, :w]] = hex_to_rgb(artwork.mask_color or "#ffffff")
        image.paste(Image.fromarray(pixels).convert(image.mode))
        logger.debug("rasterized mask layer (%d filled pixels)", int(mask.sum()))
        return image

    draw = ImageDraw.Draw(image, "RGBA")
    for shape in artwork.shapes:
        if isinstance(shape, PathShape):
            _draw_path(draw, shape)
        elif isinstance(shape, LineShape):
            _draw_line(draw, shape)
        elif isinstance(shape, CircleShape):
            _draw_circle(draw, shape)
        else:
            raise ValueError(f"Unknown shape: {shape!r}")
    return image


# ---------------------------- SVG -------------------------------------------

def path_data(points: Sequence[Point], precision: int, closed: bool = False) -> str:
    d = "".join(
        ("M" if i == 0 else "L") + f"{_num(pt.x, precision)},{_num(pt.y, precision)}"
        for i, pt in enumerate(points)
    )
    return d + "Z" if closed else d


def _paint_attrs(p: DrawParams) -> dict:
    attrs = {"fill": p.fill or "none"}
    if p.stroke:
        attrs["stroke"] = p.stroke
        attrs["stroke_width"] = _short(p.width)
    else:
        attrs["stroke"] = "none"
    if p.linecap:
        attrs["stroke_linecap"] = p.linecap
    if p.opacity != 1.0:
        attrs["opacity"] = _short(p.opacity)
    return attrs


def build_svg(artwork: Artwork) -> svgwrite.Drawing:
    w, h = artwork.width, artwork.height
    dwg = svgwrite.Drawing(size=(w, h), viewBox=f"0 0 {w} {h}", debug=False)
    dwg.add(dwg.rect(insert=(0, 0), size=(w, h), fill=artwork.background))

    for shape in artwork.shapes:
        if isinstance(shape, PathShape):
            d = path_data(shape.points, shape.precision, shape.closed)
            dwg.add(dwg.path(d=d, **_paint_attrs(shape.paint)))
        elif isinstance(shape, LineShape):
            n = shape.precision
            dwg.add(dwg.line(start=(_num(shape.x1, n), _num(shape.y1, n)),
                             end=(_num(shape.x2, n), _num(shape.y2, n)), **_paint_attrs(shape.paint)))
        elif isinstance(shape, CircleShape):
            n = shape.precision
            dwg.add(dwg.circle(center=(_num(shape.cx, n), _num(shape.cy, n)),
                               r=_num(shape.r, n), **_paint_attrs(shape.paint)))
        else:
            raise ValueError(f"Unknown shape: {shape!r}")
    return dwg


def to_svg(artwork: Artwork) -> str:
    return build_svg(artwork).tostring()


def save_svg(artwork: Artwork, out_path: str) -> str:
    with open(out_path, "w", encoding="utf-8") as fh:
        fh.write(to_svg(artwork))
    return out_path


def save_png(artwork: Artwork, out_path: str) -> str:
    rasterize(artwork).save(out_path, format="PNG", optimize=True)
    return out_path
