"""Tests for the raster and SVG consumers of an Artwork."""

import numpy as np
import pytest
from PIL import Image

from fieldlab.geometry import Artwork, CircleShape, DrawParams, LineShape, PathShape, Point
from fieldlab.render import hex_to_rgb, path_data, rasterize, save_png, save_svg, to_svg


class TestHexToRgb:
    @pytest.mark.parametrize("value, expected", [
        ("#ff0000", (255, 0, 0)),
        ("1a4d5c", (26, 77, 92)),
        ("#abc", (170, 187, 204)),
        ("  #FFFFFF ", (255, 255, 255)),
    ])
    def test_valid(self, value, expected):
        assert hex_to_rgb(value) == expected

    @pytest.mark.parametrize("value", ["#12345", "#gg0000", "", "#1234567"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            hex_to_rgb(value)


class TestPathData:
    def test_open(self):
        assert path_data([Point(1, 2), Point(3, 4)], 1) == "M1.0,2.0L3.0,4.0"

    def test_closed(self):
        assert path_data([Point(0, 0), Point(1, 0), Point(1, 1)], 1, closed=True) == "M0.0,0.0L1.0,0.0L1.0,1.0Z"

    def test_precision(self):
        assert path_data([Point(1.23456, 2.5)], 2) == "M1.23,2.50"


class TestToSvg:
    def _art(self):
        art = Artwork(100, 80, "#1a4d5c")
        art.add(PathShape((Point(1, 2), Point(3, 4)), DrawParams(stroke="#ffffff", width=0.5, opacity=0.4,
                                                                   linecap="round")))
        return art

    def test_root_and_viewbox(self):
        svg = to_svg(self._art())
        assert svg.startswith("<svg")
        assert 'viewBox="0 0 100 80"' in svg

    def test_background_first(self):
        svg = to_svg(self._art())
        assert svg.index("<rect") < svg.index("<path")
        assert 'fill="#1a4d5c"' in svg

    def test_path_attributes(self):
        svg = to_svg(self._art())
        assert 'd="M1.0,2.0L3.0,4.0"' in svg
        assert 'fill="none"' in svg
        assert 'stroke="#ffffff"' in svg
        assert 'stroke-width="0.5"' in svg
        assert 'stroke-linecap="round"' in svg
        assert 'opacity="0.4"' in svg

    def test_closed_filled_path(self):
        art = Artwork(10, 10, "#000000")
        art.add(PathShape((Point(0, 0), Point(5, 0), Point(5, 5)), DrawParams(fill="#ff0000"), closed=True))
        svg = to_svg(art)
        assert 'd="M0.0,0.0L5.0,0.0L5.0,5.0Z"' in svg
        assert 'fill="#ff0000"' in svg
        assert "opacity" not in svg

    def test_line_and_circle_formatting(self):
        art = Artwork(10, 10, "#000000")
        art.add(LineShape(1, 2, 3.456, 4, DrawParams(stroke="#ffffff"), precision=2))
        art.add(CircleShape(5, 5.5, 1.25, DrawParams(fill="#ffffff", opacity=0.7)))
        svg = to_svg(art)
        assert 'x1="1.00"' in svg
        assert 'x2="3.46"' in svg
        assert 'cx="5.00"' in svg
        assert 'cy="5.50"' in svg
        assert 'r="1.25"' in svg
        assert 'opacity="0.7"' in svg

    def test_deterministic(self):
        assert to_svg(self._art()) == to_svg(self._art())

    def test_unknown_shape(self):
        art = Artwork(10, 10, "#000000", shapes=["nope"])
        with pytest.raises(ValueError):
            to_svg(art)


class TestRasterize:
    def test_background(self):
        img = rasterize(Artwork(10, 8, "#102030"))
        assert img.size == (10, 8)
        assert img.getpixel((0, 0)) == (16, 32, 48)
        assert img.getpixel((9, 7)) == (16, 32, 48)

    def test_opaque_circle(self):
        art = Artwork(20, 20, "#000000")
        art.add(CircleShape(10, 10, 4, DrawParams(fill="#ff0000")))
        img = rasterize(art)
        assert img.getpixel((10, 10)) == (255, 0, 0)
        assert img.getpixel((1, 1)) == (0, 0, 0)

    def test_filled_closed_path(self):
        art = Artwork(20, 20, "#000000")
        square = (Point(4, 4), Point(16, 4), Point(16, 16), Point(4, 16))
        art.add(PathShape(square, DrawParams(fill="#00ff00"), closed=True))
        assert rasterize(art).getpixel((10, 10)) == (0, 255, 0)

    def test_opacity_blends(self):
        art = Artwork(10, 10, "#000000")
        art.add(LineShape(0, 5, 9, 5, DrawParams(stroke="#ffffff", opacity=0.5)))
        r, g, b = rasterize(art).getpixel((5, 5))
        assert 110 < r < 145
        assert r == g == b

    def test_mask_layer(self):
        mask = np.zeros((10, 10), dtype=bool)
        mask[2:4, 2:4] = True
        art = Artwork(10, 10, "#000000", mask=mask, mask_color="#00ff00")
        # Shapes are described by the mask on raster output and are not painted again.
        art.add(CircleShape(8, 8, 1, DrawParams(fill="#ff0000")))
        img = rasterize(art)
        assert img.getpixel((3, 3)) == (0, 255, 0)
        assert img.getpixel((5, 5)) == (0, 0, 0)
        assert img.getpixel((8, 8)) == (0, 0, 0)

    def test_supplied_surface(self):
        surface = Image.new("RGB", (10, 10), (255, 255, 255))
        result = rasterize(Artwork(10, 10, "#000000"), surface)
        assert result is surface
        assert surface.getpixel((5, 5)) == (0, 0, 0)


class TestSave:
    def test_save_svg_and_png(self, tmp_path):
        art = Artwork(30, 20, "#1a4d5c")
        art.add(LineShape(0, 0, 30, 20, DrawParams(stroke="#ffffff")))
        svg_path = save_svg(art, str(tmp_path / "out.svg"))
        png_path = save_png(art, str(tmp_path / "out.png"))
        with open(svg_path, encoding="utf-8") as fh:
            assert fh.read() == to_svg(art)
        with Image.open(png_path) as img:
            assert img.format == "PNG"
            assert img.size == (30, 20)
