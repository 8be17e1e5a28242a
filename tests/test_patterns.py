"""Tests for the pattern generators and the registry."""

import math

import numpy as np
import pytest

from fieldlab.geometry import CircleShape, LineShape, PathShape, Style
from fieldlab.noise import seeded_random
from fieldlab.patterns import PATTERNS, generate, get_pattern
from fieldlab.patterns.depth_topo import DepthTopoParams
from fieldlab.patterns.dot_matrix import DotMatrixParams
from fieldlab.patterns.flow_field import FlowFieldParams
from fieldlab.patterns.hatch import HatchParams
from fieldlab.patterns.network import NetworkParams
from fieldlab.patterns.topo import TopoParams
from fieldlab.patterns.voronoi import VoronoiParams
from fieldlab.patterns.wave import WaveParams
from fieldlab.render import hex_to_rgb, rasterize, to_svg

SMALL = Style(canvas_size=120)
NOISE_PATTERNS = ["flow", "wave", "topo", "dots", "net", "voronoi", "hatch"]


def _gradient(width=60, height=40):
    return np.tile(np.linspace(0.0, 1.0, width), (height, 1))


class TestRegistry:
    def test_keys(self):
        assert set(PATTERNS) == {"flow", "wave", "topo", "dots", "net", "voronoi", "hatch", "depthtopo"}

    def test_unknown_pattern(self):
        with pytest.raises(ValueError):
            get_pattern("spiral")

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            PATTERNS["spiral"] = PATTERNS["flow"]

    def test_presets_are_read_only(self):
        with pytest.raises(TypeError):
            PATTERNS["flow"].presets["calm"]["particles"] = 1

    def test_only_depthtopo_needs_field(self):
        assert [k for k, d in PATTERNS.items() if d.needs_field] == ["depthtopo"]

    def test_generate_with_defaults(self):
        art = generate("dots")
        assert art.width == art.height == 700
        assert art.background == "#1a4d5c"


class TestDeterminism:
    @pytest.mark.parametrize("key", NOISE_PATTERNS)
    def test_same_params_same_svg(self, key):
        params = get_pattern(key).params_type(seed=42)
        assert to_svg(generate(key, params, SMALL)) == to_svg(generate(key, params, SMALL))

    @pytest.mark.parametrize("key", ["flow", "wave", "dots", "net", "hatch"])
    def test_seed_changes_output(self, key):
        d = get_pattern(key)
        a = to_svg(generate(key, d.params_type(seed=1), SMALL))
        b = to_svg(generate(key, d.params_type(seed=2), SMALL))
        assert a != b

    def test_depthtopo_deterministic(self):
        field = _gradient()
        params = DepthTopoParams()
        assert to_svg(generate("depthtopo", params, SMALL, field)) == to_svg(generate("depthtopo", params, SMALL, field))


class TestFlowField:
    def test_no_particles(self):
        art = generate("flow", FlowFieldParams(particles=0), SMALL)
        assert art.shapes == []
        img = np.asarray(rasterize(art))
        assert (img == hex_to_rgb(SMALL.bg_color)).all()

    def test_paths_stay_in_bounds(self):
        art = generate("flow", FlowFieldParams(particles=50, length=40, seed=9), SMALL)
        assert 0 < len(art.shapes) <= 50
        for shape in art.shapes:
            assert isinstance(shape, PathShape)
            assert len(shape.points) >= 2
            assert shape.paint.linecap == "round"
            for p in shape.points:
                assert 0 <= p.x <= 120
                assert 0 <= p.y <= 120

    def test_unit_steps(self):
        art = generate("flow", FlowFieldParams(particles=5, length=10, seed=3), SMALL)
        for shape in art.shapes:
            for a, b in zip(shape.points, shape.points[1:]):
                assert math.hypot(b.x - a.x, b.y - a.y) == pytest.approx(1.0)

    def test_zero_octaves_flows_straight(self):
        art = generate("flow", FlowFieldParams(particles=3, length=10, octaves=0), Style(canvas_size=50))
        for shape in art.shapes:
            assert {p.y for p in shape.points} == {shape.points[0].y}
            assert shape.points[-1].x > shape.points[0].x


class TestWave:
    def test_one_path_per_line(self):
        art = generate("wave", WaveParams(lines=10), SMALL)
        assert len(art.shapes) == 10
        for shape in art.shapes:
            assert len(shape.points) == 120 // 2 + 1
            assert shape.points[0].x == 0
            assert shape.points[-1].x == 120

    def test_zero_amplitude_is_flat(self):
        art = generate("wave", WaveParams(lines=4, amplitude=0), SMALL)
        for i, shape in enumerate(art.shapes):
            assert {p.y for p in shape.points} == {i * 30.0}


class TestTopo:
    def test_single_level_has_no_contours(self):
        assert generate("topo", TopoParams(levels=1), SMALL).shapes == []

    def test_contours_produced(self):
        art = generate("topo", TopoParams(levels=10, scale=0.02), SMALL)
        assert art.shapes
        for shape in art.shapes:
            assert len(shape.points) >= 2
            assert shape.precision == 1

    def test_warp_changes_output(self):
        a = to_svg(generate("topo", TopoParams(levels=10, scale=0.02, warp=0), SMALL))
        b = to_svg(generate("topo", TopoParams(levels=10, scale=0.02, warp=80), SMALL))
        assert a != b


class TestDotMatrix:
    def test_zero_radius_draws_nothing(self):
        assert generate("dots", DotMatrixParams(minsize=0, maxsize=0), SMALL).shapes == []

    def test_constant_radius_fills_grid(self):
        art = generate("dots", DotMatrixParams(grid=10, minsize=5, maxsize=5), SMALL)
        assert len(art.shapes) == 100
        assert all(isinstance(s, CircleShape) and s.r == pytest.approx(5) for s in art.shapes)
        assert art.shapes[0].cx == pytest.approx(6)
        assert art.shapes[0].cy == pytest.approx(6)

    def test_radius_range(self):
        art = generate("dots", DotMatrixParams(grid=12, minsize=1, maxsize=6), SMALL)
        assert all(1 <= s.r <= 6 for s in art.shapes)


class TestNetwork:
    def test_edge_count_matches_brute_force(self):
        params = NetworkParams(nodes=40, distance=30, seed=11)
        random = seeded_random(params.seed)
        nodes = [(random() * 120, random() * 120) for _ in range(40)]
        expected = sum(
            1
            for i in range(len(nodes))
            for j in range(i + 1, len(nodes))
            if math.hypot(nodes[i][0] - nodes[j][0], nodes[i][1] - nodes[j][1]) < params.distance
        )
        art = generate("net", params, SMALL)
        lines = [s for s in art.shapes if isinstance(s, LineShape)]
        circles = [s for s in art.shapes if isinstance(s, CircleShape)]
        assert len(lines) == expected
        assert len(circles) == 40

    def test_nodes_drawn_after_edges(self):
        art = generate("net", NetworkParams(nodes=30, distance=60), SMALL)
        kinds = [isinstance(s, CircleShape) for s in art.shapes]
        assert kinds == sorted(kinds)

    def test_edge_opacity_fades(self):
        art = generate("net", NetworkParams(nodes=30, distance=60, opacity=0.5), SMALL)
        for s in art.shapes:
            if isinstance(s, LineShape):
                assert 0 <= s.paint.opacity <= 0.5


class TestVoronoi:
    def test_mask_and_cells(self):
        style = Style(stroke_color="#ff8800", canvas_size=120)
        art = generate("voronoi", VoronoiParams(cells=12, gap=4, radius=2, relax=1), style)
        assert art.mask.shape == (120, 120)
        assert art.mask.any()
        assert not art.mask.all()
        assert art.mask_color == "#ff8800"
        assert art.shapes
        for shape in art.shapes:
            assert shape.closed
            assert shape.paint.fill == "#ff8800"
            assert shape.paint.stroke is None
            assert len(shape.points) >= 3

    def test_raster_uses_mask(self):
        style = Style(stroke_color="#ff8800", bg_color="#000000", canvas_size=120)
        art = generate("voronoi", VoronoiParams(cells=12, gap=4, radius=0, relax=0), style)
        pixels = np.asarray(rasterize(art))
        assert (pixels[art.mask] == (255, 136, 0)).all()
        assert (pixels[~art.mask] == (0, 0, 0)).all()


class TestHatch:
    def test_grid_and_lengths(self):
        art = generate("hatch", HatchParams(spacing=24, length=20), SMALL)
        assert len(art.shapes) == 25
        for s in art.shapes:
            assert math.hypot(s.x2 - s.x1, s.y2 - s.y1) == pytest.approx(20)

    def test_no_variation_is_uniform(self):
        art = generate("hatch", HatchParams(spacing=30, length=10, direction=0, variation=0), SMALL)
        for s in art.shapes:
            assert s.y1 == pytest.approx(s.y2)
            assert s.x2 - s.x1 == pytest.approx(10)


class TestDepthTopo:
    def test_requires_field(self):
        with pytest.raises(ValueError):
            generate("depthtopo", DepthTopoParams(), SMALL)

    def test_constant_field_has_no_contours(self):
        art = generate("depthtopo", DepthTopoParams(), SMALL, np.full((30, 40), 0.37))
        assert art.shapes == []

    def test_gradient_field(self):
        params = DepthTopoParams(levels=10, contour_color="#00ff00", bg_color="#000000")
        art = generate("depthtopo", params, SMALL, _gradient())
        assert (art.width, art.height) == (60, 40)
        assert art.background == "#000000"
        assert art.shapes
        for shape in art.shapes:
            assert len(shape.points) == 2
            assert shape.paint.stroke == "#00ff00"
        assert art.field.shape == (40, 60)

    def test_invert(self):
        field = _gradient()
        plain = generate("depthtopo", DepthTopoParams(smoothing=0), SMALL, field)
        inverted = generate("depthtopo", DepthTopoParams(smoothing=0, invert=True), SMALL, field)
        assert np.allclose(inverted.field, 1 - plain.field)
