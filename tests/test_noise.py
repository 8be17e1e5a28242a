"""Tests for the seeded noise sources."""

import numpy as np
import pytest

from fieldlab.noise import NoiseField, rng_from_seed, seeded_random


class TestNoise2D:
    def test_same_seed_same_values(self):
        a = NoiseField(42)
        b = NoiseField(42)
        assert a.noise2d(0.37, 1.91) == b.noise2d(0.37, 1.91)

    def test_different_seeds_differ(self):
        xs = np.linspace(0, 10, 50)
        a = NoiseField(1).noise2d(xs, xs * 0.5)
        b = NoiseField(2).noise2d(xs, xs * 0.5)
        assert not np.allclose(a, b)

    def test_scalar_input_returns_float(self):
        value = NoiseField(7).noise2d(1.5, 2.5)
        assert isinstance(value, float)

    def test_array_matches_scalar(self):
        noise = NoiseField(9)
        xs = np.array([0.1, 3.7, -2.2])
        ys = np.array([5.5, 0.0, 1.25])
        grid = noise.noise2d(xs, ys)
        for x, y, v in zip(xs, ys, grid):
            assert noise.noise2d(float(x), float(y)) == pytest.approx(v)

    def test_range(self):
        xs, ys = np.meshgrid(np.linspace(-20, 20, 200), np.linspace(-20, 20, 200))
        values = NoiseField(1234).noise2d(xs, ys)
        assert values.min() >= -1.0
        assert values.max() <= 1.0
        assert values.std() > 0.1

    def test_lattice_origin_is_zero(self):
        """All three simplex corners contribute nothing at the origin."""
        for seed in (1, 99, 1234):
            assert NoiseField(seed).noise2d(0.0, 0.0) == 0.0

    def test_continuity(self):
        noise = NoiseField(5)
        a = noise.noise2d(3.21, 4.56)
        b = noise.noise2d(3.21 + 1e-4, 4.56)
        assert abs(a - b) < 1e-2


class TestOctaveNoise:
    def test_single_octave_equals_noise(self):
        noise = NoiseField(3)
        assert noise.octave_noise2d(1.3, 2.4, 1) == pytest.approx(noise.noise2d(1.3, 2.4))

    def test_range(self):
        xs, ys = np.meshgrid(np.linspace(0, 8, 100), np.linspace(0, 8, 100))
        values = NoiseField(11).octave_noise2d(xs, ys, 4)
        assert values.min() >= -1.0
        assert values.max() <= 1.0

    def test_deterministic(self):
        assert NoiseField(8).octave_noise2d(0.5, 0.25, 3) == NoiseField(8).octave_noise2d(0.5, 0.25, 3)


class TestSeededRandom:
    def test_restartable(self):
        a = seeded_random(1234)
        first = [a() for _ in range(10)]
        b = seeded_random(1234)
        assert [b() for _ in range(10)] == first

    def test_unit_interval(self):
        r = seeded_random(77)
        values = [r() for _ in range(1000)]
        assert all(0.0 <= v < 1.0 for v in values)

    def test_streams_are_independent(self):
        a = seeded_random(1)
        b = seeded_random(2)
        assert [a() for _ in range(5)] != [b() for _ in range(5)]

    def test_rng_from_seed_none_is_usable(self):
        assert 0.0 <= rng_from_seed(None).random() < 1.0


class TestZeroOctaves:
    def test_scalar_is_zero(self):
        assert NoiseField(4).octave_noise2d(1.5, 2.5, 0) == 0.0

    def test_grid_is_zeros(self):
        xs, ys = np.meshgrid(np.linspace(0, 3, 7), np.linspace(0, 3, 5))
        values = NoiseField(4).octave_noise2d(xs, ys, 0)
        assert values.shape == (5, 7)
        assert not values.any()


class TestPermutationSeeding:
    def test_table_not_shuffled_by_point_stream(self):
        p = list(range(256))
        rng_from_seed(1234).shuffle(p)
        assert NoiseField(1234)._perm[:256].tolist() != p

    def test_table_is_a_permutation(self):
        assert sorted(NoiseField(99)._perm[:256].tolist()) == list(range(256))
