"""
noise.py
========

Seeded randomness for every generator:

- ``NoiseField``: 2D simplex noise with a permutation table shuffled by the
  seed, plus a fractal (octave) sum. Both accept plain floats or NumPy arrays,
  so a whole grid of samples can be evaluated in one call.
- ``seeded_random``: a restartable uniform stream; the same seed gives the
  same sequence on every run and platform (Mersenne Twister).
"""

import math
import random
from typing import Callable, Optional, Union

import numpy as np

ArrayLike = Union[float, np.ndarray]

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

_GRAD3 = np.array([
    (1, 1), (-1, 1), (1, -1), (-1, -1),
    (1, 0), (-1, 0), (1, 0), (-1, 0),
    (0, 1), (0, -1), (0, 1), (0, -1),
], dtype=np.float64)


def rng_from_seed(seed: Optional[int]) -> random.Random:
    """Return a Random instance from seed (or system)."""
    r = random.Random()
    if seed is not None:
        r.seed(int(seed))
    else:
        r.seed()
    return r


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a fresh deterministic ``() -> float in [0, 1)`` stream for ``seed``."""
    return rng_from_seed(seed).random


class NoiseField:
    """Coherent 2D noise for one integer seed."""

    def __init__(self, seed: int):
        self.seed = int(seed)
        p = list(range(256))
        # Seeded apart from seeded_random(seed), which shares the integer seed.
        random.Random(f"perm:{self.seed}").shuffle(p)
        self._perm = np.array(p + p, dtype=np.int64)
        self._perm12 = self._perm % 12

    def noise2d(self, x: ArrayLike, y: ArrayLike) -> ArrayLike:
        """Simplex noise in [-1, 1]. Returns a float for scalar input."""
        scalar = np.ndim(x) == 0 and np.ndim(y) == 0
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        # Skew into simplex space to find the containing cell.
        s = (x + y) * _F2
        i = np.floor(x + s)
        j = np.floor(y + s)
        t = (i + j) * _G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        # Lower or upper triangle of the skewed cell.
        i1 = (x0 > y0).astype(np.int64)
        j1 = 1 - i1

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        ii = i.astype(np.int64) & 255
        jj = j.astype(np.int64) & 255
        perm, perm12 = self._perm, self._perm12
        gi0 = perm12[ii + perm[jj]]
        gi1 = perm12[ii + i1 + perm[jj + j1]]
        gi2 = perm12[ii + 1 + perm[jj + 1]]

        total = (
            self._corner(gi0, x0, y0)
            + self._corner(gi1, x1, y1)
            + self._corner(gi2, x2, y2)
        )
        out = 70.0 * total
        return float(out) if scalar else out

    @staticmethod
    def _corner(gi: np.ndarray, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
        t = 0.5 - dx * dx - dy * dy
        g = _GRAD3[gi]
        dot = g[..., 0] * dx + g[..., 1] * dy
        t2 = t * t
        return np.where(t < 0, 0.0, t2 * t2 * dot)

    def octave_noise2d(self, x: ArrayLike, y: ArrayLike, octaves: int) -> ArrayLike:
        """Normalized sum of ``octaves`` layers, each at double frequency and half amplitude."""
        total = 0.0
        frequency = 1.0
        amplitude = 1.0
        max_value = 0.0
        for _ in range(int(octaves)):
            total = total + self.noise2d(np.multiply(x, frequency), np.multiply(y, frequency)) * amplitude
            max_value += amplitude
            amplitude *= 0.5
            frequency *= 2.0
        if max_value == 0:
            # No octaves: a flat field of zeros.
            zeros = np.zeros(np.broadcast(np.asarray(x), np.asarray(y)).shape)
            return float(zeros) if zeros.ndim == 0 else zeros
        return total / max_value
