from __future__ import annotations

import math
from random import Random

from pathtype.model.types import NoiseConfig
from pathtype.util.limits import MAX_OCTAVES, MIN_CONTRAST, MIN_OCTAVES

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

_GRAD2 = (
    (1.0, 1.0),
    (-1.0, 1.0),
    (1.0, -1.0),
    (-1.0, -1.0),
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
)


class NoiseField:
    """Seeded 2D simplex noise with a fractal (multi-octave) sampler."""

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        perm = list(range(256))
        Random(self.seed).shuffle(perm)
        self._perm = perm + perm
        self._perm12 = [p % 12 for p in self._perm]

    def sample_2d(self, x: float, y: float) -> float:
        perm = self._perm
        s = (x + y) * _F2
        i = math.floor(x + s)
        j = math.floor(y + s)
        t = (i + j) * _G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        if x0 > y0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        ii = i & 255
        jj = j & 255

        n = 0.0
        t0 = 0.5 - x0 * x0 - y0 * y0
        if t0 > 0:
            gx, gy = _GRAD2[self._perm12[ii + perm[jj]]]
            t0 *= t0
            n += t0 * t0 * (gx * x0 + gy * y0)
        t1 = 0.5 - x1 * x1 - y1 * y1
        if t1 > 0:
            gx, gy = _GRAD2[self._perm12[ii + i1 + perm[jj + j1]]]
            t1 *= t1
            n += t1 * t1 * (gx * x1 + gy * y1)
        t2 = 0.5 - x2 * x2 - y2 * y2
        if t2 > 0:
            gx, gy = _GRAD2[self._perm12[ii + 1 + perm[jj + 1]]]
            t2 *= t2
            n += t2 * t2 * (gx * x2 + gy * y2)

        # 70 brings the kernel sum to roughly [-1, 1]
        return max(-1.0, min(1.0, 70.0 * n))

    def sample_fractal(self, x: float, y: float, cfg: NoiseConfig) -> float:
        octaves = max(MIN_OCTAVES, min(MAX_OCTAVES, int(cfg.octaves)))
        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        for _ in range(octaves):
            value += amplitude * self.sample_2d(x * frequency, y * frequency)
            amplitude *= cfg.persistence
            frequency *= cfg.lacunarity

        contrast = max(MIN_CONTRAST, float(cfg.contrast))
        if contrast != 1:
            value = math.copysign(abs(value) ** contrast, value)

        return max(-1.0, min(1.0, value))
