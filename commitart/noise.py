"""Seeded 2D gradient noise (improved Perlin construction)."""

from __future__ import annotations

import math
from typing import List

from .prng import create_prng

__all__ = ["SeededNoise"]


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = 0.0
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


class SeededNoise:
    """Smooth scalar field whose permutation table is shuffled from ``seed``.

    Output lies roughly in ``[-1, 1]``; integer lattice points are exactly 0.
    Instances are immutable after construction and safe to share between
    styles of a single run.
    """

    def __init__(self, seed: int) -> None:
        rng = create_prng(seed)
        permutation = list(range(256))
        for i in range(255, 0, -1):
            j = int(math.floor(rng() * (i + 1)))
            permutation[i], permutation[j] = permutation[j], permutation[i]
        self.seed = seed
        self.permutation: List[int] = permutation
        self._p: List[int] = permutation + permutation

    def noise2d(self, x: float, y: float) -> float:
        fx = math.floor(x)
        fy = math.floor(y)
        xi = int(fx) & 255
        yi = int(fy) & 255
        x -= fx
        y -= fy
        u = _fade(x)
        v = _fade(y)
        p = self._p
        a = p[xi] + yi
        b = p[xi + 1] + yi
        return _lerp(
            v,
            _lerp(u, _grad(p[a], x, y), _grad(p[b], x - 1.0, y)),
            _lerp(u, _grad(p[a + 1], x, y - 1.0), _grad(p[b + 1], x - 1.0, y - 1.0)),
        )

    __call__ = noise2d
