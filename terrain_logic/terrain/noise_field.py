# ==============================================================================
# File: terrain_logic/terrain/noise_field.py
# Purpose: deterministic 2D coherent noise in [0..1] used by every preset.
#   - "simplex": OpenSimplex, remapped from [-1..1]
#   - "value":   hashed value lattice with quintic fade (numba)
# ==============================================================================
from __future__ import annotations

import numpy as np
from numba import njit, prange
from opensimplex import OpenSimplex

from setting.constants import NOISE_KINDS, NOISE_SIMPLEX, NOISE_VALUE
from ..core.normalization import clamp01
from ..core.seeding import mix_seed


@njit(inline='always', cache=True)
def _u32(x: int) -> int:
    return x & 0xFFFFFFFF


@njit(inline='always', cache=True)
def _hash2(ix: int, iz: int, seed: int) -> int:
    a, b, c = 0x9e3779b3, 0x9e3779b3, 0x9e3779b3
    a = _u32(a + ix)
    b = _u32(b + iz)
    c = _u32(c + seed)
    a = _u32(a - b - c) ^ (c >> 13)
    b = _u32(b - c - a) ^ _u32(a << 8)
    c = _u32(c - a - b) ^ (b >> 13)
    a = _u32(a - b - c) ^ (c >> 12)
    b = _u32(b - c - a) ^ _u32(a << 16)
    c = _u32(c - a - b) ^ (b >> 5)
    a = _u32(a - b - c) ^ (c >> 3)
    b = _u32(b - c - a) ^ _u32(a << 10)
    c = _u32(c - a - b) ^ (b >> 15)
    return _u32(c)


@njit(inline='always', cache=True)
def _rand01(ix: int, iz: int, seed: int) -> float:
    return _hash2(ix, iz, seed) / 4294967296.0


@njit(inline='always', cache=True)
def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@njit(inline='always', cache=True)
def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@njit(cache=True)
def value_noise_2d(x: float, z: float, seed: int) -> float:
    xi = int(np.floor(x))
    zi = int(np.floor(z))
    u = _fade(x - xi)
    v = _fade(z - zi)
    n00 = _rand01(xi, zi, seed)
    n10 = _rand01(xi + 1, zi, seed)
    n01 = _rand01(xi, zi + 1, seed)
    n11 = _rand01(xi + 1, zi + 1, seed)
    return _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v)


@njit(cache=True, parallel=True)
def _value_noise_grid(xs: np.ndarray, zs: np.ndarray, seed: int) -> np.ndarray:
    W = xs.shape[0]
    H = zs.shape[0]
    out = np.empty((W, H), dtype=np.float64)
    for i in prange(W):
        for j in range(H):
            out[i, j] = value_noise_2d(xs[i], zs[j], seed)
    return out


class NoiseField:
    """
    Seeded coherent-noise sampler over the whole plane.

    ``sample(x, z)`` and ``grid(xs, zs)`` agree: ``grid(xs, zs)[i, j]`` is
    ``sample(xs[i], zs[j])``. Instances hold no mutable state, so one field
    may be shared by concurrent readers.
    """

    def __init__(self, seed: int = 0, kind: str = NOISE_SIMPLEX):
        if kind not in NOISE_KINDS:
            raise ValueError(f"unknown noise kind '{kind}', expected one of {NOISE_KINDS}")
        self.seed = int(seed)
        self.kind = kind
        self._stream_seed = mix_seed(self.seed, 0x5EED)
        self._simplex = OpenSimplex(self._stream_seed) if kind == NOISE_SIMPLEX else None

    def __repr__(self) -> str:
        return f"NoiseField(seed={self.seed}, kind='{self.kind}')"

    def sample(self, x: float, z: float) -> float:
        if self.kind == NOISE_VALUE:
            return float(value_noise_2d(float(x), float(z), self._stream_seed))
        n = 0.5 * (self._simplex.noise2(float(x), float(z)) + 1.0)
        return min(1.0, max(0.0, n))

    def grid(self, xs: np.ndarray, zs: np.ndarray) -> np.ndarray:
        """Samples the outer product of two 1D coordinate vectors, shape (len(xs), len(zs))."""
        xs = np.ascontiguousarray(xs, dtype=np.float64).ravel()
        zs = np.ascontiguousarray(zs, dtype=np.float64).ravel()
        if self.kind == NOISE_VALUE:
            out = _value_noise_grid(xs, zs, self._stream_seed)
        else:
            # noise2array returns (len(zs), len(xs))
            out = clamp01(0.5 * (self._simplex.noise2array(xs, zs).T + 1.0))
        return out.astype(np.float32)
