# ======================================================================
# File: terrain_logic/core/normalization.py
# Purpose: clamping of noise/height/weight grids into [0..1] and sanity checks.
# ======================================================================
from __future__ import annotations
import numpy as np
from numba import njit, prange


@njit(cache=True, fastmath=True, parallel=True)
def _clamp01_inplace(a: np.ndarray) -> None:
    W, H = a.shape
    for x in prange(W):
        for z in range(H):
            v = a[x, z]
            if v < 0.0:
                a[x, z] = 0.0
            elif v > 1.0:
                a[x, z] = 1.0


def clamp01(arr: np.ndarray) -> np.ndarray:
    """Returns a float32 copy of a 2D array clamped to [0..1]."""
    a = np.array(arr, dtype=np.float32, copy=True)
    if a.ndim != 2:
        raise ValueError(f"clamp01 expects a 2D array, got shape {a.shape}")
    _clamp01_inplace(a)
    return a


def ensure_finite(arr: np.ndarray, name: str) -> None:
    if not np.isfinite(arr).all():
        raise ValueError(f"{name} contains NaN/Inf values")
