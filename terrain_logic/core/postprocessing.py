# ==============================================================================
# File: terrain_logic/core/postprocessing.py
# Purpose: passes applied to a raw heightfield after synthesis.
#   - carve_water_bodies: presses low texels down to a basin floor (in place)
#   - smooth_terrain:     3x3 mean, unconditional ("box") or slope-gated ("gated"),
#                         optionally pulling shoreline texels toward the water level
# Grids are indexed [x, z]; the 1-texel border is never smoothed.
# ==============================================================================
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numba import njit, prange

from setting.constants import (
    WATER_CARVE_THRESHOLD,
    WATER_CARVE_DEPTH,
    DEFAULT_STEEPNESS_THRESHOLD,
    SHORELINE_BAND,
    SHORELINE_PULL,
    SMOOTHING_BOX,
    SMOOTHING_GATED,
    SMOOTHING_POLICIES,
)

logger = logging.getLogger(__name__)


@njit(cache=True, parallel=True)
def _carve_inplace(h: np.ndarray, threshold: float, depth: float) -> None:
    W, H = h.shape
    for x in prange(W):
        for z in range(H):
            if h[x, z] < threshold:
                h[x, z] *= depth


@njit(cache=True, parallel=True)
def _smooth_kernel(src: np.ndarray, out: np.ndarray,
                   gated: bool, steepness_threshold: float,
                   bias_shore: bool, water_level: float, band: float, pull: float) -> None:
    W, H = src.shape
    for x in prange(1, W - 1):
        for z in range(1, H - 1):
            cur = src[x, z]
            if gated:
                steepness = abs(cur - src[x + 1, z]) + abs(cur - src[x, z + 1])
                if steepness >= steepness_threshold:
                    continue

            total = 0.0
            for nx in range(-1, 2):
                for nz in range(-1, 2):
                    total += src[x + nx, z + nz]
            val = total / 9.0

            if bias_shore and cur >= water_level - band and cur <= water_level + band:
                val = val + (water_level - val) * pull
            out[x, z] = val


def carve_water_bodies(heights: np.ndarray) -> np.ndarray:
    """Multiplies every texel below 0.1 by 0.05. Mutates and returns ``heights``."""
    _carve_inplace(heights, WATER_CARVE_THRESHOLD, WATER_CARVE_DEPTH)
    return heights


def smooth_terrain(
    heights: np.ndarray,
    policy: str = SMOOTHING_BOX,
    water_level: Optional[float] = None,
    steepness_threshold: float = DEFAULT_STEEPNESS_THRESHOLD,
) -> np.ndarray:
    """
    Returns a smoothed copy of ``heights``; the input is only read.

    Args:
        heights: (W, H) grid.
        policy: "box" replaces every interior texel by its 3x3 mean; "gated" only
            does so where |h[x,z]-h[x+1,z]| + |h[x,z]-h[x,z+1]| < steepness_threshold,
            keeping cliffs sharp.
        water_level: when given, interior texels within +-0.02 of it are moved
            half way toward it after smoothing.
        steepness_threshold: gate for the "gated" policy, in normalized height units.
    """
    if policy not in SMOOTHING_POLICIES:
        raise ValueError(f"unknown smoothing policy '{policy}', expected one of {SMOOTHING_POLICIES}")
    if heights.ndim != 2:
        raise ValueError(f"smooth_terrain expects a 2D grid, got shape {heights.shape}")

    src = np.ascontiguousarray(heights)
    out = src.copy()
    if src.shape[0] < 3 or src.shape[1] < 3:
        return out

    _smooth_kernel(
        src, out,
        policy == SMOOTHING_GATED, float(steepness_threshold),
        water_level is not None,
        float(water_level) if water_level is not None else 0.0,
        SHORELINE_BAND, SHORELINE_PULL,
    )
    logger.debug("smooth_terrain: policy=%s shape=%s shore_bias=%s", policy, src.shape, water_level is not None)
    return out
