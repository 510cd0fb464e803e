# ==============================================================================
# File: terrain_logic/texturing/splatmap.py
# Purpose: per-texel texture weights (W', H', L) from a finalized heightfield.
#   - "hard":  one-hot; water below the level, cliff on steep ground, base otherwise
#   - "blend": base/water crossfade over a narrow band around the water level
# Channel order on the last axis follows LayerBinding.channels.
# ==============================================================================
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple, Union

import numpy as np

from setting.config import LayerBinding
from setting.constants import (
    PAINT_HARD,
    PAINT_BLEND,
    PAINT_POLICIES,
    BLEND_RANGE,
    CLIFF_MIN_DEG,
    CLIFF_MAX_DEG,
)
from .slope import slope_angle_deg

logger = logging.getLogger(__name__)

# (nx, ny) in [0..1) -> slope in degrees
SlopeSampler = Callable[[float, float], float]


def _resolve_resolution(shape: Tuple[int, int], resolution: Union[int, Tuple[int, int], None]) -> Tuple[int, int]:
    if resolution is None:
        return int(shape[0]), int(shape[1])
    if isinstance(resolution, (tuple, list)):
        aw, ah = int(resolution[0]), int(resolution[1])
    else:
        aw = ah = int(resolution)
    if aw <= 0 or ah <= 0:
        raise ValueError(f"alphamap resolution must be > 0, got {resolution}")
    return aw, ah


def _nearest_indices(aw: int, ah: int, W: int, H: int) -> Tuple[np.ndarray, np.ndarray]:
    ix = (np.arange(aw, dtype=np.int64) * W) // aw
    iz = (np.arange(ah, dtype=np.int64) * H) // ah
    return ix, iz


def _sampled_slope(aw: int, ah: int, slope_sampler: SlopeSampler) -> np.ndarray:
    out = np.empty((aw, ah), dtype=np.float32)
    for x in range(aw):
        nx = x / aw
        for y in range(ah):
            out[x, y] = slope_sampler(nx, y / ah)
    return out


def paint_hard_partition(
    heights: np.ndarray,
    water_level: float,
    binding: LayerBinding,
    resolution=None,
    depth: float = 1.0,
    cell_size: float = 1.0,
    slope_sampler: Optional[SlopeSampler] = None,
) -> np.ndarray:
    W, H = heights.shape
    aw, ah = _resolve_resolution((W, H), resolution)
    ix, iz = _nearest_indices(aw, ah, W, H)
    h = heights[np.ix_(ix, iz)]

    channels = binding.channels
    out = np.zeros((aw, ah, len(channels)), dtype=np.float32)

    above = h > water_level
    base_mask = above
    if binding.cliff is not None:
        if slope_sampler is not None:
            angle = _sampled_slope(aw, ah, slope_sampler)
        else:
            angle = slope_angle_deg(heights, depth, cell_size)[np.ix_(ix, iz)]
        cliff_mask = above & (angle >= CLIFF_MIN_DEG) & (angle <= CLIFF_MAX_DEG)
        base_mask = above & ~cliff_mask
        out[..., binding.index_of(binding.cliff)][cliff_mask] = 1.0

    out[..., binding.index_of(binding.base)][base_mask] = 1.0
    out[..., binding.index_of(binding.water)][~above] = 1.0
    return out


def paint_smooth_blend(
    heights: np.ndarray,
    water_level: float,
    binding: LayerBinding,
    resolution=None,
) -> np.ndarray:
    W, H = heights.shape
    aw, ah = _resolve_resolution((W, H), resolution)
    ix, iz = _nearest_indices(aw, ah, W, H)
    h = heights[np.ix_(ix, iz)].astype(np.float32)

    lo = np.float32(water_level - BLEND_RANGE)
    b = np.clip((h - lo) / np.float32(2.0 * BLEND_RANGE), 0.0, 1.0).astype(np.float32)

    out = np.zeros((aw, ah, len(binding.channels)), dtype=np.float32)
    out[..., binding.index_of(binding.base)] = b
    out[..., binding.index_of(binding.water)] = 1.0 - b
    return out


def paint_splatmap(
    heights: np.ndarray,
    water_level: float,
    binding: LayerBinding,
    policy: str = PAINT_BLEND,
    resolution=None,
    depth: float = 1.0,
    cell_size: float = 1.0,
    slope_sampler: Optional[SlopeSampler] = None,
) -> np.ndarray:
    """
    Computes blend weights for every alphamap texel.

    Args:
        heights: finalized (W, H) grid in [0..1].
        water_level: normalized water level.
        binding: ordered texture channels; output's last axis follows it.
        policy: "hard" or "blend".
        resolution: None -> (W, H); int -> square alphamap; (W', H') otherwise.
            Texel (x, y) reads heights[x*W // W', y*H // H'].
        depth: world height of h=1, used by the grid slope estimate.
        cell_size: texel spacing in world units.
        slope_sampler: host slope query (nx, ny) -> degrees; replaces the
            grid estimate for hard painting.

    Returns:
        float32 array (W', H', L); weights are in [0, 1] and sum to 1 per texel.
    """
    if policy not in PAINT_POLICIES:
        raise ValueError(f"unknown painting policy '{policy}', expected one of {PAINT_POLICIES}")
    if heights.ndim != 2:
        raise ValueError(f"paint_splatmap expects a 2D grid, got shape {heights.shape}")
    if not (cell_size > 0):
        raise ValueError("cell_size must be > 0")
    binding.validate()

    if policy == PAINT_HARD:
        weights = paint_hard_partition(heights, water_level, binding, resolution, depth, cell_size, slope_sampler)
    else:
        weights = paint_smooth_blend(heights, water_level, binding, resolution)

    logger.debug("Splatmap %s: shape=%s channels=%s", policy, weights.shape, binding.channels)
    return weights
