# ==============================================================================
# File: terrain_logic/terrain/heightfield.py
# Purpose: one synthesis recipe per preset + the post-processing order for each.
#
# Raw synthesizers (*_heights) only combine NoiseField samples; build_heightfield
# runs the full recipe:
#   grasslands / mountainous : synth -> carve water -> smooth
#   desert                   : synth -> smooth
#   lake                     : grasslands synth -> smooth -> carve lakes -> smooth
#   canyons                  : synth -> smooth
# Lake and canyons carry their own water mechanics, so they skip water carving.
# ==============================================================================
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from setting.config import GenerationParameters
from setting.constants import (
    PRESET_GRASSLANDS,
    PRESET_DESERT,
    PRESET_MOUNTAINOUS,
    PRESET_LAKE,
    PRESET_IDS,
    SMOOTHING_BOX,
    DEFAULT_STEEPNESS_THRESHOLD,
    MOUNTAIN_SHARP,
    MOUNTAIN_ROLLING,
    MOUNTAIN_STYLES,
    CANYON_BASE_HEIGHT,
    CANYON_THRESHOLD,
    CANYON_TERRAIN_AMPLITUDE,
    CANYON_FREQUENCY_MULTIPLIER,
    CANYON_SEED_OFFSET,
)
from ..core.composition import lerp
from ..core.postprocessing import carve_water_bodies, smooth_terrain
from ..core.seeding import RNG
from .lakes import check_lake_fit, pick_lake_centers, carve_lakes
from .noise_field import NoiseField

logger = logging.getLogger(__name__)

F32 = np.float32


def _check_dims(width: int, height: int) -> None:
    if int(width) <= 0 or int(height) <= 0:
        raise ValueError(f"grid dimensions must be positive, got {width}x{height}")


def _tile_coords(width: int, height: int, scale: float, seed: int) -> Tuple[np.ndarray, np.ndarray]:
    """x/W*scale + seed and z/H*scale + seed."""
    xs = np.arange(width, dtype=np.float64) / width * scale + seed
    zs = np.arange(height, dtype=np.float64) / height * scale + seed
    return xs, zs


def grasslands_heights(width: int, height: int, scale: float, seed: int, noise: NoiseField) -> np.ndarray:
    _check_dims(width, height)
    xs, zs = _tile_coords(width, height, scale, seed)
    base = noise.grid(xs, zs)

    detail_scale = scale * 0.5
    detail = noise.grid(xs * detail_scale + seed, zs * detail_scale + seed) * F32(0.1)

    return lerp(base, detail + base * F32(0.1), 0.5).astype(F32)


def desert_heights(width: int, height: int, scale: float, depth: float, seed: int,
                   noise: NoiseField) -> np.ndarray:
    _check_dims(width, height)
    dune_scale = scale * 0.1
    max_height = depth * 0.1

    xs = (np.arange(width, dtype=np.float64) + seed) / dune_scale
    zs = (np.arange(height, dtype=np.float64) + seed) / dune_scale
    dunes = noise.grid(xs, zs) * max_height
    dunes += noise.grid(xs * 2.0, zs * 2.0) * (max_height / 3.0)

    return (dunes / depth).astype(F32)


def mountain_heights(width: int, height: int, scale: float, seed: int, noise: NoiseField,
                     style: str = MOUNTAIN_SHARP) -> np.ndarray:
    """
    "sharp": low base frequency with a dense detail layer weighted 0.1.
    "rolling": same blend as grasslands.
    """
    if style not in MOUNTAIN_STYLES:
        raise ValueError(f"unknown mountain style '{style}', expected one of {MOUNTAIN_STYLES}")
    if style == MOUNTAIN_ROLLING:
        return grasslands_heights(width, height, scale, seed, noise)

    _check_dims(width, height)
    xs, zs = _tile_coords(width, height, scale * 0.3, seed)
    base = noise.grid(xs, zs)

    detail_scale = 50.0
    detail = noise.grid(xs * detail_scale, zs * detail_scale) * F32(0.1)

    return lerp(base, detail, 0.1).astype(F32)


def canyon_heights(width: int, height: int, scale: float, depth: float, seed: int,
                   noise: NoiseField) -> np.ndarray:
    """
    Plateau at base height plus half-amplitude terrain noise; wherever a higher
    frequency canyon noise drops below 0.4 the plateau is cut by
    (0.4 - canyon) * depth and floored at 0.
    """
    _check_dims(width, height)
    xs, zs = _tile_coords(width, height, scale, seed)
    terrain = noise.grid(xs, zs)
    heights = terrain * F32(CANYON_TERRAIN_AMPLITUDE) + F32(CANYON_BASE_HEIGHT)

    cxs, czs = _tile_coords(width, height, scale * CANYON_FREQUENCY_MULTIPLIER, seed)
    canyon = noise.grid(cxs + CANYON_SEED_OFFSET, czs + CANYON_SEED_OFFSET)

    cut = canyon < CANYON_THRESHOLD
    heights[cut] = np.maximum(heights[cut] - (CANYON_THRESHOLD - canyon[cut]) * F32(depth), F32(0.0))
    return heights.astype(F32)


@dataclass
class Heightfield:
    heights: np.ndarray
    lake_centers: List[Tuple[int, int]] = field(default_factory=list)


def build_heightfield(
    preset: str,
    width: int,
    height: int,
    params: GenerationParameters,
    seed: int,
    noise: Optional[NoiseField] = None,
    smoothing: str = SMOOTHING_BOX,
    shoreline_bias: bool = True,
    steepness_threshold: float = DEFAULT_STEEPNESS_THRESHOLD,
    mountain_style: str = MOUNTAIN_SHARP,
) -> Heightfield:
    """Runs the synthesis recipe of ``preset`` and returns the finalized (W, H) grid."""
    if preset not in PRESET_IDS:
        raise ValueError(f"unknown preset '{preset}', expected one of {PRESET_IDS}")
    _check_dims(width, height)
    params.validate()
    if preset == PRESET_LAKE:
        check_lake_fit(width, height, params.number_of_lakes, params.lake_radius)

    noise = noise if noise is not None else NoiseField(seed)
    shore = params.water_level if shoreline_bias else None

    def smooth(h: np.ndarray) -> np.ndarray:
        return smooth_terrain(h, smoothing, water_level=shore, steepness_threshold=steepness_threshold)

    centers: List[Tuple[int, int]] = []
    if preset == PRESET_GRASSLANDS:
        h = grasslands_heights(width, height, params.scale, seed, noise)
        h = smooth(carve_water_bodies(h))
    elif preset == PRESET_MOUNTAINOUS:
        h = mountain_heights(width, height, params.scale, seed, noise, mountain_style)
        h = smooth(carve_water_bodies(h))
    elif preset == PRESET_DESERT:
        h = smooth(desert_heights(width, height, params.scale, params.depth, seed, noise))
    elif preset == PRESET_LAKE:
        h = smooth(grasslands_heights(width, height, params.scale, seed, noise))
        centers = pick_lake_centers(width, height, params.number_of_lakes, params.lake_radius, RNG(seed))
        h = smooth(carve_lakes(h, centers, params.lake_radius))
    else:  # canyons
        h = smooth(canyon_heights(width, height, params.scale, params.depth, seed, noise))

    logger.debug("Heightfield '%s' %dx%d: min=%.4f max=%.4f", preset, width, height, float(h.min()), float(h.max()))
    return Heightfield(heights=h, lake_centers=centers)
