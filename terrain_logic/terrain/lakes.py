# terrain_logic/terrain/lakes.py
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from setting.constants import LAKE_FALLOFF
from ..core.seeding import RNG

logger = logging.getLogger(__name__)


def check_lake_fit(width: int, height: int, number_of_lakes: int, lake_radius: int) -> None:
    if number_of_lakes < 0:
        raise ValueError(f"number_of_lakes must be >= 0, got {number_of_lakes}")
    if number_of_lakes == 0:
        return
    if lake_radius <= 0:
        raise ValueError(f"lake_radius must be > 0, got {lake_radius}")
    if 2 * lake_radius > width or 2 * lake_radius > height:
        raise ValueError(
            f"lake_radius {lake_radius} exceeds half of the {width}x{height} grid; "
            f"lake centers would fall outside the tile"
        )


def pick_lake_centers(width: int, height: int, number_of_lakes: int, lake_radius: int,
                      rng: RNG) -> List[Tuple[int, int]]:
    """Centers drawn uniformly from [radius, dim - radius) on both axes."""
    check_lake_fit(width, height, number_of_lakes, lake_radius)
    centers = []
    for _ in range(number_of_lakes):
        cx = rng.randrange(lake_radius, width - lake_radius)
        cz = rng.randrange(lake_radius, height - lake_radius)
        centers.append((cx, cz))
    logger.debug("Lake centers: %s (radius=%d)", centers, lake_radius)
    return centers


def carve_lakes(heights: np.ndarray, centers: Sequence[Tuple[int, int]], lake_radius: int) -> np.ndarray:
    """
    Depresses every texel closer than ``lake_radius`` to a center:
    ``h *= 1 - 0.8 * (radius - d) / radius``. Overlapping basins compound.
    Mutates and returns ``heights``.
    """
    if not centers:
        return heights
    W, H = heights.shape
    xs = np.arange(W, dtype=np.float64)[:, None]
    zs = np.arange(H, dtype=np.float64)[None, :]
    radius = float(lake_radius)

    multiplier = np.ones((W, H), dtype=np.float64)
    for cx, cz in centers:
        distance = np.sqrt((xs - cx) ** 2 + (zs - cz) ** 2)
        inside = distance < radius
        factor = (radius - distance[inside]) / radius
        multiplier[inside] *= 1.0 - factor * LAKE_FALLOFF

    heights *= multiplier.astype(heights.dtype)
    return heights
