# terrain_logic/texturing/slope.py
from __future__ import annotations

import numpy as np


def slope_angle_deg(heights: np.ndarray, depth: float, cell_size: float = 1.0) -> np.ndarray:
    """
    Surface slope in degrees for every texel of a normalized (W, H) grid.

    The grid is first lifted to world units (h * depth), then
    θ = arctan(|∇h|) with dh/dx, dh/dz from np.gradient(..., cell_size).
    """
    if heights.ndim != 2:
        raise ValueError(f"slope_angle_deg expects a 2D grid, got shape {heights.shape}")
    if not (cell_size > 0):
        raise ValueError("cell_size must be > 0")

    world = heights.astype(np.float64) * float(depth)
    if world.shape[0] < 2 or world.shape[1] < 2:
        return np.zeros(world.shape, dtype=np.float32)

    dx, dz = np.gradient(world, cell_size, cell_size)  # axis0 = x, axis1 = z
    slope = np.hypot(dx, dz)
    return np.degrees(np.arctan(slope)).astype(np.float32)
