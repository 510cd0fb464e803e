# terrain_logic/core/composition.py
from __future__ import annotations
import numpy as np


def lerp(A: np.ndarray, B: np.ndarray, ratio: float) -> np.ndarray:
    """Linear blend of two grids, ratio clamped to [0, 1] (0 -> A, 1 -> B)."""
    t = float(np.clip(ratio, 0.0, 1.0))
    return A * (1.0 - t) + B * t
