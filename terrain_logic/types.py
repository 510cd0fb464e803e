# terrain_logic/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple

import numpy as np

from setting.config import GenerationParameters, LayerBinding
from setting.constants import WATER_PLANE_SINK, WATER_PLANE_UNIT


@dataclass(frozen=True)
class WaterPlane:
    """Placement of the host's water mesh; the mesh itself belongs to the host."""

    position: Tuple[float, float, float]
    scale: Tuple[float, float, float]


def water_plane_for(width: int, height: int, depth: float, water_level: float) -> WaterPlane:
    """Centered on the tile, slightly under the water surface, unit plane scaled to W x H."""
    return WaterPlane(
        position=(width / 2.0, water_level * depth - WATER_PLANE_SINK, height / 2.0),
        scale=(width / WATER_PLANE_UNIT, 1.0, height / WATER_PLANE_UNIT),
    )


@dataclass
class TerrainResult:
    """Everything one generation run produces."""

    preset: str
    seed: int
    width: int
    height: int
    params: GenerationParameters
    heights: np.ndarray
    weights: np.ndarray
    layers: LayerBinding
    water_plane: WaterPlane
    lake_centers: List[Tuple[int, int]] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)


class TerrainSink(Protocol):
    """Host-side consumer of a finished terrain."""

    def replace(self, height_grid: np.ndarray, blend_weights: np.ndarray, layer_binding: LayerBinding) -> None: ...
