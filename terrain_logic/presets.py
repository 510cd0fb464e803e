# terrain_logic/presets.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from setting.config import GenerationParameters, LayerBinding
from setting.constants import (
    PRESET_GRASSLANDS,
    PRESET_DESERT,
    PRESET_MOUNTAINOUS,
    PRESET_LAKE,
    PRESET_CANYONS,
    PRESET_IDS,
    PRESET_BASE_LAYER,
    PRESET_DEFAULTS,
    LAYER_WATER,
    LAYER_CLIFF,
    PAINT_HARD,
    PAINT_POLICIES,
)

logger = logging.getLogger(__name__)


class TerrainPreset(str, Enum):
    GRASSLANDS = PRESET_GRASSLANDS
    DESERT = PRESET_DESERT
    MOUNTAINOUS = PRESET_MOUNTAINOUS
    LAKE = PRESET_LAKE
    CANYONS = PRESET_CANYONS


@dataclass(frozen=True)
class PresetDefaults:
    scale: float
    depth: float
    water_level: float
    number_of_lakes: int = 0
    lake_radius: int = 0

    def to_params(self) -> GenerationParameters:
        return GenerationParameters(
            scale=self.scale,
            depth=self.depth,
            water_level=self.water_level,
            number_of_lakes=self.number_of_lakes,
            lake_radius=self.lake_radius,
        )


PRESET_TABLE: Dict[str, PresetDefaults] = {
    preset: PresetDefaults(**values) for preset, values in PRESET_DEFAULTS.items()
}


def _preset_id(preset) -> str:
    value = preset.value if isinstance(preset, TerrainPreset) else str(preset)
    if value not in PRESET_IDS:
        raise ValueError(f"unknown preset '{preset}', expected one of {PRESET_IDS}")
    return value


def reset_for_preset(preset) -> GenerationParameters:
    """Fresh GenerationParameters holding the fixed defaults of ``preset``."""
    return PRESET_TABLE[_preset_id(preset)].to_params()


def select_preset(previous: Optional[str], new, params: GenerationParameters) -> Tuple[GenerationParameters, str]:
    """
    Preset transition kept by the host.

    Returns ``(params', new)``. When ``new`` differs from ``previous`` every
    customized value is discarded and the defaults of ``new`` are returned;
    otherwise ``params`` comes back untouched. ``previous=None`` counts as a
    transition.
    """
    new_id = _preset_id(new)
    prev_id = _preset_id(previous) if previous is not None else None
    if new_id != prev_id:
        logger.info("Preset changed %s -> %s, parameters reset to defaults", prev_id, new_id)
        return reset_for_preset(new_id), new_id
    return params, new_id


def layer_binding_for(preset, painting: str) -> LayerBinding:
    """Base layer of the preset + water; hard painting also binds the cliff channel."""
    if painting not in PAINT_POLICIES:
        raise ValueError(f"unknown painting policy '{painting}', expected one of {PAINT_POLICIES}")
    base = PRESET_BASE_LAYER[_preset_id(preset)]
    cliff = LAYER_CLIFF if painting == PAINT_HARD else None
    return LayerBinding(base=base, water=LAYER_WATER, cliff=cliff)
