from __future__ import annotations

import json
import math
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import (
    PRESET_IDS,
    PRESET_GRASSLANDS,
    PRESET_DEFAULTS,
    SMOOTHING_POLICIES,
    SMOOTHING_BOX,
    PAINT_POLICIES,
    PAINT_BLEND,
    NOISE_KINDS,
    NOISE_SIMPLEX,
    MOUNTAIN_STYLES,
    MOUNTAIN_SHARP,
    DEFAULT_STEEPNESS_THRESHOLD,
    WATER_LEVEL_MIN,
    WATER_LEVEL_MAX,
)


@dataclass
class GenerationParameters:
    """Numeric knobs that a preset selection resets."""

    scale: float = 20.0
    depth: float = 20.0
    water_level: float = 0.1
    number_of_lakes: int = 0
    lake_radius: int = 0

    def validate(self) -> None:
        for name in ("scale", "depth", "water_level"):
            v = float(getattr(self, name))
            if not math.isfinite(v):
                raise ValueError(f"{name} must be finite, got {v!r}")
        if self.scale <= 0:
            raise ValueError(f"scale must be > 0, got {self.scale}")
        if self.depth <= 0:
            raise ValueError(f"depth must be > 0, got {self.depth}")
        if not (WATER_LEVEL_MIN <= self.water_level <= WATER_LEVEL_MAX):
            raise ValueError(
                f"water_level must be in [{WATER_LEVEL_MIN}, {WATER_LEVEL_MAX}], got {self.water_level}"
            )
        if self.number_of_lakes < 0:
            raise ValueError(f"number_of_lakes must be >= 0, got {self.number_of_lakes}")
        if self.number_of_lakes > 0 and self.lake_radius <= 0:
            raise ValueError("lake_radius must be > 0 when number_of_lakes > 0")


@dataclass(frozen=True)
class LayerBinding:
    """Ordered texture channels; the order is the splatmap's last axis."""

    base: str
    water: str
    cliff: Optional[str] = None

    @property
    def channels(self) -> Tuple[str, ...]:
        if self.cliff is None:
            return (self.base, self.water)
        return (self.base, self.water, self.cliff)

    def index_of(self, channel: str) -> int:
        return self.channels.index(channel)

    def validate(self) -> None:
        for ch in self.channels:
            if not isinstance(ch, str) or not ch:
                raise ValueError("layer channel ids must be non-empty strings")
        if len(set(self.channels)) != len(self.channels):
            raise ValueError(f"layer channel ids must be unique, got {self.channels}")


@dataclass
class GenConfig:
    width: int = 256
    height: int = 256
    preset: str = PRESET_GRASSLANDS
    seed: int = 0
    use_random_seed: bool = False

    # None -> defaults of the selected preset
    params: Optional[GenerationParameters] = None

    smoothing: str = SMOOTHING_BOX
    shoreline_bias: bool = True
    steepness_threshold: float = DEFAULT_STEEPNESS_THRESHOLD
    painting: str = PAINT_BLEND
    alphamap_resolution: Optional[int] = None
    cell_size: float = 1.0
    noise: str = NOISE_SIMPLEX
    mountain_style: str = MOUNTAIN_SHARP

    # None -> base layer of the preset + water (+ cliff for hard painting)
    layers: Optional[LayerBinding] = None

    out_dir: str = "./out"
    world_id: str = "terrain"

    def validate(self) -> None:
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError(f"width and height must be > 0, got {self.width}x{self.height}")
        if self.preset not in PRESET_IDS:
            raise ValueError(f"unknown preset '{self.preset}', expected one of {PRESET_IDS}")
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise TypeError(f"seed must be int, got {type(self.seed).__name__}")
        if self.smoothing not in SMOOTHING_POLICIES:
            raise ValueError(f"unknown smoothing policy '{self.smoothing}'")
        if self.painting not in PAINT_POLICIES:
            raise ValueError(f"unknown painting policy '{self.painting}'")
        if self.noise not in NOISE_KINDS:
            raise ValueError(f"unknown noise kind '{self.noise}'")
        if self.mountain_style not in MOUNTAIN_STYLES:
            raise ValueError(f"unknown mountain style '{self.mountain_style}'")
        if not (self.steepness_threshold > 0):
            raise ValueError("steepness_threshold must be > 0")
        if self.alphamap_resolution is not None and int(self.alphamap_resolution) <= 0:
            raise ValueError("alphamap_resolution must be > 0")
        if not (self.cell_size > 0):
            raise ValueError("cell_size must be > 0")
        if self.params is not None:
            self.params.validate()
        if self.layers is not None:
            self.layers.validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def _deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
        out = dict(base)
        for k, v in overrides.items():
            if isinstance(v, Mapping) and isinstance(out.get(k), dict):
                out[k] = GenConfig._deep_merge(out[k], v)
            else:
                out[k] = v
        return out

    def merge_overrides(self, overrides: Mapping[str, Any]) -> "GenConfig":
        merged = self._deep_merge(self.to_dict(), overrides)
        return GenConfig.from_dict(merged)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenConfig":
        default = cls().to_dict()
        merged = cls._deep_merge(default, dict(data))

        params = merged.get("params")
        if params:
            # partial params fill up from the preset defaults
            params = {**PRESET_DEFAULTS.get(str(merged["preset"]), {}), **params}
        layers = merged.get("layers")
        res = merged.get("alphamap_resolution")
        obj = cls(
            width=int(merged["width"]), height=int(merged["height"]),
            preset=str(merged["preset"]), seed=int(merged["seed"]),
            use_random_seed=bool(merged["use_random_seed"]),
            params=GenerationParameters(**params) if params else None,
            smoothing=str(merged["smoothing"]),
            shoreline_bias=bool(merged["shoreline_bias"]),
            steepness_threshold=float(merged["steepness_threshold"]),
            painting=str(merged["painting"]),
            alphamap_resolution=int(res) if res is not None else None,
            cell_size=float(merged["cell_size"]),
            noise=str(merged["noise"]),
            mountain_style=str(merged["mountain_style"]),
            layers=LayerBinding(**layers) if layers else None,
            out_dir=str(merged["out_dir"]), world_id=str(merged["world_id"]),
        )
        obj.validate()
        return obj


def load_config(path: str | Path, overrides: Mapping[str, Any] | None = None) -> GenConfig:
    """Reads a JSON config file and layers optional overrides on top."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must hold a JSON object")
    if overrides:
        data = GenConfig._deep_merge(data, overrides)
    return GenConfig.from_dict(data)
