from .pipeline import generate_terrain, publish
from .presets import TerrainPreset, reset_for_preset, select_preset, layer_binding_for
from .terrain.noise_field import NoiseField
from .terrain.heightfield import build_heightfield
from .core.postprocessing import carve_water_bodies, smooth_terrain
from .texturing.splatmap import paint_splatmap
from .types import TerrainResult, TerrainSink, WaterPlane, water_plane_for

__all__ = [
    "generate_terrain",
    "publish",
    "TerrainPreset",
    "reset_for_preset",
    "select_preset",
    "layer_binding_for",
    "NoiseField",
    "build_heightfield",
    "carve_water_bodies",
    "smooth_terrain",
    "paint_splatmap",
    "TerrainResult",
    "TerrainSink",
    "WaterPlane",
    "water_plane_for",
]
