# setting/constants.py
from __future__ import annotations
from typing import Any, Dict, Tuple

# =======================================================================
# PRESETS
# =======================================================================

PRESET_GRASSLANDS = "grasslands"
PRESET_DESERT = "desert"
PRESET_MOUNTAINOUS = "mountainous"
PRESET_LAKE = "lake"
PRESET_CANYONS = "canyons"

PRESET_IDS: Tuple[str, ...] = (
    PRESET_GRASSLANDS,
    PRESET_DESERT,
    PRESET_MOUNTAINOUS,
    PRESET_LAKE,
    PRESET_CANYONS,
)

# =======================================================================
# TEXTURE LAYERS (opaque channel ids handed to the host)
# =======================================================================

LAYER_GRASSLANDS = "grasslands"
LAYER_DESERT = "desert"
LAYER_MOUNTAIN = "mountain"
LAYER_LAKE = "lake"
LAYER_CANYONS = "canyons"
LAYER_WATER = "water"
LAYER_CLIFF = "cliff"

PRESET_BASE_LAYER: Dict[str, str] = {
    PRESET_GRASSLANDS: LAYER_GRASSLANDS,
    PRESET_DESERT: LAYER_DESERT,
    PRESET_MOUNTAINOUS: LAYER_MOUNTAIN,
    PRESET_LAKE: LAYER_LAKE,
    PRESET_CANYONS: LAYER_CANYONS,
}

# Parameter defaults applied on every preset selection.
PRESET_DEFAULTS: Dict[str, Dict[str, Any]] = {
    PRESET_GRASSLANDS: {"scale": 15.0, "depth": 10.0, "water_level": 0.10},
    PRESET_DESERT: {"scale": 150.0, "depth": 25.0, "water_level": 0.0},
    PRESET_MOUNTAINOUS: {"scale": 25.0, "depth": 50.0, "water_level": 0.30},
    PRESET_LAKE: {"scale": 15.0, "depth": 20.0, "water_level": 0.20, "number_of_lakes": 1, "lake_radius": 100},
    PRESET_CANYONS: {"scale": 20.0, "depth": 30.0, "water_level": 0.05},
}

# =======================================================================
# POLICIES
# =======================================================================

SMOOTHING_BOX = "box"
SMOOTHING_GATED = "gated"
SMOOTHING_POLICIES = (SMOOTHING_BOX, SMOOTHING_GATED)

PAINT_HARD = "hard"
PAINT_BLEND = "blend"
PAINT_POLICIES = (PAINT_HARD, PAINT_BLEND)

NOISE_SIMPLEX = "simplex"
NOISE_VALUE = "value"
NOISE_KINDS = (NOISE_SIMPLEX, NOISE_VALUE)

MOUNTAIN_SHARP = "sharp"
MOUNTAIN_ROLLING = "rolling"
MOUNTAIN_STYLES = (MOUNTAIN_SHARP, MOUNTAIN_ROLLING)

# =======================================================================
# FIXED NUMERIC CONSTANTS
# =======================================================================

# Water carving: texels below the threshold are pressed down to a basin floor.
WATER_CARVE_THRESHOLD = 0.1
WATER_CARVE_DEPTH = 0.05

# Smoothing
DEFAULT_STEEPNESS_THRESHOLD = 0.5
SHORELINE_BAND = 0.02
SHORELINE_PULL = 0.5

# Lakes: multiplier at the centre is 1 - LAKE_FALLOFF.
LAKE_FALLOFF = 0.8

# Canyons
CANYON_BASE_HEIGHT = 0.4
CANYON_THRESHOLD = 0.4
CANYON_TERRAIN_AMPLITUDE = 0.5
CANYON_FREQUENCY_MULTIPLIER = 4.0
CANYON_SEED_OFFSET = 1000.0

# Splat painting
BLEND_RANGE = 0.01
CLIFF_MIN_DEG = 35.0
CLIFF_MAX_DEG = 90.0

# Water level slider range
WATER_LEVEL_MIN = 0.0
WATER_LEVEL_MAX = 0.5

# Random seed range for use_random_seed
RANDOM_SEED_MAX = 100000

# Water plane sits slightly under the water level to avoid z-fighting.
WATER_PLANE_SINK = 0.1
WATER_PLANE_UNIT = 10.0
