# ==============================================================================
# File: terrain_logic/pipeline.py
# Purpose: one synchronous generation run, config -> TerrainResult.
#   1. validate config, resolve seed and parameters
#   2. build the heightfield (synthesis + post-processing of the preset)
#   3. paint the splatmap
#   4. place the water plane
# The result is handed to a TerrainSink by the host via publish().
# ==============================================================================
from __future__ import annotations

import logging
import random
import time
from typing import Optional

from setting.config import GenConfig
from .core.normalization import ensure_finite
from .core.seeding import resolve_seed
from .presets import reset_for_preset, layer_binding_for
from .terrain.heightfield import build_heightfield
from .terrain.noise_field import NoiseField
from .texturing.splatmap import paint_splatmap, SlopeSampler
from .types import TerrainResult, TerrainSink, water_plane_for

logger = logging.getLogger(__name__)


def generate_terrain(
    config: GenConfig,
    rng: Optional[random.Random] = None,
    slope_sampler: Optional[SlopeSampler] = None,
) -> TerrainResult:
    """
    Runs the full generation for ``config``.

    ``rng`` is only consulted when ``config.use_random_seed`` is set.
    ``slope_sampler`` lets the host answer slope queries for hard painting.
    Identical inputs give bit-identical heights and weights.
    """
    config.validate()
    seed = resolve_seed(config.use_random_seed, config.seed, rng)
    params = config.params if config.params is not None else reset_for_preset(config.preset)
    params.validate()
    layers = config.layers if config.layers is not None else layer_binding_for(config.preset, config.painting)

    logger.info(
        "Generating '%s' terrain %dx%d (seed=%d, scale=%.2f, depth=%.2f, water=%.3f)",
        config.preset, config.width, config.height, seed, params.scale, params.depth, params.water_level,
    )
    t0 = time.perf_counter()
    try:
        noise = NoiseField(seed, kind=config.noise)
        field = build_heightfield(
            config.preset, config.width, config.height, params, seed,
            noise=noise,
            smoothing=config.smoothing,
            shoreline_bias=config.shoreline_bias,
            steepness_threshold=config.steepness_threshold,
            mountain_style=config.mountain_style,
        )
        ensure_finite(field.heights, "heights")
        t_height = time.perf_counter()

        weights = paint_splatmap(
            field.heights, params.water_level, layers,
            policy=config.painting,
            resolution=config.alphamap_resolution,
            depth=params.depth,
            cell_size=config.cell_size,
            slope_sampler=slope_sampler,
        )
        ensure_finite(weights, "weights")
    except Exception:
        logger.exception("Terrain generation failed for preset '%s' (seed=%d)", config.preset, seed)
        raise

    t_end = time.perf_counter()
    result = TerrainResult(
        preset=config.preset,
        seed=seed,
        width=config.width,
        height=config.height,
        params=params,
        heights=field.heights,
        weights=weights,
        layers=layers,
        water_plane=water_plane_for(config.width, config.height, params.depth, params.water_level),
        lake_centers=field.lake_centers,
    )
    result.metrics["timings_ms"] = {
        "heightfield_ms": (t_height - t0) * 1000.0,
        "splatmap_ms": (t_end - t_height) * 1000.0,
        "total_ms": (t_end - t0) * 1000.0,
    }
    logger.info("Terrain '%s' done in %.1f ms", config.preset, result.metrics["timings_ms"]["total_ms"])
    logger.debug(
        "Heights min=%.4f max=%.4f mean=%.4f; weights shape=%s",
        float(field.heights.min()), float(field.heights.max()), float(field.heights.mean()), weights.shape,
    )
    return result


def publish(result: TerrainResult, sink: TerrainSink) -> None:
    """Hands a finished terrain to the host in a single replace call."""
    sink.replace(result.heights, result.weights, result.layers)
    logger.info("Published terrain '%s' to %s", result.preset, type(sink).__name__)
