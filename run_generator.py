# run_generator.py
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from setting.config import GenConfig, load_config
from setting.constants import (
    PRESET_IDS,
    SMOOTHING_POLICIES,
    PAINT_POLICIES,
    NOISE_KINDS,
    MOUNTAIN_STYLES,
)
from setting.setup_logging import setup_logging
from terrain_logic.io.sinks import PngTerrainSink
from terrain_logic.pipeline import generate_terrain, publish
from terrain_logic.presets import reset_for_preset, select_preset

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Generate a preset terrain heightfield and splatmap.")
    ap.add_argument("--config", type=str, default=None, help="JSON config file (GenConfig fields)")
    ap.add_argument("--preset", choices=PRESET_IDS, default=None, help="Terrain preset")
    ap.add_argument("--width", type=int, default=None, help="Grid width in texels")
    ap.add_argument("--height", type=int, default=None, help="Grid height in texels")
    ap.add_argument("--seed", type=int, default=None, help="Noise seed")
    ap.add_argument("--random-seed", action="store_true", help="Draw a random seed in [0, 100000)")

    ap.add_argument("--scale", type=float, default=None, help="Noise scale override")
    ap.add_argument("--depth", type=float, default=None, help="World height of h=1 override")
    ap.add_argument("--water-level", type=float, default=None, help="Normalized water level override (0..0.5)")
    ap.add_argument("--lakes", type=int, default=None, help="Number of lakes override")
    ap.add_argument("--lake-radius", type=int, default=None, help="Lake radius override (texels)")

    ap.add_argument("--smoothing", choices=SMOOTHING_POLICIES, default=None)
    ap.add_argument("--no-shoreline-bias", action="store_true", help="Disable shoreline pull during smoothing")
    ap.add_argument("--painting", choices=PAINT_POLICIES, default=None)
    ap.add_argument("--noise", choices=NOISE_KINDS, default=None)
    ap.add_argument("--mountain-style", choices=MOUNTAIN_STYLES, default=None)
    ap.add_argument("--alphamap", type=int, default=None, help="Square alphamap resolution")

    ap.add_argument("--out", type=str, default=None, help="Output directory")
    ap.add_argument("--world-id", type=str, default=None, help="Subdirectory of the output directory")
    ap.add_argument("--log-level", type=str, default="INFO")
    ap.add_argument("--log-file", type=str, default=None)
    return ap


def config_from_args(args: argparse.Namespace) -> GenConfig:
    loaded = load_config(args.config) if args.config else GenConfig()

    overrides = {
        "preset": args.preset,
        "width": args.width,
        "height": args.height,
        "seed": args.seed,
        "smoothing": args.smoothing,
        "painting": args.painting,
        "noise": args.noise,
        "mountain_style": args.mountain_style,
        "alphamap_resolution": args.alphamap,
        "out_dir": args.out,
        "world_id": args.world_id,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if args.random_seed:
        overrides["use_random_seed"] = True
    if args.no_shoreline_bias:
        overrides["shoreline_bias"] = False
    cfg = loaded.merge_overrides(overrides)

    if cfg.params is None:
        params = reset_for_preset(cfg.preset)
    else:
        # parameters from the config file belong to its own preset
        params, _ = select_preset(loaded.preset, cfg.preset, cfg.params)

    numeric = {
        "scale": args.scale,
        "depth": args.depth,
        "water_level": args.water_level,
        "number_of_lakes": args.lakes,
        "lake_radius": args.lake_radius,
    }
    numeric = {k: v for k, v in numeric.items() if v is not None}
    if numeric:
        params = replace(params, **numeric)
    cfg.params = params
    cfg.validate()
    return cfg


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level.upper(), args.log_file)

    try:
        cfg = config_from_args(args)
        result = generate_terrain(cfg)
    except (ValueError, TypeError) as e:
        logger.error("Generation aborted: %s", e)
        return 2

    publish(result, PngTerrainSink(Path(cfg.out_dir) / cfg.world_id))
    logger.info(
        "Water plane at %s, scale %s; lakes: %s",
        result.water_plane.position, result.water_plane.scale, result.lake_centers or "none",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
