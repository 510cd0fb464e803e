# ==============================================================================
# File: tests/test_run_generator.py
# Purpose: tests of the command-line host: config layering and PNG output.
# ==============================================================================
import json
import logging
import tempfile
import unittest

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from run_generator import build_parser, config_from_args, main
from terrain_logic.presets import reset_for_preset

LAKE_CONFIG = {
    "preset": "lake",
    "width": 32,
    "height": 32,
    "params": {"scale": 15.0, "depth": 20.0, "water_level": 0.2, "number_of_lakes": 1, "lake_radius": 100},
}


class TestConfigFromArgs(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "lake.json"
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(LAKE_CONFIG, f)

    def tearDown(self):
        self._tmp.cleanup()

    def _cfg(self, *argv):
        return config_from_args(build_parser().parse_args(["--config", str(self.config_path), *argv]))

    def test_preset_switch_drops_file_params(self):
        """--preset desert over a lake config gets the desert defaults, not the lake values."""
        print("\n[TEST] Running test_preset_switch_drops_file_params...")
        cfg = self._cfg("--preset", "desert")
        self.assertEqual(cfg.preset, "desert")
        self.assertEqual(cfg.params, reset_for_preset("desert"))
        print("[TEST] test_preset_switch_drops_file_params PASSED.")

    def test_numeric_overrides_apply_after_switch(self):
        cfg = self._cfg("--preset", "desert", "--depth", "40")
        self.assertEqual(cfg.params.depth, 40.0)
        self.assertEqual(cfg.params.scale, 150.0)
        self.assertEqual(cfg.params.number_of_lakes, 0)

    def test_same_preset_keeps_file_params(self):
        cfg = self._cfg("--preset", "lake")
        self.assertEqual(cfg.params.lake_radius, 100)

        cfg = self._cfg()
        self.assertEqual(cfg.params.depth, 20.0)

    def test_no_config_uses_preset_defaults(self):
        cfg = config_from_args(build_parser().parse_args(["--preset", "canyons"]))
        self.assertEqual(cfg.params, reset_for_preset("canyons"))


class TestMain(unittest.TestCase):

    def tearDown(self):
        logging.getLogger().handlers.clear()

    def test_writes_into_world_directory(self):
        print("\n[TEST] Running test_writes_into_world_directory...")
        with tempfile.TemporaryDirectory() as tmpdir:
            code = main([
                "--preset", "grasslands", "--width", "16", "--height", "16", "--seed", "3",
                "--out", tmpdir, "--world-id", "tile_a", "--log-level", "WARNING",
            ])
            self.assertEqual(code, 0)
            for name in ("height.png", "splat.png", "metadata.json"):
                self.assertTrue((Path(tmpdir) / "tile_a" / name).is_file(), name)
        print("[TEST] test_writes_into_world_directory PASSED.")

    def test_invalid_arguments_exit_code(self):
        code = main(["--preset", "lake", "--width", "16", "--height", "16", "--log-level", "WARNING"])
        # default lake radius 100 does not fit a 16x16 tile
        self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
