# ==============================================================================
# File: tests/test_heightfield.py
# Purpose: unit tests for preset synthesis, lakes and the build recipes.
# ==============================================================================
import unittest
import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from setting.config import GenerationParameters
from terrain_logic.core.seeding import RNG
from terrain_logic.terrain.heightfield import (
    build_heightfield,
    canyon_heights,
    grasslands_heights,
    mountain_heights,
)
from terrain_logic.terrain.lakes import carve_lakes, check_lake_fit, pick_lake_centers
from terrain_logic.terrain.noise_field import NoiseField


def _params(preset):
    table = {
        "grasslands": GenerationParameters(15.0, 10.0, 0.1),
        "desert": GenerationParameters(150.0, 25.0, 0.0),
        "mountainous": GenerationParameters(25.0, 50.0, 0.3),
        "lake": GenerationParameters(15.0, 20.0, 0.2, number_of_lakes=2, lake_radius=8),
        "canyons": GenerationParameters(20.0, 30.0, 0.05),
    }
    return table[preset]


class TestPresetSynthesis(unittest.TestCase):

    def test_every_preset_in_unit_range(self):
        """Finalized grids of every preset are float32 (W, H) inside [0, 1]."""
        print("\n[TEST] Running test_every_preset_in_unit_range...")
        for preset in ("grasslands", "desert", "mountainous", "lake", "canyons"):
            field = build_heightfield(preset, 40, 32, _params(preset), seed=1234)
            h = field.heights
            self.assertEqual(h.shape, (40, 32), preset)
            self.assertEqual(h.dtype, np.float32, preset)
            self.assertTrue(np.isfinite(h).all(), preset)
            self.assertGreaterEqual(float(h.min()), 0.0, preset)
            self.assertLessEqual(float(h.max()), 1.0, preset)
        print("[TEST] test_every_preset_in_unit_range PASSED.")

    def test_deterministic(self):
        for preset in ("grasslands", "lake", "canyons"):
            a = build_heightfield(preset, 24, 24, _params(preset), seed=77)
            b = build_heightfield(preset, 24, 24, _params(preset), seed=77)
            np.testing.assert_array_equal(a.heights, b.heights)
            self.assertEqual(a.lake_centers, b.lake_centers)

    def test_canyon_bounds(self):
        print("\n[TEST] Running test_canyon_bounds...")
        h = canyon_heights(64, 64, 20.0, 30.0, 5, NoiseField(5))
        self.assertGreaterEqual(float(h.min()), 0.0)
        self.assertLessEqual(float(h.max()), 0.9 + 1e-6)
        # the plateau never drops below 0.4 on its own, so lower texels are cuts
        self.assertLess(float(h.min()), 0.4)
        print("[TEST] test_canyon_bounds PASSED.")

    def test_canyon_plateau_untouched_outside_cuts(self):
        noise = NoiseField(5)
        h = canyon_heights(32, 32, 20.0, 30.0, 5, noise)

        coords = np.arange(32, dtype=np.float64) / 32
        terrain = noise.grid(coords * 20.0 + 5, coords * 20.0 + 5)
        canyon = noise.grid(coords * 80.0 + 5 + 1000.0, coords * 80.0 + 5 + 1000.0)
        plateau = canyon >= 0.4

        np.testing.assert_allclose(h[plateau], terrain[plateau] * 0.5 + 0.4, rtol=1e-6)
        self.assertTrue(np.all(h[~plateau] <= terrain[~plateau] * 0.5 + 0.4))

    def test_rolling_mountains_follow_grasslands(self):
        noise = NoiseField(9)
        np.testing.assert_array_equal(
            mountain_heights(16, 16, 25.0, 9, noise, style="rolling"),
            grasslands_heights(16, 16, 25.0, 9, noise),
        )
        with self.assertRaises(ValueError):
            mountain_heights(16, 16, 25.0, 9, noise, style="jagged")

    def test_unknown_preset(self):
        with self.assertRaises(ValueError):
            build_heightfield("tundra", 8, 8, GenerationParameters(), seed=0)


class TestLakes(unittest.TestCase):

    def test_center_factor_and_outside_untouched(self):
        """Center is scaled by 0.2, texels at distance >= R keep their height."""
        print("\n[TEST] Running test_center_factor_and_outside_untouched...")
        h = np.ones((21, 21), dtype=np.float32)
        carve_lakes(h, [(10, 10)], 5)

        self.assertAlmostEqual(float(h[10, 10]), 0.2, places=6)
        self.assertEqual(float(h[15, 10]), 1.0)
        self.assertEqual(float(h[0, 0]), 1.0)
        # d = 2 -> factor 3/5
        self.assertAlmostEqual(float(h[10, 12]), 1.0 - 0.8 * (3.0 / 5.0), places=6)
        print("[TEST] test_center_factor_and_outside_untouched PASSED.")

    def test_centers_inside_margin(self):
        centers = pick_lake_centers(64, 48, 20, 10, RNG(3))
        self.assertEqual(len(centers), 20)
        for cx, cz in centers:
            self.assertTrue(10 <= cx < 54)
            self.assertTrue(10 <= cz < 38)

    def test_lake_fit(self):
        with self.assertRaises(ValueError):
            check_lake_fit(128, 128, 1, 100)
        with self.assertRaises(ValueError):
            check_lake_fit(128, 128, 1, 0)
        with self.assertRaises(ValueError):
            check_lake_fit(128, 128, -1, 10)
        check_lake_fit(256, 256, 1, 100)
        check_lake_fit(8, 8, 0, 0)

    def test_lake_preset_reports_centers(self):
        field = build_heightfield("lake", 48, 48, _params("lake"), seed=21)
        self.assertEqual(len(field.lake_centers), 2)


if __name__ == "__main__":
    unittest.main()
