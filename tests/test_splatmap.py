# ==============================================================================
# File: tests/test_splatmap.py
# Purpose: unit tests for slope estimation and both painting policies.
# ==============================================================================
import unittest
import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from setting.config import LayerBinding
from terrain_logic.texturing.slope import slope_angle_deg
from terrain_logic.texturing.splatmap import paint_splatmap

BLEND = LayerBinding(base="grasslands", water="water")
HARD = LayerBinding(base="grasslands", water="water", cliff="cliff")


class TestBlendPainting(unittest.TestCase):

    def test_crossfade_around_water_level(self):
        print("\n[TEST] Running test_crossfade_around_water_level...")
        h = np.array([[0.0, 0.1, 0.5], [0.095, 0.105, 0.2]], dtype=np.float32)
        w = paint_splatmap(h, 0.1, BLEND, "blend")

        self.assertEqual(w.shape, (2, 3, 2))
        np.testing.assert_allclose(w.sum(axis=-1), 1.0, atol=1e-6)
        self.assertTrue(np.all(w >= 0.0) and np.all(w <= 1.0))

        self.assertAlmostEqual(float(w[0, 0, 1]), 1.0)   # deep water
        self.assertAlmostEqual(float(w[0, 2, 0]), 1.0)   # dry land
        self.assertAlmostEqual(float(w[0, 1, 0]), 0.5, places=4)
        self.assertAlmostEqual(float(w[1, 0, 0]), 0.25, places=4)
        self.assertAlmostEqual(float(w[1, 1, 0]), 0.75, places=4)
        print("[TEST] test_crossfade_around_water_level PASSED.")

    def test_cliff_channel_stays_empty(self):
        h = np.linspace(0.0, 1.0, 64, dtype=np.float32).reshape(8, 8)
        w = paint_splatmap(h, 0.2, HARD, "blend")
        self.assertEqual(w.shape, (8, 8, 3))
        self.assertEqual(float(w[..., 2].max()), 0.0)
        np.testing.assert_allclose(w.sum(axis=-1), 1.0, atol=1e-6)


class TestHardPainting(unittest.TestCase):

    def test_one_hot(self):
        rng = np.random.default_rng(1)
        h = rng.random((12, 10)).astype(np.float32)
        w = paint_splatmap(h, 0.3, HARD, "hard", depth=20.0)
        self.assertTrue(np.all((w == 0.0) | (w == 1.0)))
        np.testing.assert_array_equal(w.sum(axis=-1), 1.0)

    def test_water_base_and_cliff(self):
        """Steep dry ground -> cliff, flat dry ground -> base, low ground -> water."""
        print("\n[TEST] Running test_water_base_and_cliff...")
        ramp = np.repeat((np.arange(8, dtype=np.float32) / 8.0)[:, None], 8, axis=1)
        w = paint_splatmap(ramp, 0.0, HARD, "hard", depth=100.0, cell_size=1.0)
        self.assertTrue(np.all(w[0, :, 1] == 1.0))
        self.assertTrue(np.all(w[1:, :, 2] == 1.0))

        flat = np.full((8, 8), 0.5, dtype=np.float32)
        w = paint_splatmap(flat, 0.1, HARD, "hard", depth=100.0)
        self.assertTrue(np.all(w[..., 0] == 1.0))

        w = paint_splatmap(flat, 0.6, HARD, "hard", depth=100.0)
        self.assertTrue(np.all(w[..., 1] == 1.0))
        print("[TEST] test_water_base_and_cliff PASSED.")

    def test_without_cliff_binding(self):
        ramp = np.repeat((np.arange(8, dtype=np.float32) / 8.0)[:, None], 8, axis=1)
        w = paint_splatmap(ramp, 0.0, BLEND, "hard", depth=100.0)
        self.assertEqual(w.shape, (8, 8, 2))
        self.assertTrue(np.all(w[1:, :, 0] == 1.0))

    def test_host_slope_sampler(self):
        flat = np.full((6, 6), 0.5, dtype=np.float32)
        calls = []

        def steep(nx, ny):
            calls.append((nx, ny))
            return 45.0

        w = paint_splatmap(flat, 0.1, HARD, "hard", slope_sampler=steep)
        self.assertTrue(np.all(w[..., 2] == 1.0))
        self.assertEqual(len(calls), 36)
        self.assertTrue(all(0.0 <= nx < 1.0 and 0.0 <= ny < 1.0 for nx, ny in calls))

        w = paint_splatmap(flat, 0.1, HARD, "hard", slope_sampler=lambda nx, ny: 10.0)
        self.assertTrue(np.all(w[..., 0] == 1.0))


class TestResolutionAndErrors(unittest.TestCase):

    def test_nearest_index_mapping(self):
        print("\n[TEST] Running test_nearest_index_mapping...")
        h = np.zeros((8, 8), dtype=np.float32)
        h[1::2, :] = 1.0  # odd x indices are dry land

        w = paint_splatmap(h, 0.1, BLEND, "blend", resolution=(16, 4))
        self.assertEqual(w.shape, (16, 4, 2))
        # texel x reads heights[x * 8 // 16] = heights[x // 2]
        self.assertTrue(np.all(w[2, :, 0] == 1.0))
        self.assertTrue(np.all(w[1, :, 1] == 1.0))

        w = paint_splatmap(h, 0.1, BLEND, "blend", resolution=4)
        self.assertEqual(w.shape, (4, 4, 2))
        # texel x reads heights[2x], always an even x index
        self.assertTrue(np.all(w[..., 1] == 1.0))
        print("[TEST] test_nearest_index_mapping PASSED.")

    def test_errors(self):
        h = np.zeros((4, 4), dtype=np.float32)
        with self.assertRaises(ValueError):
            paint_splatmap(h, 0.1, BLEND, "dither")
        with self.assertRaises(ValueError):
            paint_splatmap(h, 0.1, LayerBinding(base="water", water="water"), "blend")
        with self.assertRaises(ValueError):
            paint_splatmap(h, 0.1, LayerBinding(base="", water="water"), "blend")
        with self.assertRaises(ValueError):
            paint_splatmap(h, 0.1, BLEND, "blend", resolution=0)


class TestSlope(unittest.TestCase):

    def test_flat_and_ramp(self):
        flat = np.full((5, 5), 0.3, dtype=np.float32)
        np.testing.assert_array_equal(slope_angle_deg(flat, 50.0), 0.0)

        ramp = np.repeat((np.arange(6, dtype=np.float32) * 0.01)[:, None], 6, axis=1)
        angle = slope_angle_deg(ramp, 100.0, cell_size=1.0)
        self.assertAlmostEqual(float(angle[2, 2]), 45.0, places=3)

        angle = slope_angle_deg(ramp, 100.0, cell_size=2.0)
        self.assertAlmostEqual(float(angle[2, 2]), float(np.degrees(np.arctan(0.5))), places=3)


if __name__ == "__main__":
    unittest.main()
