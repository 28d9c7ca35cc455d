"""
Unit tests for the box blur filter.
"""
import unittest

import numpy as np

from texmaps.image.filters import BoxBlur, box_blur
from texmaps.image.intensity import IntensityMap


class TestBoxBlur(unittest.TestCase):
    """Test the separable box blur."""

    def setUp(self):
        rng = np.random.default_rng(7)
        self.noise = IntensityMap(rng.random((12, 16)))

    def test_radius_zero_is_identity(self):
        for tileable in (True, False):
            blurred = box_blur(self.noise, 0, tileable)
            np.testing.assert_array_equal(blurred.values, self.noise.values)

    def test_uniform_map_stays_uniform(self):
        uniform = IntensityMap(np.full((9, 7), 0.3))
        for tileable in (True, False):
            for radius in (1, 3, 10):
                blurred = box_blur(uniform, radius, tileable)
                np.testing.assert_allclose(blurred.values, 0.3, atol=1e-6)

    def test_dimensions_preserved(self):
        blurred = box_blur(self.noise, 2)
        self.assertEqual(blurred.shape, self.noise.shape)

    def test_negative_radius(self):
        with self.assertRaises(ValueError):
            box_blur(self.noise, -1)

    def test_matches_window_mean(self):
        radius = 2
        values = self.noise.values.astype(np.float64)
        padded = np.pad(values, radius, mode='edge')
        size = 2 * radius + 1
        expected = np.zeros_like(values)
        for row in range(values.shape[0]):
            for col in range(values.shape[1]):
                expected[row, col] = padded[row:row + size, col:col + size].mean()

        blurred = box_blur(self.noise, radius, tileable=False)
        np.testing.assert_allclose(blurred.values, expected, atol=1e-5)

    def test_border_policy(self):
        values = np.zeros((4, 8))
        values[:, 0] = 1.0
        stripe = IntensityMap(values)

        wrapped = box_blur(stripe, 1, tileable=True)
        clamped = box_blur(stripe, 1, tileable=False)

        np.testing.assert_allclose(wrapped.values[:, -1], 1 / 3.0, atol=1e-6)
        np.testing.assert_allclose(clamped.values[:, -1], 0.0, atol=1e-6)
        np.testing.assert_allclose(clamped.values[:, 0], 2 / 3.0, atol=1e-6)

    def test_smooths_noise(self):
        blurred = box_blur(self.noise, 2)
        self.assertLess(blurred.values.std(), self.noise.values.std())

    def test_class_interface(self):
        self.assertEqual(BoxBlur.blur(self.noise, 1, True), box_blur(self.noise, 1, True))


if __name__ == '__main__':
    unittest.main()
