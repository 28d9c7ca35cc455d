"""
Unit tests for the IntensityMap.
"""
import unittest

import numpy as np

from texmaps.image.core.base_types import ChannelSelection, CombineMode
from texmaps.image.core.exceptions import InvalidInputError
from texmaps.image.intensity import IntensityMap

from tests.resources import create_sample_image, solid_color


class TestIntensityMapBuild(unittest.TestCase):
    """Test building intensity maps from images."""

    def test_values_in_unit_range(self):
        image = create_sample_image((20, 30), "random")
        for mode in CombineMode:
            values = IntensityMap.build(image, mode, ChannelSelection.all()).values
            self.assertGreaterEqual(values.min(), 0.0)
            self.assertLessEqual(values.max(), 1.0)

    def test_dimensions_match_image(self):
        image = create_sample_image((20, 30), "random")
        intensity = IntensityMap.build(image)
        self.assertEqual(intensity.width, 30)
        self.assertEqual(intensity.height, 20)
        self.assertEqual(intensity.shape, (20, 30))

    def test_no_channels_gives_zeros(self):
        image = create_sample_image((8, 8), "random")
        intensity = IntensityMap.build(image, channels=ChannelSelection.none())
        self.assertTrue(np.all(intensity.values == 0.0))

    def test_modes_agree_on_equal_channels(self):
        image = solid_color((4, 4), (77, 77, 77, 10))
        average = IntensityMap.build(image, CombineMode.AVERAGE)
        maximum = IntensityMap.build(image, CombineMode.MAX)
        np.testing.assert_allclose(average.values, maximum.values)
        self.assertAlmostEqual(average.at(0, 0), 77 / 255.0, places=5)

    def test_average_and_max(self):
        image = solid_color((2, 2), (255, 0, 0, 255))
        self.assertAlmostEqual(IntensityMap.build(image, CombineMode.AVERAGE).at(1, 1), 1 / 3.0, places=5)
        self.assertAlmostEqual(IntensityMap.build(image, CombineMode.MAX).at(1, 1), 1.0, places=5)

    def test_alpha_only(self):
        image = solid_color((2, 2), (255, 255, 255, 51))
        intensity = IntensityMap.build(image, channels=ChannelSelection.parse("a"))
        self.assertAlmostEqual(intensity.at(0, 0), 0.2, places=5)

    def test_default_selection_ignores_alpha(self):
        image = solid_color((2, 2), (100, 100, 100, 0))
        self.assertAlmostEqual(IntensityMap.build(image).at(0, 0), 100 / 255.0, places=5)

    def test_grayscale_input(self):
        gray = np.full((5, 6), 128, dtype=np.uint8)
        intensity = IntensityMap.build(gray)
        self.assertEqual(intensity.shape, (5, 6))
        self.assertAlmostEqual(intensity.at(2, 2), 0.502, places=3)

    def test_mid_gray_scenario(self):
        image = create_sample_image((4, 4), "gray", value=128)
        intensity = IntensityMap.build(image, CombineMode.AVERAGE, ChannelSelection())
        self.assertTrue(np.allclose(intensity.values, 128 / 255.0))
        self.assertAlmostEqual(intensity.at(3, 3), 0.502, places=3)

    def test_invalid_images(self):
        with self.assertRaises(InvalidInputError):
            IntensityMap.build(None)
        with self.assertRaises(InvalidInputError):
            IntensityMap.build(np.zeros((0, 0, 4), dtype=np.uint8))
        with self.assertRaises(InvalidInputError):
            IntensityMap.build(np.zeros((4, 4, 5), dtype=np.uint8))


class TestIntensityMapBehavior(unittest.TestCase):
    """Test the value semantics of IntensityMap."""

    def test_values_are_read_only(self):
        intensity = IntensityMap(np.full((3, 3), 0.5))
        with self.assertRaises(ValueError):
            intensity.values[0, 0] = 1.0

    def test_constructor_clamps_and_copies(self):
        source = np.array([[-1.0, 0.5], [2.0, 0.25]])
        intensity = IntensityMap(source)
        source[0, 1] = 0.0
        np.testing.assert_allclose(intensity.values, [[0.0, 0.5], [1.0, 0.25]])

    def test_constructor_rejects_bad_shapes(self):
        with self.assertRaises(InvalidInputError):
            IntensityMap(np.zeros(5))
        with self.assertRaises(InvalidInputError):
            IntensityMap(np.zeros((0, 3)))

    def test_round_trip_through_image(self):
        image = create_sample_image((12, 10), "random")
        intensity = IntensityMap.build(image)
        rebuilt = IntensityMap.build(intensity.to_image())
        np.testing.assert_allclose(rebuilt.values, intensity.values, atol=0.5 / 255 + 1e-6)

    def test_to_image_is_opaque_gray(self):
        image = IntensityMap(np.full((2, 3), 0.25)).to_image()
        self.assertEqual(image.shape, (2, 3, 4))
        self.assertEqual(image.dtype, np.uint8)
        self.assertTrue(np.all(image[..., 3] == 255))
        self.assertTrue(np.all(image[..., 0] == image[..., 2]))

    def test_inverted(self):
        intensity = IntensityMap(np.array([[0.0, 0.25]]))
        np.testing.assert_allclose(intensity.inverted().values, [[1.0, 0.75]])

    def test_resized(self):
        intensity = IntensityMap(np.full((8, 8), 0.4))
        smaller = intensity.resized(4, 2)
        self.assertEqual(smaller.shape, (2, 4))
        np.testing.assert_allclose(smaller.values, 0.4, atol=1e-5)
        self.assertIs(intensity.resized(8, 8), intensity)

    def test_equality(self):
        a = IntensityMap(np.full((2, 2), 0.5))
        b = IntensityMap.from_array(np.full((2, 2), 0.5))
        self.assertEqual(a, b)
        self.assertNotEqual(a, IntensityMap(np.full((2, 2), 0.25)))
        self.assertNotEqual(a, IntensityMap(np.full((1, 2), 0.5)))
        self.assertEqual(repr(a), "IntensityMap(2x2)")


if __name__ == '__main__':
    unittest.main()
