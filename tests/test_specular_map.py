"""
Unit tests for the specular and displacement map generators.
"""
import unittest

import numpy as np

from texmaps.image.core.base_types import CombineMode
from texmaps.image.core.exceptions import InvalidInputError
from texmaps.image.maps.displacement import DisplacementMapGenerator
from texmaps.image.maps.specular import SpecularMapGenerator, apply_contrast

from tests.resources import create_sample_image, solid_color


class TestApplyContrast(unittest.TestCase):

    def test_zero_contrast_is_identity(self):
        values = np.linspace(0, 1, 11)
        np.testing.assert_allclose(apply_contrast(values, 0.0), values)

    def test_minus_one_collapses_to_mid_gray(self):
        np.testing.assert_allclose(apply_contrast(np.array([0.0, 0.3, 1.0]), -1.0), 0.5)

    def test_clamps(self):
        np.testing.assert_allclose(apply_contrast(np.array([0.0, 1.0]), 2.0), [0.0, 1.0])


class TestSpecularMapGenerator(unittest.TestCase):
    """Test specular map generation."""

    def test_average_of_four_weighted_channels(self):
        image = solid_color((3, 3), (204, 102, 51, 0))
        spec = SpecularMapGenerator().calculate_specmap(image)
        self.assertTrue(np.all(spec[..., :3] == 89))
        self.assertTrue(np.all(spec[..., 3] == 255))

    def test_max_mode(self):
        image = solid_color((3, 3), (204, 102, 51, 0))
        spec = SpecularMapGenerator(CombineMode.MAX).calculate_specmap(image)
        self.assertTrue(np.all(spec[..., 0] == 204))

    def test_multipliers(self):
        image = solid_color((2, 2), (204, 102, 51, 255))
        only_alpha = SpecularMapGenerator(CombineMode.MAX, 0, 0, 0, 1).calculate_specmap(image)
        self.assertTrue(np.all(only_alpha[..., 0] == 255))
        nothing = SpecularMapGenerator(CombineMode.MAX, 0, 0, 0, 0).calculate_specmap(image)
        self.assertTrue(np.all(nothing[..., :3] == 0))

    def test_scale_zero_is_uniform(self):
        image = create_sample_image((16, 16), "random")
        for contrast in (-1.0, 0.0, 0.7):
            spec = SpecularMapGenerator().calculate_specmap(image, scale=0.0, contrast=contrast)
            self.assertEqual(len(np.unique(spec[..., :3])), 1)
        collapsed = SpecularMapGenerator().calculate_specmap(image, scale=0.0, contrast=-1.0)
        self.assertTrue(np.all(collapsed[..., :3] == 128))

    def test_scale_and_contrast(self):
        generator = SpecularMapGenerator(CombineMode.MAX)
        self.assertTrue(np.all(generator.calculate_specmap(solid_color((2, 2), (102, 0, 0, 0)), scale=2.0)[..., 0] == 204))
        self.assertTrue(np.all(generator.calculate_specmap(solid_color((2, 2), (204, 0, 0, 0)), contrast=1.0)[..., 0] == 255))
        self.assertTrue(np.all(generator.calculate_specmap(solid_color((2, 2), (153, 0, 0, 0)), contrast=0.5)[..., 0] == 166))

    def test_output_is_gray(self):
        spec = SpecularMapGenerator().calculate_specmap(create_sample_image((8, 8), "random"))
        np.testing.assert_array_equal(spec[..., 0], spec[..., 1])
        np.testing.assert_array_equal(spec[..., 0], spec[..., 2])

    def test_generate_uses_defaults(self):
        image = create_sample_image((8, 8), "random")
        generator = SpecularMapGenerator(scale=0.5, contrast=0.2)
        np.testing.assert_array_equal(generator.generate(image), generator.calculate_specmap(image, 0.5, 0.2))

    def test_multipliers_read_only(self):
        generator = SpecularMapGenerator(red=0.5)
        np.testing.assert_allclose(generator.multipliers, [0.5, 1.0, 1.0, 0.0])
        with self.assertRaises(ValueError):
            generator.multipliers[0] = 2.0

    def test_invalid_input(self):
        with self.assertRaises(InvalidInputError):
            SpecularMapGenerator().calculate_specmap(None)


class TestDisplacementMapGenerator(unittest.TestCase):
    """Test displacement map generation."""

    def test_alpha_ignored(self):
        generator = DisplacementMapGenerator(CombineMode.MAX)
        self.assertEqual(float(generator.multipliers[3]), 0.0)
        opaque = generator.calculate_displacementmap(solid_color((2, 2), (10, 20, 30, 255)))
        clear = generator.calculate_displacementmap(solid_color((2, 2), (10, 20, 30, 0)))
        np.testing.assert_array_equal(opaque, clear)
        self.assertTrue(np.all(opaque[..., 0] == 30))

    def test_without_blur_matches_specular(self):
        image = create_sample_image((8, 8), "random")
        displacement = DisplacementMapGenerator(red=0.5).calculate_displacementmap(image, 1.5, 0.2)
        specular = SpecularMapGenerator(red=0.5, alpha=0.0).calculate_specmap(image, 1.5, 0.2)
        np.testing.assert_array_equal(displacement, specular)

    def test_blur_uniform_stays_uniform(self):
        image = create_sample_image((8, 8), "gray", value=80)
        plain = DisplacementMapGenerator().calculate_displacementmap(image)
        blurred = DisplacementMapGenerator().calculate_displacementmap(image, blur_radius=3)
        np.testing.assert_array_equal(plain, blurred)

    def test_blur_smooths(self):
        image = create_sample_image((16, 16), "checker")
        generator = DisplacementMapGenerator()
        plain = generator.calculate_displacementmap(image)
        blurred = generator.calculate_displacementmap(image, blur_radius=1)
        self.assertEqual(blurred.shape, plain.shape)
        self.assertLess(blurred[..., 0].astype(float).std(), plain[..., 0].astype(float).std())

    def test_negative_blur_radius(self):
        with self.assertRaises(ValueError):
            DisplacementMapGenerator().generate(create_sample_image((4, 4)), blur_radius=-1)


if __name__ == '__main__':
    unittest.main()
