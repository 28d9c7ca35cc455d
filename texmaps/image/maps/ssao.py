"""
Screen-space style ambient occlusion generator.

There is no real depth buffer: the raw intensity that fed the normal map acts
as the height of each pixel and the normal map orients a hemisphere of sample
vectors. A sample counts as occluded when the height found under it is above
the height the sample point itself sits at.
"""
import logging
from typing import Union

import numpy as np

from ..core.base_types import CombineMode, MapParams
from ..core.exceptions import DimensionMismatchError
from ..core.image_utils import decode_normals, gray_to_rgba
from ..core.sampler import PixelSampler
from ..intensity import IntensityMap
from .base_generator import MapGenerator

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0
# Height difference below which a sample never occludes; keeps flat areas white
OCCLUSION_BIAS = 0.025


def build_sample_kernel(samples: int, rng: np.random.Generator) -> np.ndarray:
    """
    Create sample vectors inside the +z unit hemisphere.

    Lengths are scaled so that more samples lie close to the origin.

    Args:
        samples: Number of vectors
        rng: Random generator

    Returns:
        (samples, 3) array
    """
    vectors = rng.uniform(-1.0, 1.0, size=(samples, 3))
    vectors[:, 2] = rng.uniform(0.0, 1.0, size=samples)
    norm = np.linalg.norm(vectors, axis=1, keepdims=True)
    vectors = vectors / np.maximum(norm, 1e-10)
    vectors *= rng.uniform(0.0, 1.0, size=(samples, 1))

    falloff = (np.arange(samples, dtype=np.float64) / samples) ** 2
    vectors *= (0.1 + 0.9 * falloff)[:, np.newaxis]
    return vectors


def build_noise_texture(size: int, rng: np.random.Generator) -> np.ndarray:
    """
    Create a size x size tile of random rotation vectors in the xy plane.

    Returns:
        (size, size, 3) array with z = 0
    """
    noise = rng.uniform(-1.0, 1.0, size=(size, size, 3))
    noise[..., 2] = 0.0
    return noise


def smoothstep(edge0: float, edge1: float, x: np.ndarray) -> np.ndarray:
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


class SsaoGenerator(MapGenerator):
    """Generator for ambient occlusion maps."""

    def __init__(self, **kwargs):
        """
        Initialize with AO parameters.

        Args:
            **kwargs: Default values for size, samples, noise_tex_size and seed
        """
        defaults = dict(size=0.1, samples=16, noise_tex_size=4, seed=DEFAULT_SEED)
        defaults.update(kwargs)
        super().__init__(**defaults)

    def calculate_ssaomap(
        self,
        normal_map: np.ndarray,
        raw_intensity: Union[IntensityMap, np.ndarray],
        size: float = 0.1,
        samples: int = 16,
        noise_tex_size: int = 4,
        seed: int = DEFAULT_SEED
    ) -> np.ndarray:
        """
        Calculate an ambient occlusion map.

        Args:
            normal_map: RGB(A) normal map
            raw_intensity: Height field with the normal map's dimensions,
                as an IntensityMap or a grayscale image
            size: Sample radius as a fraction of the image size; 0 gives a white map
            samples: Number of hemisphere samples per pixel; 0 gives a white map
            noise_tex_size: Edge length of the tiled rotation noise
            seed: Seed for the sample kernel and the noise

        Returns:
            Opaque grayscale RGBA uint8 map, white where unoccluded

        Raises:
            InvalidInputError: If an input is missing or empty
            DimensionMismatchError: If the two inputs differ in size
        """
        normal_rgba = self._prepare_image(normal_map)
        if not isinstance(raw_intensity, IntensityMap):
            raw_intensity = IntensityMap.build(raw_intensity, CombineMode.AVERAGE)

        height, width = normal_rgba.shape[:2]
        if raw_intensity.shape != (height, width):
            raise DimensionMismatchError(
                f"Raw intensity is {raw_intensity.width}x{raw_intensity.height} but the "
                f"normal map is {width}x{height}; resample it before calculating the AO map"
            )

        samples = int(samples)
        if size == 0 or samples <= 0:
            logger.info("Ambient occlusion skipped (size or samples is 0), map is fully lit")
            return gray_to_rgba(np.ones((height, width), dtype=np.float32))

        noise_tex_size = max(1, int(noise_tex_size))
        rng = np.random.default_rng(seed)
        kernel = build_sample_kernel(samples, rng)
        noise = build_noise_texture(noise_tex_size, rng)

        heights = raw_intensity.values.astype(np.float64)
        normals = decode_normals(normal_rgba).astype(np.float64)
        rows, cols = np.indices((height, width))

        tangent, bitangent = self._tangent_frame(normals, noise[rows % noise_tex_size, cols % noise_tex_size])

        sampler = PixelSampler(tileable=False)
        occlusion = np.zeros((height, width), dtype=np.float64)
        for kx, ky, kz in kernel:
            offset = (tangent * kx + bitangent * ky + normals * kz) * size
            sample_rows = np.rint(rows + offset[..., 1] * height)
            sample_cols = np.rint(cols + offset[..., 0] * width)

            actual = sampler.sample(heights, sample_rows, sample_cols)
            expected = heights + offset[..., 2]

            range_check = smoothstep(0.0, 1.0, abs(size) / np.maximum(np.abs(heights - actual), 1e-10))
            occlusion += (actual > expected + OCCLUSION_BIAS) * range_check

        ao = 1.0 - occlusion / samples
        logger.info(f"Ambient occlusion map calculated ({width}x{height}, size={size}, samples={samples})")
        return gray_to_rgba(ao)

    def generate(self, image: np.ndarray, **kwargs) -> np.ndarray:
        """
        Generate an AO map from a normal map.

        Args:
            image: Normal map
            **kwargs: Must contain raw_intensity; may override the defaults

        Returns:
            Opaque grayscale RGBA uint8 map
        """
        raw_intensity = kwargs.pop('raw_intensity')
        params = self._get_params(**kwargs)
        return self.calculate_ssaomap(image, raw_intensity, **params)

    @staticmethod
    def _tangent_frame(normals: np.ndarray, rotation: np.ndarray):
        """Gram-Schmidt a tangent out of the noise vector, then complete the basis."""
        tangent = rotation - normals * np.sum(rotation * normals, axis=-1, keepdims=True)
        length = np.linalg.norm(tangent, axis=-1, keepdims=True)

        # Noise parallel to the normal: fall back to a fixed axis
        axis = np.zeros_like(normals)
        use_x = np.abs(normals[..., 0]) < 0.9
        axis[..., 0] = use_x
        axis[..., 1] = ~use_x
        fallback = axis - normals * np.sum(axis * normals, axis=-1, keepdims=True)
        fallback /= np.linalg.norm(fallback, axis=-1, keepdims=True)

        tangent = np.where(length > 1e-6, tangent / np.maximum(length, 1e-6), fallback)
        bitangent = np.cross(normals, tangent)
        return tangent, bitangent

    def _validate_params(self, params: MapParams) -> MapParams:
        """Validate and adjust parameters."""
        params['size'] = float(params.get('size', 0.1))
        params['samples'] = int(params.get('samples', 16))
        params['noise_tex_size'] = int(params.get('noise_tex_size', 4))
        params['seed'] = int(params.get('seed', DEFAULT_SEED))
        return params
