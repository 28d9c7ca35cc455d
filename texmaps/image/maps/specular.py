"""
Specular map generator.

This module provides a generator that turns the weighted color channels of an
image into a grayscale specular map. The same computation, with other
weights, produces displacement maps.
"""
import logging

import numpy as np

from ..core.base_types import CombineMode, MapParams
from ..core.image_utils import gray_to_rgba, to_float
from .base_generator import MapGenerator

logger = logging.getLogger(__name__)


def apply_contrast(values: np.ndarray, contrast: float) -> np.ndarray:
    """
    Apply a symmetric contrast curve around 0.5 and clamp to [0, 1].

    Args:
        values: Input values
        contrast: 0 leaves values unchanged, positive values increase contrast,
            -1 collapses everything to 0.5

    Returns:
        Adjusted values in [0, 1]
    """
    return np.clip(0.5 + (values - 0.5) * (1.0 + contrast), 0.0, 1.0)


class SpecularMapGenerator(MapGenerator):
    """Generator for specular maps."""

    def __init__(
        self,
        mode: CombineMode = CombineMode.AVERAGE,
        red: float = 1.0,
        green: float = 1.0,
        blue: float = 1.0,
        alpha: float = 0.0,
        **kwargs
    ):
        """
        Initialize with the channel multipliers.

        Args:
            mode: AVERAGE (mean of the four weighted channels) or MAX
            red: Red channel multiplier, 0 excludes the channel
            green: Green channel multiplier
            blue: Blue channel multiplier
            alpha: Alpha channel multiplier
            **kwargs: Default values for scale and contrast
        """
        self._mode = CombineMode(mode)
        self._multipliers = np.array([red, green, blue, alpha], dtype=np.float32)
        self._multipliers.setflags(write=False)
        defaults = dict(scale=1.0, contrast=0.0)
        defaults.update(kwargs)
        super().__init__(**defaults)

    @property
    def mode(self) -> CombineMode:
        return self._mode

    @property
    def multipliers(self) -> np.ndarray:
        return self._multipliers

    def calculate_specmap(self, image: np.ndarray, scale: float = 1.0, contrast: float = 0.0) -> np.ndarray:
        """
        Calculate a grayscale map from the weighted channels of an image.

        Args:
            image: Input image (RGBA, RGB or grayscale)
            scale: Linear gain applied after combining the channels
            contrast: Contrast adjustment around mid-gray

        Returns:
            Opaque grayscale RGBA uint8 map
        """
        rgba = self._prepare_image(image)
        weighted = to_float(rgba) * self._multipliers

        if self._mode == CombineMode.MAX:
            values = weighted.max(axis=2)
        else:
            values = weighted.mean(axis=2)

        values = apply_contrast(values * scale, contrast)

        logger.info(
            f"{type(self).__name__} calculated ({rgba.shape[1]}x{rgba.shape[0]}, "
            f"multipliers={self._multipliers.tolist()}, scale={scale}, contrast={contrast})"
        )
        return gray_to_rgba(values)

    def generate(self, image: np.ndarray, **kwargs) -> np.ndarray:
        """Generate the map using the construction defaults for scale and contrast."""
        params = self._get_params(**kwargs)
        return self.calculate_specmap(image, params['scale'], params['contrast'])

    def _validate_params(self, params: MapParams) -> MapParams:
        """Validate and adjust parameters."""
        params['scale'] = float(params.get('scale', 1.0))
        params['contrast'] = float(params.get('contrast', 0.0))
        return params
