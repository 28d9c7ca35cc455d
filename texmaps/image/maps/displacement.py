"""
Displacement map generator.

This module provides a generator for creating displacement maps from images,
which are used for actual geometric displacement in 3D rendering. The
computation is the specular one with the alpha channel ignored, optionally
followed by a box blur that removes high-frequency noise.
"""
import logging

import numpy as np

from ..core.base_types import CombineMode, MapParams
from ..filters import box_blur
from ..intensity import IntensityMap
from .specular import SpecularMapGenerator

logger = logging.getLogger(__name__)

class DisplacementMapGenerator(SpecularMapGenerator):
    """Generator for Displacement maps."""

    def __init__(
        self,
        mode: CombineMode = CombineMode.AVERAGE,
        red: float = 1.0,
        green: float = 1.0,
        blue: float = 1.0,
        **kwargs
    ):
        """
        Initialize the displacement map generator.

        Args:
            mode: How the weighted channels are combined
            red: Red channel multiplier
            green: Green channel multiplier
            blue: Blue channel multiplier
            **kwargs: Default values for scale, contrast, blur_radius and blur_tileable
        """
        defaults = dict(blur_radius=0, blur_tileable=True)
        defaults.update(kwargs)
        super().__init__(mode, red, green, blue, 0.0, **defaults)

    def calculate_displacementmap(
        self,
        image: np.ndarray,
        scale: float = 1.0,
        contrast: float = 0.0,
        blur_radius: int = 0,
        blur_tileable: bool = True
    ) -> np.ndarray:
        """
        Calculate a displacement map.

        Args:
            image: Input image
            scale: Linear gain
            contrast: Contrast adjustment around mid-gray
            blur_radius: Box blur radius applied afterwards, 0 disables the blur
            blur_tileable: Wrap the blur around the image borders

        Returns:
            Opaque grayscale RGBA uint8 map
        """
        displacement = self.calculate_specmap(image, scale, contrast)
        if blur_radius > 0:
            intensity = IntensityMap.build(displacement, CombineMode.AVERAGE)
            displacement = box_blur(intensity, blur_radius, blur_tileable).to_image()
        return displacement

    def generate(self, image: np.ndarray, **kwargs) -> np.ndarray:
        params = self._get_params(**kwargs)
        return self.calculate_displacementmap(image, **params)

    def _validate_params(self, params: MapParams) -> MapParams:
        """Validate and adjust parameters."""
        params = super()._validate_params(params)
        params['blur_radius'] = int(params.get('blur_radius', 0))
        if params['blur_radius'] < 0:
            raise ValueError(f"blur_radius must be >= 0, got {params['blur_radius']}")
        params['blur_tileable'] = bool(params.get('blur_tileable', True))
        return params
