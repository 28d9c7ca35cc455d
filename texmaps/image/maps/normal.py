"""Normal map generator."""
import logging
from typing import Optional, Tuple

import numpy as np

from ..core.base_types import ChannelSelection, CombineMode, Kernel, MapParams
from ..core.image_utils import (
    calc_percentage,
    encode_normals,
    normalize_vectors,
    resize_image,
)
from ..core.sampler import PixelSampler
from ..intensity import IntensityMap
from .base_generator import MapGenerator

logger = logging.getLogger(__name__)

# Horizontal stencils; the vertical ones are their transposes
SOBEL_X = np.array([[-1.0, 0.0, 1.0],
                    [-2.0, 0.0, 2.0],
                    [-1.0, 0.0, 1.0]])
PREWITT_X = np.array([[-1.0, 0.0, 1.0],
                      [-1.0, 0.0, 1.0],
                      [-1.0, 0.0, 1.0]])

_STENCILS = {
    Kernel.SOBEL: SOBEL_X,
    Kernel.PREWITT: PREWITT_X,
}


class NormalMapGenerator(MapGenerator):
    """
    Generator for tangent-space normal maps.

    The height field is the intensity of the image's selected channels. Its
    gradient, estimated with a Sobel or Prewitt stencil, tilts the normal of
    every pixel away from the straight-out direction (0, 0, 1).
    """

    def __init__(
        self,
        mode: CombineMode = CombineMode.AVERAGE,
        channels: Optional[ChannelSelection] = None,
        **kwargs
    ):
        """
        Initialize with the channel settings used to build the height field.

        Args:
            mode: How the selected channels are combined
            channels: Channels forming the height field (default RGB)
            **kwargs: Default values for calculate_normalmap() parameters
        """
        self._mode = CombineMode(mode)
        self._channels = channels if channels is not None else ChannelSelection()
        defaults = dict(
            kernel=Kernel.SOBEL,
            strength=2.0,
            invert=False,
            tileable=True,
            keep_large_detail=False,
            large_detail_scale=25,
            large_detail_height=1.0,
        )
        defaults.update(kwargs)
        super().__init__(**defaults)

    @property
    def mode(self) -> CombineMode:
        return self._mode

    @property
    def channels(self) -> ChannelSelection:
        return self._channels

    def calculate_normalmap(
        self,
        image: np.ndarray,
        kernel: Kernel = Kernel.SOBEL,
        strength: float = 2.0,
        invert: bool = False,
        tileable: bool = True,
        keep_large_detail: bool = False,
        large_detail_scale: int = 25,
        large_detail_height: float = 1.0
    ) -> Tuple[np.ndarray, IntensityMap]:
        """
        Calculate a normal map from an image.

        Args:
            image: Input image (RGBA, RGB or grayscale)
            kernel: Gradient stencil, SOBEL or PREWITT
            strength: Slope multiplier; 0 gives a flat map, negative values are allowed
            invert: Flip the y component to swap apparent bumps and dents
            tileable: Wrap the stencil around the image borders
            keep_large_detail: Blend in normals computed from a downscaled copy
            large_detail_scale: Size of the downscaled copy in percent (1-100)
            large_detail_height: Weight of the large detail normals in the blend

        Returns:
            Tuple of (RGBA uint8 normal map, height field used to compute it)

        Raises:
            InvalidInputError: If the image is missing or empty
            ValueError: If large_detail_scale is outside (0, 100] while
                keep_large_detail is set
        """
        rgba = self._prepare_image(image)
        kernel = Kernel(kernel)
        height_field = IntensityMap.build(rgba, self._mode, self._channels)

        normals = self._compute_normals(height_field, kernel, strength, invert, tileable)

        if keep_large_detail:
            normals = self._blend_large_detail(
                rgba, normals, kernel, strength, invert, tileable,
                large_detail_scale, large_detail_height
            )

        logger.info(
            f"Normal map calculated ({height_field.width}x{height_field.height}, "
            f"kernel={kernel.value}, strength={strength}, large_detail={keep_large_detail})"
        )
        return encode_normals(normals), height_field

    def generate(self, image: np.ndarray, **kwargs) -> np.ndarray:
        """
        Generate a normal map using the construction defaults.

        Args:
            image: Input image
            **kwargs: Overrides for any calculate_normalmap() parameter

        Returns:
            RGBA uint8 normal map
        """
        params = self._get_params(**kwargs)
        normal_map, _ = self.calculate_normalmap(image, **params)
        return normal_map

    def _compute_normals(
        self,
        height_field: IntensityMap,
        kernel: Kernel,
        strength: float,
        invert: bool,
        tileable: bool
    ) -> np.ndarray:
        sampler = PixelSampler(tileable=tileable)
        values = height_field.values.astype(np.float64)
        stencil = _STENCILS[kernel]

        dx = sampler.correlate(values, stencil)
        dy = sampler.correlate(values, stencil.T)

        normals = np.empty(values.shape + (3,), dtype=np.float64)
        normals[..., 0] = -dx * strength
        normals[..., 1] = -dy * strength
        if invert:
            normals[..., 1] *= -1.0
        normals[..., 2] = 1.0
        return normalize_vectors(normals)

    def _blend_large_detail(
        self,
        rgba: np.ndarray,
        normals: np.ndarray,
        kernel: Kernel,
        strength: float,
        invert: bool,
        tileable: bool,
        scale: int,
        weight: float
    ) -> np.ndarray:
        """
        Mix in the normals of a downscaled copy of the image.

        The smaller the copy, the broader the structures its gradients pick up.
        The coarse normals are upsampled back and added to the fine ones with
        the given weight before renormalizing.
        """
        if not 0 < scale <= 100:
            raise ValueError(f"large_detail_scale must be in (0, 100], got {scale}")

        height, width = rgba.shape[:2]
        small_width = max(1, calc_percentage(width, scale))
        small_height = max(1, calc_percentage(height, scale))
        logger.debug(f"Large detail pass at {small_width}x{small_height} ({scale}%), weight={weight}")

        small = resize_image(rgba, small_width, small_height, interpolation='area')
        coarse_field = IntensityMap.build(small, self._mode, self._channels)
        coarse = self._compute_normals(coarse_field, kernel, strength, invert, tileable)
        coarse = resize_image(coarse, width, height, interpolation='linear')

        return normalize_vectors(normals + weight * coarse)

    def _validate_params(self, params: MapParams) -> MapParams:
        """Validate and adjust parameters."""
        params['kernel'] = Kernel(params.get('kernel', Kernel.SOBEL))
        params['strength'] = float(params.get('strength', 2.0))
        if params['strength'] <= 0:
            logger.debug(f"Non-positive strength {params['strength']} flattens the normal map")
        params['invert'] = bool(params.get('invert', False))
        params['tileable'] = bool(params.get('tileable', True))
        params['keep_large_detail'] = bool(params.get('keep_large_detail', False))
        params['large_detail_scale'] = int(params.get('large_detail_scale', 25))
        params['large_detail_height'] = float(params.get('large_detail_height', 1.0))
        return params
