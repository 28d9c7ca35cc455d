"""
Intensity Map Filtering Module

Smoothing filters applied to intensity maps. The box blur is separable: a
horizontal pass followed by a vertical pass, each averaging 2 * radius + 1
samples, so the cost grows linearly with the radius.
"""
import logging

import numpy as np

from .core.sampler import PixelSampler
from .intensity import IntensityMap

logger = logging.getLogger(__name__)


def box_blur(intensity_map: IntensityMap, radius: int, tileable: bool = False) -> IntensityMap:
    """
    Apply a separable box blur to an intensity map.

    Args:
        intensity_map: Map to smooth
        radius: Blur radius in pixels; 0 returns an identical copy
        tileable: Wrap around the borders instead of repeating edge pixels

    Returns:
        New IntensityMap with the input's dimensions

    Raises:
        ValueError: If radius is negative
    """
    radius = int(radius)
    if radius < 0:
        raise ValueError(f"Blur radius must be >= 0, got {radius}")
    if radius == 0:
        return IntensityMap(intensity_map.values)

    sampler = PixelSampler(tileable=tileable)
    values = intensity_map.values.astype(np.float64)
    values = sampler.box_filter1d(values, radius, axis=1)
    values = sampler.box_filter1d(values, radius, axis=0)

    logger.debug(f"Box blur radius={radius} tileable={tileable} on {intensity_map!r}")
    return IntensityMap(values)


class BoxBlur:
    """Box blur filter, see box_blur()."""

    @staticmethod
    def blur(intensity_map: IntensityMap, radius: int, tileable: bool = False) -> IntensityMap:
        return box_blur(intensity_map, radius, tileable)
