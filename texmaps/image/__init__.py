"""
texmaps Image Package

This module provides the map generation layer:
  - Core types: ChannelSelection, CombineMode, Kernel, PixelSampler
  - IntensityMap and the BoxBlur filter
  - Generators for normal, specular, displacement and ambient occlusion maps
  - Image I/O helpers built on Pillow
"""

from .core.base_types import ChannelSelection, CombineMode, Kernel
from .core.sampler import PixelSampler
from .core.exceptions import (
    ImageException,
    InvalidInputError,
    DimensionMismatchError,
    ImageIOError,
    MapGenerationError
)
from .intensity import IntensityMap
from .filters import BoxBlur, box_blur
from .maps import (
    MapGenerator,
    NormalMapGenerator,
    SpecularMapGenerator,
    DisplacementMapGenerator,
    SsaoGenerator
)
from .io import load_image, save_image, output_paths, SUPPORTED_FORMATS

MAP_TYPES = ('normal', 'spec', 'displace', 'ssao')

def get_available_map_types():
    """
    Get the names of the maps that can be generated.

    Returns:
        Tuple of map type names
    """
    return MAP_TYPES

__all__ = [
    'ChannelSelection',
    'CombineMode',
    'Kernel',
    'PixelSampler',
    'ImageException',
    'InvalidInputError',
    'DimensionMismatchError',
    'ImageIOError',
    'MapGenerationError',
    'IntensityMap',
    'BoxBlur',
    'box_blur',
    'MapGenerator',
    'NormalMapGenerator',
    'SpecularMapGenerator',
    'DisplacementMapGenerator',
    'SsaoGenerator',
    'load_image',
    'save_image',
    'output_paths',
    'SUPPORTED_FORMATS',
    'MAP_TYPES',
    'get_available_map_types'
]
