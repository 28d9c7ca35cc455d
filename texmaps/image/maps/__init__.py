"""
Map generators for image processing.

This module provides the generators that create specialized maps from an
input image: normal, specular, displacement and ambient occlusion maps.
"""
from .base_generator import MapGenerator
from .normal import NormalMapGenerator
from .specular import SpecularMapGenerator
from .displacement import DisplacementMapGenerator
from .ssao import SsaoGenerator

__all__ = [
    'MapGenerator',
    'NormalMapGenerator',
    'SpecularMapGenerator',
    'DisplacementMapGenerator',
    'SsaoGenerator'
]
