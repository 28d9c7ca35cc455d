"""
texmaps Package.

A package for generating the auxiliary texture maps used in real-time
rendering (normal, specular, displacement and ambient occlusion maps) from a
single image.
"""

__version__ = "0.1.0"

from texmaps.exceptions import TexMapsException

from texmaps.image import (
    ChannelSelection,
    CombineMode,
    Kernel,
    PixelSampler,
    IntensityMap,
    BoxBlur,
    box_blur,
    NormalMapGenerator,
    SpecularMapGenerator,
    DisplacementMapGenerator,
    SsaoGenerator,
    InvalidInputError,
    DimensionMismatchError,
    ImageIOError,
    MapGenerationError,
    load_image,
    save_image
)
from texmaps.config import ProcessorSettings
from texmaps.processor import MapProcessor, MapSet
from texmaps.batch import BatchQueue
