"""
Map processor module

This module serves as the main entry point for turning one image into its
set of maps. It wires the generators together: the normal map's height field
is resampled and handed to the ambient occlusion generator, the displacement
map is blurred when requested, and every calculation is timed.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple

import numpy as np

from .config import ProcessorSettings
from .image import MAP_TYPES
from .image.core.base_types import ChannelSelection, CombineMode
from .image.core.exceptions import MapGenerationError
from .image.core.image_utils import ensure_rgba, scale_to_percent
from .image.intensity import IntensityMap
from .image.maps import (
    DisplacementMapGenerator,
    NormalMapGenerator,
    SpecularMapGenerator,
    SsaoGenerator,
)

logger = logging.getLogger(__name__)

MAP_LABELS = {
    'normal': 'normalmap',
    'spec': 'specularmap',
    'displace': 'displacementmap',
    'ssao': 'ambient occlusion map',
}


def elapsed_time_message(calc_time_ms: int, map_type: str) -> str:
    """Format a calculation time, e.g. "calculated normalmap (1.542 seconds)"."""
    return f"calculated {MAP_LABELS.get(map_type, map_type)} ({calc_time_ms / 1000.0:g} seconds)"


@dataclass
class MapSet:
    """Maps generated for one image."""
    normal: Optional[np.ndarray] = None
    raw_intensity: Optional[IntensityMap] = None
    spec: Optional[np.ndarray] = None
    displace: Optional[np.ndarray] = None
    ssao: Optional[np.ndarray] = None
    timings_ms: Dict[str, int] = field(default_factory=dict)

    def items(self) -> Iterator[Tuple[str, np.ndarray]]:
        """Yield (map type, image) for every generated map."""
        for map_type in MAP_TYPES:
            image = getattr(self, map_type)
            if image is not None:
                yield map_type, image


class MapProcessor:
    """
    Generate maps for an image with a fixed set of settings.
    """

    def __init__(self, settings: Optional[ProcessorSettings] = None):
        """
        Initialize the processor.

        Args:
            settings: Settings for every map type; defaults when omitted
        """
        self.settings = settings or ProcessorSettings()

    @staticmethod
    def suggest_large_detail(width: int, height: int) -> Tuple[bool, int]:
        """
        Pick "keep large detail" settings from the image size.

        Small images have no large structures worth keeping; the bigger the
        image, the smaller the downscaled copy has to be.

        Args:
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            Tuple of (enabled, scale in percent)
        """
        image_size = max(width, height)
        scale = int(-0.037 * image_size + 100)
        if image_size > 2300:
            scale = 20
        scale = min(100, max(1, scale))
        return image_size >= 300, scale

    def calc_normal(self, image: np.ndarray) -> Tuple[np.ndarray, IntensityMap]:
        """
        Calculate the normal map and its height field.

        The input is scaled to the configured size percentage first.

        Args:
            image: Input image

        Returns:
            Tuple of (normal map, raw intensity at the normal map's resolution)
        """
        settings = self.settings.normal
        rgba = ensure_rgba(image)

        params = settings.generation_kwargs()
        if settings.auto_large_detail:
            enabled, scale = self.suggest_large_detail(rgba.shape[1], rgba.shape[0])
            params['keep_large_detail'] = enabled
            params['large_detail_scale'] = scale
            logger.debug(f"Large detail auto settings: enabled={enabled}, scale={scale}")

        scaled = scale_to_percent(rgba, settings.size_percent)

        generator = NormalMapGenerator(CombineMode(settings.mode), settings.channel_selection)
        return generator.calculate_normalmap(scaled, **params)

    def calc_spec(self, image: np.ndarray) -> np.ndarray:
        """Calculate the specular map."""
        settings = self.settings.spec
        generator = SpecularMapGenerator(
            CombineMode(settings.mode), settings.red, settings.green, settings.blue, settings.alpha
        )
        return generator.calculate_specmap(image, settings.scale, settings.contrast)

    def calc_displace(self, image: np.ndarray) -> np.ndarray:
        """Calculate the displacement map, blurred if configured."""
        settings = self.settings.displace
        generator = DisplacementMapGenerator(
            CombineMode(settings.mode), settings.red, settings.green, settings.blue
        )
        return generator.calculate_displacementmap(
            image,
            settings.scale,
            settings.contrast,
            blur_radius=settings.blur_radius if settings.blur else 0,
            blur_tileable=settings.blur_tileable
        )

    def calc_ssao(
        self,
        image: np.ndarray,
        normal: Optional[np.ndarray] = None,
        raw_intensity: Optional[IntensityMap] = None
    ) -> np.ndarray:
        """
        Calculate the ambient occlusion map.

        Args:
            image: Input image, used when no normal map is supplied
            normal: Previously calculated normal map
            raw_intensity: Height field returned together with the normal map

        Returns:
            Ambient occlusion map at the normal map's resolution
        """
        if normal is None or raw_intensity is None:
            normal, raw_intensity = self.calc_normal(image)

        height, width = normal.shape[:2]
        raw_intensity = raw_intensity.resized(width, height)

        settings = self.settings.ssao
        return SsaoGenerator().calculate_ssaomap(
            normal, raw_intensity, settings.size, settings.samples, settings.noise_tex_size, settings.seed
        )

    def channel_intensity(self, image: np.ndarray, channel: str) -> np.ndarray:
        """
        Show one color channel as a grayscale image.

        Args:
            image: Input image
            channel: One of 'r', 'g', 'b' or 'a'

        Returns:
            Grayscale RGBA image
        """
        if len(channel) != 1:
            raise ValueError(f"Exactly one channel expected, got '{channel}'")
        selection = ChannelSelection.parse(channel)
        return IntensityMap.build(image, CombineMode.AVERAGE, selection).to_image()

    def process(self, image: np.ndarray, maps: Iterable[str] = MAP_TYPES) -> MapSet:
        """
        Generate the requested maps for an image.

        Args:
            image: Input image
            maps: Map types to generate, any of 'normal', 'spec', 'displace', 'ssao'

        Returns:
            MapSet with the generated maps and their calculation times

        Raises:
            MapGenerationError: If an unknown map type is requested
            InvalidInputError: If the image is missing or empty
        """
        requested = list(maps)
        unknown = [name for name in requested if name not in MAP_TYPES]
        if unknown:
            raise MapGenerationError(f"Unknown map type(s): {', '.join(unknown)}")

        rgba = ensure_rgba(image)
        result = MapSet()

        for map_type in MAP_TYPES:
            if map_type not in requested:
                continue
            start = time.perf_counter()
            if map_type == 'normal':
                result.normal, result.raw_intensity = self.calc_normal(rgba)
            elif map_type == 'spec':
                result.spec = self.calc_spec(rgba)
            elif map_type == 'displace':
                result.displace = self.calc_displace(rgba)
            else:
                result.ssao = self.calc_ssao(rgba, result.normal, result.raw_intensity)
            calc_time_ms = int((time.perf_counter() - start) * 1000)
            result.timings_ms[map_type] = calc_time_ms
            logger.info(elapsed_time_message(calc_time_ms, map_type))

        return result
