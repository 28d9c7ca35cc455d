"""
Base generator module that defines the interface for all map generators.

This module provides the abstract base class that all map generators must implement.
"""
import logging
from abc import ABC, abstractmethod
from types import MappingProxyType

import numpy as np

from ..core.base_types import MapParams
from ..core.image_utils import ensure_rgba

logger = logging.getLogger(__name__)

class MapGenerator(ABC):
    """
    Abstract base class for all map generators.

    Generators are configured once at construction and never change
    afterwards, so one instance can be shared between threads. Each concrete
    generator implements generate() to produce its map from an image.
    """

    def __init__(self, **kwargs):
        """
        Initialize the map generator with default parameters.

        Args:
            **kwargs: Default parameters for this generator
        """
        self._default_params = MappingProxyType(dict(kwargs))

    @property
    def default_params(self) -> MapParams:
        return self._default_params

    @abstractmethod
    def generate(self, image: np.ndarray, **kwargs) -> np.ndarray:
        """
        Generate a specific type of map from an image.

        Args:
            image: Input image as numpy array
            **kwargs: Parameters for map generation

        Returns:
            Generated map as an RGBA uint8 numpy array
        """
        pass

    def _prepare_image(self, image: np.ndarray) -> np.ndarray:
        """
        Validate the input image and convert it to RGBA.

        Raises:
            InvalidInputError: If the image is missing or empty
        """
        return ensure_rgba(image)

    def _get_params(self, **overrides) -> MapParams:
        """Construction defaults updated with per-call overrides, then validated."""
        params = {**self._default_params, **overrides}
        return self._validate_params(params)

    def _validate_params(self, params: MapParams) -> MapParams:
        """
        Coerce parameter types and reject values a generator cannot use.

        The base implementation accepts everything unchanged.

        Raises:
            ValueError: In subclasses, for values outside their valid range
        """
        return params
