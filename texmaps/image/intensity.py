"""
Intensity maps.

An intensity map reduces the selected color channels of an image to a single
scalar per pixel. Every generator builds its height or weight field from one.
"""
import logging
from typing import Optional, Tuple

import numpy as np

from .core.base_types import ChannelSelection, CombineMode
from .core.exceptions import InvalidInputError
from .core.image_utils import ensure_rgba, gray_to_rgba, resize_image, to_float

logger = logging.getLogger(__name__)


class IntensityMap:
    """Immutable scalar field with values in [0, 1]."""

    __slots__ = ('_values',)

    def __init__(self, values: np.ndarray):
        """
        Wrap a 2D array of intensities.

        Args:
            values: 2D array; values are clamped to [0, 1] and copied
        """
        values = np.asarray(values, dtype=np.float32)
        if values.ndim != 2 or values.size == 0:
            raise InvalidInputError(f"Intensity map must be a non-empty 2D array, got shape {values.shape}")
        values = np.clip(values, 0.0, 1.0)
        values.setflags(write=False)
        self._values = values

    @classmethod
    def build(
        cls,
        image: np.ndarray,
        mode: CombineMode = CombineMode.AVERAGE,
        channels: Optional[ChannelSelection] = None
    ) -> "IntensityMap":
        """
        Reduce the selected channels of an image to one intensity per pixel.

        Args:
            image: RGBA, RGB or grayscale image
            mode: AVERAGE (mean of the selected channels) or MAX
            channels: Channels to use; defaults to red, green and blue

        Returns:
            New IntensityMap with the image's dimensions. With no channel
            selected every value is 0.
        """
        channels = channels if channels is not None else ChannelSelection()
        rgba = ensure_rgba(image)
        height, width = rgba.shape[:2]

        selected = [index for index, used in enumerate(channels.flags) if used]
        if not selected:
            logger.warning("No color channel selected, intensity map is uniformly 0")
            return cls(np.zeros((height, width), dtype=np.float32))

        data = to_float(rgba[:, :, selected])
        if CombineMode(mode) == CombineMode.MAX:
            values = data.max(axis=2)
        else:
            values = data.mean(axis=2)

        logger.debug(f"Built {width}x{height} intensity map from channels '{channels}' ({CombineMode(mode).value})")
        return cls(values)

    @classmethod
    def from_array(cls, values: np.ndarray) -> "IntensityMap":
        return cls(values)

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the intensities."""
        return self._values

    @property
    def width(self) -> int:
        return self._values.shape[1]

    @property
    def height(self) -> int:
        return self._values.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._values.shape

    def at(self, x: int, y: int) -> float:
        return float(self._values[y, x])

    def inverted(self) -> "IntensityMap":
        return IntensityMap(1.0 - self._values)

    def resized(self, width: int, height: int) -> "IntensityMap":
        """Resample to the given size with bilinear interpolation."""
        if (width, height) == (self.width, self.height):
            return self
        return IntensityMap(resize_image(self._values, width, height, interpolation='linear'))

    def to_image(self) -> np.ndarray:
        """Convert to an opaque grayscale RGBA image."""
        return gray_to_rgba(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntensityMap):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._values, other._values)

    def __repr__(self) -> str:
        return f"IntensityMap({self.width}x{self.height})"
