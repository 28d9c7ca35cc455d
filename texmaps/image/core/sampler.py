"""
Bounded pixel sampling.

Every neighborhood operation in the package (box blur, gradient stencils,
ambient occlusion lookups) reads pixels that may fall outside the image.
PixelSampler decides what those reads return: with tiling enabled the image
is treated as a torus and coordinates wrap around, otherwise coordinates are
clamped so the edge pixels repeat.
"""
import logging
from dataclasses import dataclass

import numpy as np
from scipy import ndimage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelSampler:
    """Border policy for out-of-range pixel reads."""
    tileable: bool = False

    @property
    def mode(self) -> str:
        """Name of the matching scipy.ndimage boundary mode."""
        return 'wrap' if self.tileable else 'nearest'

    def index(self, coords: np.ndarray, size: int) -> np.ndarray:
        """
        Map arbitrary integer coordinates onto valid indices along one axis.

        Args:
            coords: Integer coordinates, possibly outside [0, size)
            size: Length of the axis

        Returns:
            Array of valid indices with the same shape as coords
        """
        coords = np.asarray(coords, dtype=np.int64)
        if self.tileable:
            return np.mod(coords, size)
        return np.clip(coords, 0, size - 1)

    def sample(self, array: np.ndarray, rows: np.ndarray, cols: np.ndarray) -> np.ndarray:
        """Read array[rows, cols] after applying the border policy."""
        height, width = array.shape[:2]
        return array[self.index(rows, height), self.index(cols, width)]

    def correlate(self, array: np.ndarray, weights: np.ndarray) -> np.ndarray:
        """Correlate a 2D array with a small stencil, borders per policy."""
        return ndimage.correlate(array, weights, mode=self.mode)

    def box_filter1d(self, array: np.ndarray, radius: int, axis: int) -> np.ndarray:
        """Average a centered window of 2 * radius + 1 samples along one axis."""
        return ndimage.uniform_filter1d(array, size=2 * radius + 1, axis=axis, mode=self.mode)
