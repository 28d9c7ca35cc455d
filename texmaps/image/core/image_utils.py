"""
Utility functions for image processing operations.

This module provides core functionality for handling raster images, including
validation, conversion between 8-bit and normalized float data, resizing and
the RGB encoding of normal vectors.
"""
import logging
from typing import Optional

import cv2
import numpy as np

from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)

_INTERPOLATION = {
    'area': cv2.INTER_AREA,
    'linear': cv2.INTER_LINEAR,
    'cubic': cv2.INTER_CUBIC,
    'nearest': cv2.INTER_NEAREST,
}


def ensure_rgba(image: Optional[np.ndarray]) -> np.ndarray:
    """
    Validate an image and bring it to the (height, width, 4) uint8 layout.

    Grayscale images are replicated into RGB, RGB images gain an opaque
    alpha channel. Float images are expected in [0, 1].

    Args:
        image: Input image array

    Returns:
        RGBA uint8 array (a new array, the input is never modified)

    Raises:
        InvalidInputError: If the image is None, empty or has an unsupported shape
    """
    if image is None:
        raise InvalidInputError("No image provided")

    image = np.asarray(image)
    if image.size == 0 or image.ndim not in (2, 3) or 0 in image.shape[:2]:
        raise InvalidInputError(f"Cannot process an empty or malformed image of shape {image.shape}")

    if image.dtype != np.uint8:
        if np.issubdtype(image.dtype, np.floating):
            image = to_uint8(image)
        else:
            image = np.clip(image, 0, 255).astype(np.uint8)

    if image.ndim == 2:
        image = image[:, :, np.newaxis]

    channels = image.shape[2]
    if channels == 1:
        rgb = np.repeat(image, 3, axis=2)
        alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([rgb, alpha], axis=2)
    if channels == 3:
        alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([image, alpha], axis=2)
    if channels == 4:
        return image.copy()

    raise InvalidInputError(f"Unsupported number of channels: {channels}")


def to_float(image: np.ndarray) -> np.ndarray:
    """Convert 8-bit data to float32 in [0, 1]."""
    return image.astype(np.float32) / 255.0


def to_uint8(values: np.ndarray) -> np.ndarray:
    """Convert [0, 1] floats to 8-bit, rounding half up."""
    return np.clip(np.floor(np.asarray(values, dtype=np.float64) * 255.0 + 0.5), 0, 255).astype(np.uint8)


def gray_to_rgba(values: np.ndarray) -> np.ndarray:
    """
    Expand a scalar field in [0, 1] into an opaque grayscale RGBA image.

    Args:
        values: 2D array of values in [0, 1]

    Returns:
        RGBA uint8 array with the value replicated into R, G and B
    """
    gray = to_uint8(values)
    alpha = np.full(gray.shape, 255, dtype=np.uint8)
    return np.stack([gray, gray, gray, alpha], axis=-1)


def resize_image(image: np.ndarray, width: int, height: int, interpolation: str = 'linear') -> np.ndarray:
    """
    Resize an image or scalar field with OpenCV.

    Args:
        image: 2D or 3D array
        width: Target width in pixels (at least 1)
        height: Target height in pixels (at least 1)
        interpolation: One of 'area', 'linear', 'cubic' or 'nearest'

    Returns:
        Resized array with the input's dtype
    """
    width, height = max(1, int(width)), max(1, int(height))
    if image.shape[1] == width and image.shape[0] == height:
        return image.copy()
    logger.debug(f"Resizing image from {image.shape[1]}x{image.shape[0]} to {width}x{height} ({interpolation})")
    return cv2.resize(image, (width, height), interpolation=_INTERPOLATION[interpolation])


def calc_percentage(value: int, percentage: int) -> int:
    """Return percentage % of value, truncated to an integer."""
    return int((value / 100.0) * percentage)


def scale_to_percent(image: np.ndarray, percent: int) -> np.ndarray:
    """
    Scale an image to a percentage of its size, keeping the aspect ratio.

    Args:
        image: Input image
        percent: Target size in percent of the original

    Returns:
        The scaled image, or a copy when percent is 100
    """
    if percent == 100:
        return image.copy()
    height, width = image.shape[:2]
    new_width = max(1, calc_percentage(width, percent))
    new_height = max(1, calc_percentage(height, percent))
    interpolation = 'area' if percent < 100 else 'cubic'
    return resize_image(image, new_width, new_height, interpolation=interpolation)


def encode_normals(normals: np.ndarray) -> np.ndarray:
    """
    Encode unit normal vectors into an opaque RGBA image.

    Each component is mapped with (c * 0.5 + 0.5) * 255.

    Args:
        normals: (height, width, 3) array of unit vectors

    Returns:
        RGBA uint8 normal map
    """
    rgb = to_uint8(normals * 0.5 + 0.5)
    alpha = np.full(normals.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2)


def decode_normals(normal_map: np.ndarray) -> np.ndarray:
    """
    Decode an RGB(A) normal map back into unit vectors.

    Args:
        normal_map: RGB or RGBA uint8 normal map

    Returns:
        (height, width, 3) float32 array of unit vectors
    """
    vectors = normal_map[..., :3].astype(np.float32) / 255.0 * 2.0 - 1.0
    return normalize_vectors(vectors)


def normalize_vectors(vectors: np.ndarray) -> np.ndarray:
    """Normalize vectors along the last axis, leaving zero vectors as (0, 0, 1)."""
    norm = np.linalg.norm(vectors, axis=-1, keepdims=True)
    flat = np.zeros_like(vectors)
    flat[..., 2] = 1.0
    safe = np.maximum(norm, 1e-10)
    return np.where(norm > 1e-10, vectors / safe, flat).astype(np.float32)
