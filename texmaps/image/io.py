"""
Image I/O utilities for input textures and generated maps.

Decoding and encoding is done with Pillow. Generated maps are written next to
each other with a suffix per map type, e.g. ``brick_normal.png``.
"""
import logging
import os
from pathlib import Path
from typing import Dict, Union

import numpy as np
from PIL import Image

from .core.base_types import RasterImage
from .core.exceptions import ImageIOError
from .core.image_utils import ensure_rgba

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

SUPPORTED_FORMATS = ('png', 'jpg', 'jpeg', 'tiff', 'ppm', 'bmp', 'xpm', 'tga')

# Formats Pillow reads but the map export writes as PNG instead
WRITE_FALLBACK_FORMATS = ('tga', 'xpm')

MAP_SUFFIXES = {
    'normal': '_normal',
    'spec': '_spec',
    'displace': '_displace',
    'ssao': '_ssao',
}


def is_supported(path: PathLike) -> bool:
    """Check whether the file extension is a supported image format."""
    return Path(path).suffix.lower().lstrip('.') in SUPPORTED_FORMATS


def load_image(path: PathLike) -> RasterImage:
    """
    Load an image file as an RGBA uint8 array.

    Args:
        path: Path to the image file

    Returns:
        (height, width, 4) uint8 array

    Raises:
        ImageIOError: If the format is unsupported or the file cannot be decoded
    """
    path = Path(path)
    suffix = path.suffix.lower().lstrip('.')
    if suffix not in SUPPORTED_FORMATS:
        raise ImageIOError(f"Unsupported image format '{suffix}' for {path.name}")

    try:
        with Image.open(path) as img:
            array = np.array(img.convert('RGBA'))
    except (OSError, ValueError) as e:
        message = f"Image {path.name} not loaded: {e}"
        if suffix == 'tga':
            message += ". Only uncompressed TGA files are supported."
        else:
            message += ". Most likely the image format is not supported."
        logger.error(message)
        raise ImageIOError(message) from e

    logger.debug(f"Loaded {path} ({array.shape[1]}x{array.shape[0]})")
    return RasterImage(array)


def output_paths(path: PathLike) -> Dict[str, Path]:
    """
    Build the output file names for every map type.

    A path without suffix gets PNG; TGA and XPM are written as PNG.

    Args:
        path: Base path, usually the input image's name in the export directory

    Returns:
        Mapping from map type to output path
    """
    path = Path(path)
    suffix = path.suffix.lower().lstrip('.')
    if not suffix:
        suffix = 'png'
    elif suffix in WRITE_FALLBACK_FORMATS:
        logger.warning(f"Cannot write '{suffix}' maps, using png instead")
        suffix = 'png'

    base = path.parent / path.stem
    return {
        map_type: base.parent / f"{base.name}{map_suffix}.{suffix}"
        for map_type, map_suffix in MAP_SUFFIXES.items()
    }


def save_image(image: np.ndarray, path: PathLike) -> Path:
    """
    Save a generated map.

    Maps are opaque, so the alpha channel is dropped and the file is written
    as RGB.

    Args:
        image: RGBA, RGB or grayscale array
        path: Destination file path

    Returns:
        The path the image was written to

    Raises:
        ImageIOError: If the file cannot be written
    """
    path = Path(path)
    rgba = ensure_rgba(image)
    try:
        os.makedirs(path.parent.resolve(), exist_ok=True)
        Image.fromarray(np.ascontiguousarray(rgba[:, :, :3])).save(path)
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Failed to save {path}: {e}")
        raise ImageIOError(f"Could not save {path}: {e}") from e

    logger.info(f"Saved {path}")
    return path
