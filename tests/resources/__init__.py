"""Test resources package for texmaps testing."""

import numpy as np


def create_sample_image(size=(16, 16), pattern="gray", value=128):
    """Create a sample RGBA image for testing.

    Args:
        size: Tuple of (height, width)
        pattern: Type of pattern - "gray", "ramp_x", "ramp_y", "pit", "checker", "random"
        value: Gray level used by the "gray" pattern

    Returns:
        (height, width, 4) uint8 array with opaque alpha
    """
    height, width = size

    if pattern == "gray":
        gray = np.full((height, width), value, dtype=np.float64)

    elif pattern == "ramp_x":
        # Brightness increasing from left to right
        gray = np.tile(np.linspace(0, 255, width), (height, 1))

    elif pattern == "ramp_y":
        # Brightness increasing from top to bottom
        gray = np.tile(np.linspace(0, 255, height)[:, np.newaxis], (1, width))

    elif pattern == "pit":
        # Bright plateau with a dark hole in the center
        yy, xx = np.mgrid[:height, :width]
        distance = np.hypot(yy - height // 2, xx - width // 2)
        gray = np.where(distance <= 2.0, 0.0, 255.0)

    elif pattern == "checker":
        yy, xx = np.mgrid[:height, :width]
        gray = ((yy + xx) % 2) * 255.0

    elif pattern == "random":
        rng = np.random.default_rng(42)
        return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)

    else:
        raise ValueError(f"Unknown pattern: {pattern}")

    gray = np.rint(gray).astype(np.uint8)
    alpha = np.full((height, width), 255, dtype=np.uint8)
    return np.stack([gray, gray, gray, alpha], axis=-1)


def solid_color(size, rgba):
    """Create an image filled with one RGBA color."""
    height, width = size
    return np.tile(np.array(rgba, dtype=np.uint8), (height, width, 1))


def decode_raw_normals(normal_map):
    """Decode RGB normals without renormalizing them."""
    return normal_map[..., :3].astype(np.float64) / 255.0 * 2.0 - 1.0
