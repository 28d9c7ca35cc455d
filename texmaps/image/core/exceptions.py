#!/usr/bin/env python3
"""
Custom exception classes for the image processing package.
"""
from texmaps.exceptions import TexMapsException

class ImageException(TexMapsException):
    """Base exception for all image-related errors."""
    pass

class InvalidInputError(ImageException):
    """Exception raised when a missing, empty or malformed image is provided."""
    pass

class DimensionMismatchError(ImageException):
    """Exception raised when two maps that must share dimensions do not."""
    pass

class ImageIOError(ImageException):
    """Exception raised when there's an issue with image I/O operations."""
    pass

class MapGenerationError(ImageException):
    """Exception raised when map generation fails."""
    pass
