#!/usr/bin/env python3
"""
texmaps Exceptions

This module defines the base exception used throughout the texmaps library.
"""


class TexMapsException(Exception):
    """Base class for all texmaps exceptions."""
    pass


class TexMapsConfigError(TexMapsException):
    """Exception raised when a configuration value cannot be interpreted."""
    pass
