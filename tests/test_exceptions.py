#!/usr/bin/env python3
"""
Tests for the texmaps exception hierarchy.
"""

import pytest

from texmaps.exceptions import TexMapsConfigError, TexMapsException
from texmaps.image.core.exceptions import (
    DimensionMismatchError,
    ImageException,
    ImageIOError,
    InvalidInputError,
    MapGenerationError,
)


class TestTexMapsExceptions:
    """Test cases for texmaps exception classes."""

    def test_base_exception(self):
        with pytest.raises(TexMapsException) as excinfo:
            raise TexMapsException("Base texmaps exception")
        assert str(excinfo.value) == "Base texmaps exception"
        assert isinstance(excinfo.value, Exception)

    @pytest.mark.parametrize("error_class", [
        InvalidInputError,
        DimensionMismatchError,
        ImageIOError,
        MapGenerationError,
    ])
    def test_image_errors(self, error_class):
        """Every image error is caught as ImageException and TexMapsException."""
        with pytest.raises(ImageException):
            raise error_class("image failure")
        assert issubclass(error_class, TexMapsException)

    def test_config_error(self):
        with pytest.raises(TexMapsException):
            raise TexMapsConfigError("bad value")
        assert not issubclass(TexMapsConfigError, ImageException)
