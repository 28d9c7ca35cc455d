"""
Base types for the image processing package.
"""
from dataclasses import dataclass
from enum import Enum
from typing import NewType, Dict, Any, Tuple

import numpy as np

# Type definitions for stronger typing
RasterImage = NewType('RasterImage', np.ndarray)

# Parameters type for map generation
MapParams = Dict[str, Any]


class CombineMode(str, Enum):
    """How several selected color channels fold into one scalar."""
    AVERAGE = "average"
    MAX = "max"


class Kernel(str, Enum):
    """3x3 gradient stencil used for normal map generation."""
    SOBEL = "sobel"
    PREWITT = "prewitt"


@dataclass(frozen=True)
class ChannelSelection:
    """
    Set of color channels taking part in an intensity calculation.

    The default selects the color channels and leaves alpha out.
    """
    red: bool = True
    green: bool = True
    blue: bool = True
    alpha: bool = False

    @classmethod
    def none(cls) -> "ChannelSelection":
        return cls(False, False, False, False)

    @classmethod
    def all(cls) -> "ChannelSelection":
        return cls(True, True, True, True)

    @classmethod
    def parse(cls, text: str) -> "ChannelSelection":
        """
        Build a selection from a string of channel letters, e.g. "rgb" or "ra".

        Args:
            text: Any combination of the letters r, g, b and a (case-insensitive)

        Returns:
            The matching ChannelSelection

        Raises:
            ValueError: If the string contains other characters
        """
        letters = text.strip().lower()
        unknown = set(letters) - set("rgba")
        if unknown:
            raise ValueError(f"Unknown channel letters: {''.join(sorted(unknown))}")
        return cls('r' in letters, 'g' in letters, 'b' in letters, 'a' in letters)

    @property
    def flags(self) -> Tuple[bool, bool, bool, bool]:
        return (self.red, self.green, self.blue, self.alpha)

    @property
    def count(self) -> int:
        return sum(self.flags)

    def __str__(self) -> str:
        return "".join(letter for letter, used in zip("rgba", self.flags) if used) or "-"
