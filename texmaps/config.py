"""
Configuration classes for map generation.

This module provides one configuration class per map type plus the
ProcessorSettings container, with validation, defaults and dict
serialization so settings can round-trip through the JSON config file.
"""

import logging
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any, Optional

from .image.core.base_types import ChannelSelection, CombineMode, Kernel

# Set up logging
logger = logging.getLogger(__name__)


def _known_fields(cls, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop keys a dataclass does not define, logging them."""
    data = dict(data or {})
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        logger.warning(f"Ignoring unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")
    return {key: value for key, value in data.items() if key in names}


@dataclass(frozen=True)
class NormalSettings:
    """Parameters of the normal map."""
    mode: str = CombineMode.AVERAGE.value
    channels: str = "rgb"
    kernel: str = Kernel.SOBEL.value
    strength: float = 2.0
    invert: bool = False
    tileable: bool = True
    keep_large_detail: bool = True
    large_detail_scale: int = 25
    large_detail_height: float = 1.0
    auto_large_detail: bool = True
    size_percent: int = 100

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValueError: If configuration is invalid
        """
        CombineMode(self.mode)
        Kernel(self.kernel)
        ChannelSelection.parse(self.channels)
        if not 0 < self.large_detail_scale <= 100:
            raise ValueError(f"large_detail_scale must be in (0, 100], got {self.large_detail_scale}")
        if self.size_percent <= 0:
            raise ValueError(f"size_percent must be positive, got {self.size_percent}")

    @property
    def channel_selection(self) -> ChannelSelection:
        return ChannelSelection.parse(self.channels)

    def generation_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for NormalMapGenerator.calculate_normalmap()."""
        return {
            'kernel': Kernel(self.kernel),
            'strength': self.strength,
            'invert': self.invert,
            'tileable': self.tileable,
            'keep_large_detail': self.keep_large_detail,
            'large_detail_scale': self.large_detail_scale,
            'large_detail_height': self.large_detail_height,
        }


@dataclass(frozen=True)
class SpecularSettings:
    """Parameters of the specular map."""
    mode: str = CombineMode.AVERAGE.value
    red: float = 1.0
    green: float = 1.0
    blue: float = 1.0
    alpha: float = 0.0
    scale: float = 1.0
    contrast: float = 0.0

    def __post_init__(self):
        CombineMode(self.mode)


@dataclass(frozen=True)
class DisplacementSettings:
    """Parameters of the displacement map; alpha never contributes."""
    mode: str = CombineMode.AVERAGE.value
    red: float = 1.0
    green: float = 1.0
    blue: float = 1.0
    scale: float = 1.0
    contrast: float = 0.0
    blur: bool = False
    blur_radius: int = 3
    blur_tileable: bool = True

    def __post_init__(self):
        CombineMode(self.mode)
        if self.blur_radius < 0:
            raise ValueError(f"blur_radius cannot be negative, got {self.blur_radius}")


@dataclass(frozen=True)
class SsaoSettings:
    """Parameters of the ambient occlusion map."""
    size: float = 0.1
    samples: int = 16
    noise_tex_size: int = 4
    seed: int = 0

    def __post_init__(self):
        if self.samples < 0:
            raise ValueError(f"samples cannot be negative, got {self.samples}")


@dataclass(frozen=True)
class ProcessorSettings:
    """Settings for every map the processor can generate."""
    normal: NormalSettings = field(default_factory=NormalSettings)
    spec: SpecularSettings = field(default_factory=SpecularSettings)
    displace: DisplacementSettings = field(default_factory=DisplacementSettings)
    ssao: SsaoSettings = field(default_factory=SsaoSettings)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ProcessorSettings":
        """
        Create settings from a (possibly partial) nested dictionary.

        Args:
            data: Dictionary with optional 'normal', 'spec', 'displace' and 'ssao' entries

        Returns:
            ProcessorSettings with defaults for everything not given

        Raises:
            ValueError: If a value is invalid
        """
        data = data or {}
        return cls(
            normal=NormalSettings(**_known_fields(NormalSettings, data.get('normal'))),
            spec=SpecularSettings(**_known_fields(SpecularSettings, data.get('spec'))),
            displace=DisplacementSettings(**_known_fields(DisplacementSettings, data.get('displace'))),
            ssao=SsaoSettings(**_known_fields(SsaoSettings, data.get('ssao'))),
        )

    def as_dict(self) -> Dict[str, Any]:
        """
        Get configuration as a dictionary.

        Returns:
            Dictionary representation of configuration
        """
        return asdict(self)
