"""Core types and helpers shared by the map generators."""
from .base_types import ChannelSelection, CombineMode, Kernel
from .sampler import PixelSampler

__all__ = ['ChannelSelection', 'CombineMode', 'Kernel', 'PixelSampler']
