"""Application layer - use cases and orchestration."""

from .commands import GenerateLayoutCommand
from .dtos import LayoutOutput, LayoutRequest, MaskSpec
from .factory import ServiceFactory, get_factory

__all__ = [
    "GenerateLayoutCommand",
    "LayoutOutput",
    "LayoutRequest",
    "MaskSpec",
    "ServiceFactory",
    "get_factory",
]
