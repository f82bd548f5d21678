"""Clipmark configuration and property models."""

from .config import ClipConfig, FrontmatterConfig, MarkdownConfig
from .properties import Property, PropertyType

__all__ = [
    # Config
    "ClipConfig",
    "FrontmatterConfig",
    "MarkdownConfig",
    # Properties
    "Property",
    "PropertyType",
]
