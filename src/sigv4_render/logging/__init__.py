"""Hierarchical colored logging for rendering and signing."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
)
from .logger import (
    LogConfig,
    PluginLogger,
    RenderLogger,
    SigningLogger,
)

__all__ = [
    # Logger classes
    "PluginLogger",
    "RenderLogger",
    "SigningLogger",
    "LogConfig",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
