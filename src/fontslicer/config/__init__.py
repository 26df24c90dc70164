"""Configuration management for fontslicer.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults. All models
are frozen: a run's settings are validated once and never mutated.

Key classes:
- CssConfig: ``@font-face`` rule settings
- ChunkingConfig: Chunk size, target format and encoder workers
- OutputConfig: Output directory and optional artifacts
- LoggingConfig: Logging settings
- SplitSettings: Main settings for one split run
"""

from fontslicer.config.settings import (
    ChunkingConfig,
    CssConfig,
    FontDisplay,
    FontFormat,
    FontStyle,
    LoggingConfig,
    OutputConfig,
    SplitSettings,
    get_default_settings,
)

__all__ = [
    "ChunkingConfig",
    "CssConfig",
    "FontDisplay",
    "FontFormat",
    "FontStyle",
    "LoggingConfig",
    "OutputConfig",
    "SplitSettings",
    "get_default_settings",
]
