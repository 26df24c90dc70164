"""Utility functions for fontslicer.

This module provides utility functions including:

- Logging setup and configuration
- Per-run statistics and stage logging
"""

from fontslicer.utils.logging import (
    SplitLogger,
    SplitStats,
    configure_logging,
)

__all__ = [
    "SplitLogger",
    "SplitStats",
    "configure_logging",
]
