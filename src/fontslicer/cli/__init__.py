"""Command-line interface for fontslicer.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar for chunk encoding
- Verbose/quiet output modes
- Per-stage timings
- Detailed error reporting
"""

from fontslicer.cli.app import cli, main

__all__ = ["cli", "main"]
