"""Fontslicer - Split fonts into lazily loadable web font chunks.

Fontslicer is a CLI tool that partitions a font's glyphs into several
size-bounded font files ordered by character frequency, and writes a
stylesheet whose ``unicode-range`` rules let browsers download only the
chunks a page actually uses.

Example:
    $ fontslicer NotoSansSC-Regular.ttf --target woff2

This will create ``build/<hash>.woff2`` chunk files and ``build/result.css``.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
