"""Font I/O layer for fontslicer.

This module handles reading source fonts, encoding glyph subsets with
fonttools and writing every output artifact.

Key responsibilities:
- Decode TTF/OTF/WOFF/WOFF2 fonts into domain models
- Encode glyph subsets into standalone fonts of the target format
- Write chunk files, waiting for every write to complete
- Render the preview page and the JSON report

Key classes:
- FontCodec: Protocol for decode/encode
- FontToolsCodec: fonttools implementation of FontCodec
- FontReader: Load a font file through a codec
- OutputWriter: Write chunks and text artifacts
- PreviewRenderer: Render the HTML preview page
"""

from fontslicer.io.codec import FontCodec, FontToolsCodec, normalize_format, sniff_format
from fontslicer.io.preview import PREVIEW_FILE_NAME, PreviewRenderer
from fontslicer.io.reader import FontReader
from fontslicer.io.report import (
    REPORT_FILE_NAME,
    ChunkRecord,
    SplitReport,
    build_report,
    render_report,
)
from fontslicer.io.writer import OutputWriter

__all__ = [
    "PREVIEW_FILE_NAME",
    "REPORT_FILE_NAME",
    "ChunkRecord",
    "FontCodec",
    "FontReader",
    "FontToolsCodec",
    "OutputWriter",
    "PreviewRenderer",
    "SplitReport",
    "build_report",
    "normalize_format",
    "render_report",
    "sniff_format",
]
