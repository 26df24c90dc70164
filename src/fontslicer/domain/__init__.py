"""Domain models for fontslicer.

This module contains the domain models representing a decoded font and the
chunks carved out of it. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Picklable for inter-process communication (parallel encoding)
- Independent of fonttools implementation details

Key classes:
- Glyph: One glyph record with its code points
- FontMetadata: Name table and style information
- FontModel: Decoded font owned by one pipeline run
- Chunk: A run of ranked glyphs
- EncodedChunk: A chunk with its serialized bytes
- ChunkArtifact: A named chunk referenced by the stylesheet
"""

from fontslicer.domain.chunk import (
    FORMAT_EXTENSIONS,
    Chunk,
    ChunkArtifact,
    EncodedChunk,
    collect_unicodes,
)
from fontslicer.domain.glyph import FontMetadata, FontModel, Glyph

__all__: list[str] = [
    "FORMAT_EXTENSIONS",
    # Font types
    "Glyph",
    "FontMetadata",
    "FontModel",
    # Chunk types
    "Chunk",
    "EncodedChunk",
    "ChunkArtifact",
    "collect_unicodes",
]
