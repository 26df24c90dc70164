"""Core chunking algorithms for fontslicer.

This module contains the split pipeline:

- Priority ranking (frequency-ordered glyph sequence)
- Chunk length estimation (sample encode and calibration)
- Partitioning (fixed-length glyph runs)
- Serialization (per-chunk encoding, optionally in worker processes)
- Content-addressed naming
- Stylesheet generation (``@font-face`` with ``unicode-range``)

Ranking, partitioning, naming and stylesheet rendering are pure functions
of their inputs; only serialization and estimation call into the codec.

Key functions:
- rank_glyphs: Stable priority sort of glyphs
- partition_glyphs: Split ranked glyphs into chunks
- content_address: SHA-256 name of a chunk
- name_chunks: Turn encoded chunks into named artifacts

Key classes:
- PriorityList: Code point preference order
- ChunkSizeEstimator: Calibrates glyphs per chunk
- ChunkSerializer: Encodes chunks into font buffers
- StylesheetGenerator: Renders the stylesheet
- FontSplitter: Runs the whole pipeline
"""

from fontslicer.core.estimator import ChunkEstimate, ChunkSizeEstimator, sample_window
from fontslicer.core.naming import content_address, name_chunks
from fontslicer.core.partitioner import partition_glyphs
from fontslicer.core.pipeline import FontSplitter, SplitResult
from fontslicer.core.priority import PriorityList
from fontslicer.core.ranker import glyph_rank, rank_glyphs
from fontslicer.core.serializer import ChunkSerializer, encode_chunk
from fontslicer.core.stylesheet import StylesheetGenerator, format_unicode_range

__all__ = [
    # Estimation
    "ChunkEstimate",
    "ChunkSizeEstimator",
    # Serialization
    "ChunkSerializer",
    # Pipeline
    "FontSplitter",
    # Ranking
    "PriorityList",
    "SplitResult",
    # Stylesheet
    "StylesheetGenerator",
    "content_address",
    "encode_chunk",
    "format_unicode_range",
    "glyph_rank",
    "name_chunks",
    "partition_glyphs",
    "rank_glyphs",
    "sample_window",
]
