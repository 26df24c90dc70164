"""Fixed-length partitioning of the ranked glyph sequence."""

from collections.abc import Sequence

from fontslicer.domain import Chunk, Glyph


def partition_glyphs(ranked: Sequence[Glyph], chunk_length: int) -> list[Chunk]:
    """Split glyphs into consecutive runs of ``chunk_length``.

    The last run may be shorter. Every glyph lands in exactly one chunk.

    Args:
        ranked: Ranked glyphs, void glyph excluded
        chunk_length: Glyphs per chunk

    Returns:
        Chunks in sequence order

    Raises:
        ValueError: If chunk_length is less than 1
    """
    if chunk_length < 1:
        raise ValueError(f"chunk_length must be at least 1, got {chunk_length}")

    return [
        Chunk(index=index, glyphs=tuple(ranked[start : start + chunk_length]))
        for index, start in enumerate(range(0, len(ranked), chunk_length))
    ]
