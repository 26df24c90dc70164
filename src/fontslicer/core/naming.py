"""Content-addressed chunk naming.

A chunk's name is the SHA-256 digest of its bytes, so an unchanged chunk
keeps its file name across builds and stays cached by browsers.
"""

import hashlib
from collections.abc import Sequence

from fontslicer.domain import ChunkArtifact, EncodedChunk


def content_address(data: bytes) -> str:
    """Compute the SHA-256 hex digest of ``data``.

    Returns:
        Lowercase hex string (64 characters)
    """
    return hashlib.sha256(data).hexdigest()


def name_chunks(encoded: Sequence[EncodedChunk], target_format: str) -> list[ChunkArtifact]:
    """Name every encoded chunk after its content.

    Args:
        encoded: Encoded chunks in chunk order
        target_format: Format tag of the chunk files

    Returns:
        Artifacts in the same order as ``encoded``
    """
    return [
        ChunkArtifact(
            name=content_address(item.data),
            format=target_format,
            size=item.size,
            unicodes=item.unicodes,
        )
        for item in encoded
    ]
