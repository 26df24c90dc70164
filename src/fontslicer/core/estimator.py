"""Sample-based chunk length estimation.

The source file size divided by the glyph count gives a naive bytes-per-glyph
figure. That figure ignores the fixed overhead of each output font and the
variance of outline sizes, so a window of glyphs from the middle of the
ranked sequence is actually encoded and the chunk length is corrected by the
ratio between the byte budget and the sample's real size.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from fontslicer.domain import FontModel, Glyph
from fontslicer.exceptions import EstimationError
from fontslicer.io.codec import FontCodec


@dataclass(frozen=True)
class ChunkEstimate:
    """Result of chunk length calibration.

    Attributes:
        bytes_per_glyph: Naive estimate from the source file size
        sample_start: Index of the first sampled glyph in the ranked sequence
        sample_length: Number of sampled glyphs
        sample_encoded_size: Real encoded size of the sample in bytes
        chunk_length: Calibrated glyphs per chunk
    """

    bytes_per_glyph: float
    sample_start: int
    sample_length: int
    sample_encoded_size: int
    chunk_length: int


def sample_window(glyph_count: int, trial_length: int) -> tuple[int, int]:
    """Window of ``trial_length`` glyphs centred on the sequence midpoint.

    Returns:
        (start, length), clamped to the sequence bounds
    """
    length = max(0, min(trial_length, glyph_count))
    start = math.floor(glyph_count / 2 - trial_length / 2)
    start = max(0, min(start, glyph_count - length))
    return start, length


class ChunkSizeEstimator:
    """Calibrates the number of glyphs per chunk for a byte budget.

    Example:
        estimator = ChunkSizeEstimator(FontToolsCodec(), "woff2")
        estimate = estimator.estimate(model, ranked, byte_budget=200 * 1024)
        chunks = partition_glyphs(ranked, estimate.chunk_length)
    """

    def __init__(self, codec: FontCodec, target_format: str) -> None:
        self._codec = codec
        self._target_format = target_format

    def estimate(
        self,
        model: FontModel,
        ranked: Sequence[Glyph],
        byte_budget: int,
    ) -> ChunkEstimate:
        """Estimate glyphs per chunk.

        Args:
            model: Decoded source font
            ranked: Ranked glyphs, void glyph excluded
            byte_budget: Target size of one chunk in bytes

        Returns:
            ChunkEstimate whose chunk_length is within [1, len(ranked)]

        Raises:
            EstimationError: If the font or the sample cannot be calibrated
            EncodeError: If the codec rejects the sample
        """
        glyph_count = len(ranked)
        if glyph_count == 0:
            raise EstimationError("font has no glyphs besides the void glyph")
        if byte_budget <= 0:
            raise EstimationError(f"byte budget must be positive, got {byte_budget}")
        if model.byte_size <= 0:
            raise EstimationError("source font size is zero")

        bytes_per_glyph = model.byte_size / glyph_count
        trial_length = math.ceil(byte_budget / bytes_per_glyph)

        start, length = sample_window(glyph_count, trial_length)
        sample = ranked[start : start + length]
        if not sample:
            raise EstimationError("sample window is empty")

        encoded_size = len(self._codec.encode(model, sample, self._target_format))
        if encoded_size == 0:
            raise EstimationError("encoded sample is empty")

        chunk_length = round(len(sample) * (byte_budget / encoded_size))
        chunk_length = max(1, min(chunk_length, glyph_count))

        return ChunkEstimate(
            bytes_per_glyph=bytes_per_glyph,
            sample_start=start,
            sample_length=len(sample),
            sample_encoded_size=encoded_size,
            chunk_length=chunk_length,
        )
