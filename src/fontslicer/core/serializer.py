"""Chunk serialization, optionally across worker processes.

Each chunk is encoded as a standalone font holding the void glyph followed
by the chunk's glyphs. Encodes share no state, so they can run in a
ProcessPoolExecutor; results are always returned in chunk order because the
stylesheet's rule order depends on it.

Key components:
- encode_chunk: Top-level picklable function for worker processes
- ChunkSerializer: Encodes all chunks and releases the font model
"""

from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import replace

from fontslicer.domain import Chunk, EncodedChunk, FontModel, Glyph
from fontslicer.io.codec import FontCodec

ProgressCallback = Callable[[int, int], None]

# Per-process state installed by the pool initializer
_worker_codec: FontCodec | None = None
_worker_model: FontModel | None = None


def _init_worker(codec: FontCodec, model: FontModel) -> None:
    global _worker_codec, _worker_model
    _worker_codec = codec
    _worker_model = model


def encode_chunk(glyphs: tuple[Glyph, ...], target_format: str) -> bytes:
    """Encode one chunk inside a worker process.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. The codec and font model are installed once per
    worker by the pool initializer.

    Args:
        glyphs: Chunk glyphs, void glyph excluded
        target_format: Format of the produced binary

    Returns:
        Encoded font bytes
    """
    if _worker_codec is None or _worker_model is None:
        raise RuntimeError("Encoder worker has not been initialized")
    return _worker_codec.encode(_worker_model, glyphs, target_format)


class ChunkSerializer:
    """Encodes chunks into standalone font buffers.

    Example:
        serializer = ChunkSerializer(FontToolsCodec(), "woff2", max_workers=4)
        encoded = serializer.serialize(model, chunks)
        # model is released at this point
    """

    def __init__(
        self,
        codec: FontCodec,
        target_format: str,
        max_workers: int | None = 1,
    ) -> None:
        """Initialize the serializer.

        Args:
            codec: Codec used for encoding
            target_format: Format of the produced binaries
            max_workers: Worker processes (1 = in-process, None = CPU count)
        """
        self._codec = codec
        self._target_format = target_format
        self._max_workers = max_workers

    def serialize(
        self,
        model: FontModel,
        chunks: Sequence[Chunk],
        progress_callback: ProgressCallback | None = None,
    ) -> list[EncodedChunk]:
        """Encode every chunk, then release the font model.

        The first encode failure aborts the whole run: pending encodes are
        cancelled and the codec's exception propagates unchanged.

        Args:
            model: Decoded source font; released once the last chunk is
                submitted. In parallel mode a copy is held until
                this method returns
            chunks: Chunks in partition order
            progress_callback: Optional callback(completed, total)

        Returns:
            Encoded chunks in the same order as ``chunks``
        """
        if self._max_workers == 1 or len(chunks) <= 1:
            return self._serialize_serial(model, chunks, progress_callback)
        return self._serialize_parallel(model, chunks, progress_callback)

    def _serialize_serial(
        self,
        model: FontModel,
        chunks: Sequence[Chunk],
        progress_callback: ProgressCallback | None,
    ) -> list[EncodedChunk]:
        total = len(chunks)
        encoded: list[EncodedChunk] = []
        try:
            for chunk in chunks:
                data = self._codec.encode(model, chunk.glyphs, self._target_format)
                encoded.append(EncodedChunk(chunk=chunk, data=data))
                if progress_callback is not None:
                    progress_callback(len(encoded), total)
        finally:
            model.release()
        return encoded

    def _serialize_parallel(
        self,
        model: FontModel,
        chunks: Sequence[Chunk],
        progress_callback: ProgressCallback | None,
    ) -> list[EncodedChunk]:
        total = len(chunks)
        # Workers get their own copy, unaffected by release() below. The pool
        # starts workers lazily and keeps the copy in its initializer arguments,
        # so it lives until this method returns.
        worker_model = replace(model)

        with ProcessPoolExecutor(
            max_workers=self._max_workers,
            initializer=_init_worker,
            initargs=(self._codec, worker_model),
        ) as executor:
            futures = [
                executor.submit(encode_chunk, chunk.glyphs, self._target_format)
                for chunk in chunks
            ]
            model.release()

            try:
                for completed, future in enumerate(as_completed(futures), start=1):
                    future.result()
                    if progress_callback is not None:
                        progress_callback(completed, total)
            except BaseException:
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return [
            EncodedChunk(chunk=chunk, data=future.result())
            for chunk, future in zip(chunks, futures)
        ]
