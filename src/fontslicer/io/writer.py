"""Output writer for chunk files and text artifacts.

Chunk files are written concurrently, but ``write_chunks`` only returns
once every write has finished. A failed write raises PersistenceError, so
nothing downstream can reference a chunk whose bytes are not on disk.
"""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path

from fontslicer.domain import ChunkArtifact, EncodedChunk
from fontslicer.exceptions import PersistenceError

DEFAULT_WRITE_WORKERS = 8


class OutputWriter:
    """Writes pipeline outputs into a destination directory.

    Example:
        writer = OutputWriter(Path("build"))
        paths = writer.write_chunks(artifacts, encoded)
        writer.write_text("result.css", stylesheet)
    """

    def __init__(self, dest_dir: Path, max_workers: int = DEFAULT_WRITE_WORKERS) -> None:
        """Initialize the writer.

        Args:
            dest_dir: Directory receiving all outputs
            max_workers: Threads used for concurrent chunk writes
        """
        self._dest_dir = dest_dir
        self._max_workers = max_workers

    @property
    def dest_dir(self) -> Path:
        return self._dest_dir

    def ensure_dest_dir(self) -> None:
        """Create the destination directory if needed.

        Raises:
            PersistenceError: If the directory cannot be created
        """
        try:
            self._dest_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(str(self._dest_dir), str(e)) from e

    def write_chunks(
        self,
        artifacts: Sequence[ChunkArtifact],
        encoded: Sequence[EncodedChunk],
    ) -> list[Path]:
        """Write every chunk and wait for all writes to finish.

        Args:
            artifacts: Named chunks, in chunk order
            encoded: Chunk bytes matching ``artifacts`` one to one

        Returns:
            Written paths, in chunk order

        Raises:
            ValueError: If the two sequences differ in length
            PersistenceError: For the first failed write in chunk order
        """
        if len(artifacts) != len(encoded):
            raise ValueError(
                f"{len(artifacts)} artifacts but {len(encoded)} encoded chunks"
            )

        self.ensure_dest_dir()

        paths = [self._dest_dir / artifact.filename for artifact in artifacts]
        if not paths:
            return []

        # Identical bytes share a name; write each file once
        unique: dict[Path, bytes] = {}
        for path, chunk in zip(paths, encoded):
            unique.setdefault(path, chunk.data)

        workers = max(1, min(self._max_workers, len(unique)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                path: executor.submit(self._write_bytes, path, data)
                for path, data in unique.items()
            }
            wait(futures.values())

        for path in paths:
            futures[path].result()

        return paths

    def write_text(self, file_name: str, text: str) -> Path:
        """Write a UTF-8 text file into the destination directory.

        Raises:
            PersistenceError: If the file cannot be written
        """
        self.ensure_dest_dir()
        path = self._dest_dir / file_name
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(str(path), str(e)) from e
        return path

    @staticmethod
    def _write_bytes(path: Path, data: bytes) -> Path:
        try:
            path.write_bytes(data)
        except OSError as e:
            raise PersistenceError(str(path), str(e)) from e
        return path
