"""Font reader for loading source fonts.

This module provides the FontReader class for reading a font file from disk
and decoding it through a codec into a FontModel.
"""

from pathlib import Path

from fontslicer.domain import FontModel
from fontslicer.exceptions import DecodeError
from fontslicer.io.codec import FontCodec, FontToolsCodec


class FontReader:
    """Loads a source font file and decodes it.

    Example:
        reader = FontReader(Path("font.ttf"), "ttf")
        model = reader.load()
        print(model.metadata.family, model.glyph_count)
    """

    def __init__(
        self,
        font_path: Path,
        source_format: str,
        codec: FontCodec | None = None,
    ) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the source font file
            source_format: Declared format of the file
            codec: Codec used for decoding (defaults to FontToolsCodec)
        """
        self._font_path = font_path
        self._source_format = source_format
        self._codec = codec if codec is not None else FontToolsCodec()

    def read_bytes(self) -> bytes:
        """Read the raw font file.

        Raises:
            DecodeError: If the file is missing or unreadable
        """
        if not self._font_path.is_file():
            raise DecodeError(str(self._font_path), "file not found")

        try:
            return self._font_path.read_bytes()
        except OSError as e:
            raise DecodeError(str(self._font_path), str(e)) from e

    def load(self) -> FontModel:
        """Read and decode the font file.

        Returns:
            Decoded FontModel

        Raises:
            DecodeError: If the file cannot be read or decoded
        """
        data = self.read_bytes()
        return self._codec.decode(data, self._source_format, source=str(self._font_path))
