"""Glyph, font metadata and in-memory font representation.

This module defines the domain model the codec hands to the pipeline: an
ordered glyph table whose first entry is the void glyph, the font-level
metadata used by the stylesheet and report, and an opaque payload that only
the codec knows how to re-encode.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class Glyph:
    """A single glyph record.

    Attributes:
        gid: Index of the glyph in the source glyph order
        name: Glyph name (e.g., ".notdef", "A", "uni4E00")
        unicodes: Code points mapped to this glyph, ascending (may be empty)
    """

    gid: int
    name: str
    unicodes: tuple[int, ...] = ()

    @property
    def first_unicode(self) -> int | None:
        """Get the code point that decides the glyph's priority."""
        return self.unicodes[0] if self.unicodes else None


@dataclass(frozen=True)
class FontMetadata:
    """Font-level naming and style information.

    String fields mirror the OpenType ``name`` table; empty strings mean the
    record is absent.
    """

    copyright: str = ""
    family: str = ""
    subfamily: str = ""
    unique_id: str = ""
    full_name: str = ""
    version: str = ""
    postscript_name: str = ""
    trademark: str = ""
    manufacturer: str = ""
    designer: str = ""
    description: str = ""
    vendor_url: str = ""
    designer_url: str = ""
    license: str = ""
    license_url: str = ""
    typographic_family: str = ""
    typographic_subfamily: str = ""
    weight_class: int | None = None
    italic: bool = False

    @property
    def css_family(self) -> str:
        """Family name to use in CSS when none is configured."""
        return self.typographic_family or self.family

    def iter_fields(self) -> Iterator[tuple[str, Any]]:
        """Iterate over populated fields in declaration order."""
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None or value == "":
                continue
            yield item.name, value

    def to_dict(self) -> dict[str, Any]:
        """Serialize populated fields to a dictionary."""
        return dict(self.iter_fields())


@dataclass
class FontModel:
    """Decoded font owned by the pipeline for the duration of one run.

    The payload is whatever the codec needs to re-encode glyph subsets; the
    pipeline never looks inside it. ``release()`` ends the model's life once
    the last chunk has been handed to the encoder.

    Attributes:
        source_format: Format tag of the source font
        byte_size: Size of the source font file in bytes
        metadata: Font-level metadata
    """

    source_format: str
    byte_size: int
    metadata: FontMetadata
    _glyphs: list[Glyph] | None = field(default=None, repr=False)
    _payload: Any = field(default=None, repr=False)

    @property
    def released(self) -> bool:
        """Whether ``release()`` has been called."""
        return self._glyphs is None

    @property
    def glyphs(self) -> list[Glyph]:
        """All glyphs in source order, void glyph first."""
        if self._glyphs is None:
            raise RuntimeError("Font model has been released")
        return self._glyphs

    @property
    def payload(self) -> Any:
        """Codec-specific font data."""
        if self._glyphs is None:
            raise RuntimeError("Font model has been released")
        return self._payload

    @property
    def void_glyph(self) -> Glyph:
        """The mandatory placeholder glyph at index 0."""
        return self.glyphs[0]

    @property
    def addressable_glyphs(self) -> list[Glyph]:
        """All glyphs except the void glyph, in source order."""
        return self.glyphs[1:]

    @property
    def glyph_count(self) -> int:
        return len(self.glyphs)

    def release(self) -> None:
        """Drop the glyph table and payload."""
        self._glyphs = None
        self._payload = None
