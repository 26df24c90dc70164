"""Font codec: decode font binaries and re-encode glyph subsets.

The pipeline only depends on the ``FontCodec`` protocol. ``FontToolsCodec``
is the production implementation built on fonttools; tests substitute fakes
with predictable output sizes.
"""

from collections.abc import Sequence
from io import BytesIO
from typing import Protocol, runtime_checkable

from fontTools.subset import Options, Subsetter
from fontTools.ttLib import TTFont

from fontslicer.config import FontFormat
from fontslicer.domain import FontMetadata, FontModel, Glyph
from fontslicer.exceptions import DecodeError, EncodeError

# Leading bytes of each container format
SIGNATURES: dict[bytes, str] = {
    b"\x00\x01\x00\x00": "ttf",
    b"true": "ttf",
    b"OTTO": "otf",
    b"wOFF": "woff",
    b"wOF2": "woff2",
}

# TTFont.flavor per target format (None = plain sfnt)
FLAVORS: dict[str, str | None] = {
    "ttf": None,
    "otf": None,
    "woff": "woff",
    "woff2": "woff2",
}

# Name table IDs, in FontMetadata field order
NAME_FIELDS: dict[int, str] = {
    0: "copyright",
    1: "family",
    2: "subfamily",
    3: "unique_id",
    4: "full_name",
    5: "version",
    6: "postscript_name",
    7: "trademark",
    8: "manufacturer",
    9: "designer",
    10: "description",
    11: "vendor_url",
    12: "designer_url",
    13: "license",
    14: "license_url",
    16: "typographic_family",
    17: "typographic_subfamily",
}


@runtime_checkable
class FontCodec(Protocol):
    """Capability interface for turning bytes into a FontModel and back."""

    def decode(
        self, data: bytes, source_format: str, source: str = "<bytes>"
    ) -> FontModel:
        """Parse a font binary into a FontModel.

        Raises:
            DecodeError: If the data is not a readable font of that format
        """
        ...

    def encode(
        self, model: FontModel, glyphs: Sequence[Glyph], target_format: str
    ) -> bytes:
        """Serialize the void glyph plus ``glyphs`` into a standalone font.

        Raises:
            EncodeError: If the subset cannot be serialized
        """
        ...


def normalize_format(fmt: str | FontFormat) -> str:
    """Return the plain format tag for ``fmt``.

    Raises:
        ValueError: If the tag is not a supported format
    """
    return FontFormat(fmt).value


def sniff_format(data: bytes) -> str | None:
    """Detect the container format from the file signature.

    Returns:
        Format tag, or None if the signature is unknown
    """
    return SIGNATURES.get(bytes(data[:4]))


def _subset_options() -> Options:
    """Subsetter options for chunk encoding.

    Layout closure is disabled so that a chunk never pulls in glyphs that
    belong to another chunk.
    """
    options = Options()
    options.glyph_names = True
    options.notdef_glyph = True
    options.notdef_outline = True
    options.layout_closure = False
    options.layout_features = ["*"]
    options.name_IDs = ["*"]
    options.name_languages = ["*"]
    options.name_legacy = True
    options.hinting = True
    options.recalc_timestamp = False
    return options


def _extract_metadata(font: TTFont) -> FontMetadata:
    values: dict[str, object] = {}

    if "name" in font:
        name_table = font["name"]
        for name_id, field_name in NAME_FIELDS.items():
            value = name_table.getDebugName(name_id)
            if value:
                values[field_name] = value

    if "OS/2" in font:
        os2 = font["OS/2"]
        values["weight_class"] = int(os2.usWeightClass)
        values["italic"] = bool(os2.fsSelection & 0x01)
    elif "head" in font:
        values["italic"] = bool(font["head"].macStyle & 0x02)

    return FontMetadata(**values)  # type: ignore[arg-type]


def _extract_glyphs(font: TTFont) -> list[Glyph]:
    # A chunk of unmapped glyphs may come back without a cmap table
    cmap = font.getBestCmap() if "cmap" in font else None
    unicodes_by_name: dict[str, list[int]] = {}
    for code_point, glyph_name in (cmap or {}).items():
        unicodes_by_name.setdefault(glyph_name, []).append(code_point)

    return [
        Glyph(
            gid=gid,
            name=name,
            unicodes=tuple(sorted(unicodes_by_name.get(name, ()))),
        )
        for gid, name in enumerate(font.getGlyphOrder())
    ]


def _check_outline_format(font: TTFont, target_format: str) -> None:
    has_cff = "CFF " in font or "CFF2" in font
    if target_format == "otf" and not has_cff:
        raise EncodeError(target_format, "font has TrueType outlines, use ttf")
    if target_format == "ttf" and has_cff:
        raise EncodeError(target_format, "font has CFF outlines, use otf")


class FontToolsCodec:
    """Codec backed by fonttools.

    The decoded payload is the original font binary. Each encode reloads it
    into a fresh TTFont, so encodes share no mutable state and can run in
    separate worker processes.

    Example:
        codec = FontToolsCodec()
        model = codec.decode(Path("font.ttf").read_bytes(), "ttf")
        data = codec.encode(model, model.addressable_glyphs[:100], "woff2")
    """

    def decode(
        self, data: bytes, source_format: str, source: str = "<bytes>"
    ) -> FontModel:
        """Parse a font binary into a FontModel.

        Args:
            data: Font file contents
            source_format: Declared format of the data
            source: Label used in error messages (usually the file path)

        Returns:
            FontModel whose first glyph is the void glyph

        Raises:
            DecodeError: If the format is unknown, the signature does not
                match the declared format, or fonttools cannot parse it
        """
        try:
            declared = normalize_format(source_format)
        except ValueError:
            raise DecodeError(source, f"unsupported source format '{source_format}'") from None

        detected = sniff_format(data)
        if detected is None:
            raise DecodeError(source, "unrecognized font signature")
        if detected != declared:
            raise DecodeError(
                source, f"declared as {declared} but data looks like {detected}"
            )

        try:
            with TTFont(BytesIO(data), recalcTimestamp=False) as font:
                glyphs = _extract_glyphs(font)
                metadata = _extract_metadata(font)
        except Exception as e:
            raise DecodeError(source, str(e)) from e

        if not glyphs:
            raise DecodeError(source, "font has no glyphs")

        return FontModel(
            source_format=declared,
            byte_size=len(data),
            metadata=metadata,
            _glyphs=glyphs,
            _payload=bytes(data),
        )

    def encode(
        self, model: FontModel, glyphs: Sequence[Glyph], target_format: str
    ) -> bytes:
        """Serialize the void glyph plus ``glyphs`` into a standalone font.

        Args:
            model: Decoded source font
            glyphs: Glyphs to keep, void glyph excluded
            target_format: Format of the produced binary

        Returns:
            Font binary in the target format

        Raises:
            EncodeError: If the format is unsupported or fonttools fails
        """
        try:
            fmt = normalize_format(target_format)
        except ValueError:
            raise EncodeError(str(target_format), "unsupported target format") from None

        glyph_names = [model.void_glyph.name, *(glyph.name for glyph in glyphs)]

        try:
            font = TTFont(BytesIO(model.payload), recalcTimestamp=False)
        except Exception as e:
            raise EncodeError(fmt, f"cannot reload source font: {e}") from e

        try:
            _check_outline_format(font, fmt)

            subsetter = Subsetter(options=_subset_options())
            subsetter.populate(glyphs=glyph_names)
            subsetter.subset(font)

            font.flavor = FLAVORS[fmt]
            buffer = BytesIO()
            font.save(buffer)
            return buffer.getvalue()
        except EncodeError:
            raise
        except Exception as e:
            raise EncodeError(fmt, str(e)) from e
        finally:
            font.close()
