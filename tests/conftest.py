"""Shared fixtures: a fake codec with predictable sizes and generated fonts."""

from collections.abc import Sequence
from io import BytesIO
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from fontslicer.domain import FontMetadata, FontModel, Glyph
from fontslicer.exceptions import EncodeError

CJK_START = 0x4E00


def make_glyphs(count: int, start: int = CJK_START) -> list[Glyph]:
    """Void glyph followed by ``count`` glyphs mapped to consecutive code points."""
    glyphs = [Glyph(gid=0, name=".notdef")]
    glyphs.extend(
        Glyph(gid=gid, name=f"uni{start + gid - 1:04X}", unicodes=(start + gid - 1,))
        for gid in range(1, count + 1)
    )
    return glyphs


def make_model(
    glyphs: list[Glyph],
    byte_size: int = 500_000,
    metadata: FontMetadata | None = None,
) -> FontModel:
    """FontModel with a dummy payload."""
    return FontModel(
        source_format="ttf",
        byte_size=byte_size,
        metadata=metadata or FontMetadata(family="Test Sans", subfamily="Regular", weight_class=400),
        _glyphs=glyphs,
        _payload=b"payload",
    )


class FakeCodec:
    """Codec whose output size is ``overhead + per_glyph * glyphs``.

    The output starts with the encoded glyph ids, so different subsets give
    different bytes, and equal subsets give equal bytes.
    """

    def __init__(
        self,
        glyphs: list[Glyph] | None = None,
        overhead: int = 159,
        per_glyph: int = 552,
        fail_on_call: int | None = None,
        metadata: FontMetadata | None = None,
    ) -> None:
        self.glyphs = glyphs if glyphs is not None else make_glyphs(999)
        self.overhead = overhead
        self.per_glyph = per_glyph
        self.fail_on_call = fail_on_call
        self.metadata = metadata
        self.encode_calls: list[tuple[int, ...]] = []

    def decode(self, data: bytes, source_format: str, source: str = "<bytes>") -> FontModel:
        return make_model(list(self.glyphs), byte_size=len(data), metadata=self.metadata)

    def encode(self, model: FontModel, glyphs: Sequence[Glyph], target_format: str) -> bytes:
        ids = (model.void_glyph.gid, *(glyph.gid for glyph in glyphs))
        self.encode_calls.append(ids)
        if self.fail_on_call is not None and len(self.encode_calls) == self.fail_on_call:
            raise EncodeError(target_format, "rejected by fake codec")
        size = self.overhead + self.per_glyph * len(ids)
        header = ",".join(str(gid) for gid in ids).encode()
        return (header + b"\0" * size)[:size]


def _box_glyph(boxes: int):
    pen = TTGlyphPen(None)
    for index in range(boxes):
        x = 40 + index * 160
        pen.moveTo((x, 0))
        pen.lineTo((x, 700))
        pen.lineTo((x + 120, 700))
        pen.lineTo((x + 120, 0))
        pen.closePath()
    return pen.glyph()


def build_font(
    code_points: Sequence[int],
    unmapped: int = 2,
    family: str = "Slice Test",
    style: str = "Regular",
    weight: int = 400,
) -> bytes:
    """Build a TrueType font with one box glyph per code point.

    Glyph ``uniXXXX`` maps to its code point; ``space`` also maps to
    U+00A0 when U+0020 is present; ``extraN`` glyphs are unmapped.
    """
    glyph_order = [".notdef"]
    glyphs = {".notdef": _box_glyph(1)}
    cmap: dict[int, str] = {}

    for index, code_point in enumerate(code_points):
        name = "space" if code_point == 0x20 else f"uni{code_point:04X}"
        glyph_order.append(name)
        glyphs[name] = _box_glyph(0 if name == "space" else 1 + index % 3)
        cmap[code_point] = name
        if name == "space":
            cmap[0xA0] = name

    for index in range(unmapped):
        name = f"extra{index}"
        glyph_order.append(name)
        glyphs[name] = _box_glyph(2)

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics({name: (600, 40) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable(
        {
            "familyName": family,
            "styleName": style,
            "uniqueFontIdentifier": f"{family}-{style}",
            "fullName": f"{family} {style}",
            "version": "Version 1.000",
            "psName": f"{family.replace(' ', '')}-{style}",
        }
    )
    fb.setupOS2(
        sTypoAscender=800,
        sTypoDescender=-200,
        usWinAscent=800,
        usWinDescent=200,
        usWeightClass=weight,
    )
    fb.setupPost()

    buffer = BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


SAMPLE_CODE_POINTS = [0x20, *range(0x41, 0x5B), *range(0x61, 0x7B), *range(CJK_START, CJK_START + 240)]


@pytest.fixture
def fake_codec() -> FakeCodec:
    """Fake codec over 999 addressable glyphs."""
    return FakeCodec()


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    """A generated TrueType font with Latin and CJK code points."""
    return build_font(SAMPLE_CODE_POINTS)


@pytest.fixture
def font_file(tmp_path: Path, font_bytes: bytes) -> Path:
    """The generated font written to disk."""
    path = tmp_path / "SliceTest-Regular.ttf"
    path.write_bytes(font_bytes)
    return path
