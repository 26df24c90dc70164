"""Chunk representations at each step of materialization."""

from dataclasses import dataclass, field

from fontslicer.domain.glyph import Glyph

# File extension per target format tag
FORMAT_EXTENSIONS: dict[str, str] = {
    "ttf": "ttf",
    "otf": "otf",
    "woff": "woff",
    "woff2": "woff2",
}


def collect_unicodes(glyphs: tuple[Glyph, ...]) -> tuple[int, ...]:
    """Union of the glyphs' code points, deduplicated in first-seen order."""
    seen: dict[int, None] = {}
    for glyph in glyphs:
        for code_point in glyph.unicodes:
            seen.setdefault(code_point, None)
    return tuple(seen)


@dataclass(frozen=True)
class Chunk:
    """A consecutive run of ranked glyphs, excluding the void glyph.

    Attributes:
        index: Position of the chunk in partition order
        glyphs: Glyphs of the run, in ranked order
        unicodes: Code points covered by the run
    """

    index: int
    glyphs: tuple[Glyph, ...]
    unicodes: tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        if not self.glyphs:
            raise ValueError("Chunk must contain at least one glyph")
        object.__setattr__(self, "unicodes", collect_unicodes(self.glyphs))

    def __len__(self) -> int:
        return len(self.glyphs)


@dataclass(frozen=True)
class EncodedChunk:
    """A chunk together with its serialized font bytes."""

    chunk: Chunk
    data: bytes

    @property
    def index(self) -> int:
        return self.chunk.index

    @property
    def unicodes(self) -> tuple[int, ...]:
        return self.chunk.unicodes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ChunkArtifact:
    """A named chunk, as referenced by the stylesheet and report.

    Attributes:
        name: Content hash of the chunk bytes
        format: Target format tag
        size: Size of the chunk in bytes
        unicodes: Code points covered by the chunk
    """

    name: str
    format: str
    size: int
    unicodes: tuple[int, ...]

    @property
    def filename(self) -> str:
        """Canonical file name, ``<hash>.<ext>``."""
        return f"{self.name}.{FORMAT_EXTENSIONS[self.format]}"

    @property
    def characters(self) -> str:
        """Text made of the covered code points."""
        return "".join(chr(code_point) for code_point in self.unicodes)
