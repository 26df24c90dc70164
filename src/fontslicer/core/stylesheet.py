"""Stylesheet generation.

One ``@font-face`` rule is emitted per chunk, in chunk order. Browsers only
download a chunk when the page uses a code point from its ``unicode-range``,
and the rule order hints which chunks are likely needed first.
"""

from collections.abc import Sequence

from fontslicer.config import CssConfig
from fontslicer.domain import ChunkArtifact, FontMetadata

# CSS format() hint per target format
CSS_FORMATS: dict[str, str] = {
    "ttf": "truetype",
    "otf": "opentype",
    "woff": "woff",
    "woff2": "woff2",
}

DEFAULT_WEIGHT = 400


def format_unicode_range(unicodes: Sequence[int]) -> str:
    """Render code points as a comma-separated ``U+XXXX`` list."""
    return ",".join(f"U+{code_point:X}" for code_point in unicodes)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _comment_safe(value: object) -> str:
    return str(value).replace("*/", "* /")


class StylesheetGenerator:
    """Builds the stylesheet that maps Unicode ranges to chunk files.

    Example:
        generator = StylesheetGenerator(settings.css)
        css = generator.render(artifacts, model.metadata)
    """

    def __init__(self, css: CssConfig) -> None:
        self._css = css

    def resolve_family(self, metadata: FontMetadata) -> str:
        """Configured family, else the font's own family name."""
        return self._css.family or metadata.css_family

    def resolve_weight(self, metadata: FontMetadata) -> int:
        """Configured weight, else the font's weight class, else 400."""
        if self._css.weight is not None:
            return self._css.weight
        if metadata.weight_class:
            return metadata.weight_class
        return DEFAULT_WEIGHT

    def render_header(self, metadata: FontMetadata) -> str:
        """Comment block listing the font metadata."""
        lines = [f"{key}: {_comment_safe(value)}" for key, value in metadata.iter_fields()]
        return "/*\n" + "\n".join(lines) + "\n */\n\n"

    def render_rule(
        self,
        artifact: ChunkArtifact,
        family: str,
        weight: int,
    ) -> str:
        """One ``@font-face`` rule for a chunk."""
        return (
            "@font-face {\n"
            f"    font-family: {_quote(family)};\n"
            f'    src: url("./{artifact.filename}") format("{CSS_FORMATS[artifact.format]}");\n'
            f"    font-style: {self._css.style.value};\n"
            f"    font-weight: {weight};\n"
            f"    font-display: {self._css.display.value};\n"
            f"    unicode-range: {format_unicode_range(artifact.unicodes)};\n"
            "}"
        )

    def render(self, artifacts: Sequence[ChunkArtifact], metadata: FontMetadata) -> str:
        """Render the full stylesheet.

        Chunks without any code point get no rule: an empty ``unicode-range``
        is invalid and would make browsers apply the chunk to every character.

        Args:
            artifacts: Named chunks in chunk order
            metadata: Metadata of the source font

        Returns:
            Stylesheet text
        """
        family = self.resolve_family(metadata)
        weight = self.resolve_weight(metadata)
        rules = [
            self.render_rule(artifact, family, weight)
            for artifact in artifacts
            if artifact.unicodes
        ]
        return self.render_header(metadata) + "\n".join(rules) + "\n"
