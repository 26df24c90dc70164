"""HTML preview page rendering."""

from collections.abc import Sequence

from jinja2 import Environment, PackageLoader, Template, select_autoescape

from fontslicer.domain import ChunkArtifact

PREVIEW_FILE_NAME = "index.html"
PREVIEW_TEMPLATE = "preview.html"

# Number of covered characters shown as sample text
SAMPLE_LENGTH = 200


def css_string(value: str) -> str:
    """Quote a value as a CSS string literal.

    HTML escaping still applies on output, so the result is only safe in
    attribute values, where the browser unescapes it before parsing CSS.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\a ")
    return f'"{escaped}"'


class PreviewRenderer:
    """Renders a page that loads the stylesheet and shows the font in use."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=PackageLoader("fontslicer", "templates"),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["css_string"] = css_string
        self.template: Template = self.env.get_template(PREVIEW_TEMPLATE)

    def render(
        self,
        family: str,
        css_file: str,
        artifacts: Sequence[ChunkArtifact],
    ) -> str:
        """Render the preview page.

        Args:
            family: CSS font-family used in the stylesheet
            css_file: Stylesheet file name, relative to the page
            artifacts: Chunks listed on the page, in chunk order

        Returns:
            HTML document
        """
        sample_text = "".join(
            artifact.characters for artifact in artifacts
        )[:SAMPLE_LENGTH]
        return self.template.render(
            family=family,
            css_file=css_file,
            chunks=list(artifacts),
            total_size=sum(artifact.size for artifact in artifacts),
            sample_text=sample_text,
        )
