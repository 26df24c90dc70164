"""JSON report of a split run."""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from fontslicer.config import SplitSettings
from fontslicer.domain import ChunkArtifact, FontMetadata

REPORT_FILE_NAME = "reporter.json"


class ChunkRecord(BaseModel):
    """One chunk as listed in the report."""

    name: str = Field(description="Content hash of the chunk")
    size: int = Field(description="Chunk size in bytes")
    characters: str = Field(description="Characters covered by the chunk")


class SplitReport(BaseModel):
    """Report written next to the chunks."""

    config: dict[str, Any] = Field(description="Settings of the run")
    message: dict[str, Any] = Field(description="Font metadata")
    data: list[ChunkRecord] = Field(default_factory=list)


def build_report(
    settings: SplitSettings,
    metadata: FontMetadata,
    artifacts: Sequence[ChunkArtifact],
) -> SplitReport:
    """Assemble the report for a finished run."""
    return SplitReport(
        config=settings.model_dump(mode="json"),
        message=metadata.to_dict(),
        data=[
            ChunkRecord(
                name=artifact.name,
                size=artifact.size,
                characters=artifact.characters,
            )
            for artifact in artifacts
        ],
    )


def render_report(report: SplitReport) -> str:
    """Serialize the report as indented JSON."""
    return report.model_dump_json(indent=2)
