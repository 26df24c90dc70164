"""Pipeline orchestration for font splitting.

This module sequences the split stages. Each stage runs to completion,
including the chunk writes it dispatches, before the next one starts.

Stages:
1. decode - Read and decode the source font
2. rank - Order glyphs by character priority
3. estimate - Calibrate glyphs per chunk from an encoded sample
4. partition - Cut the ranked glyphs into chunks
5. serialize - Encode every chunk (the font model is released here)
6. name - Derive content-addressed file names
7. persist - Write chunk files and wait for all writes
8. stylesheet - Write the ``@font-face`` stylesheet
9. preview - Write the HTML preview page (optional)
10. report - Write the JSON report (optional)
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

import structlog

from fontslicer.config import SplitSettings
from fontslicer.core.estimator import ChunkEstimate, ChunkSizeEstimator
from fontslicer.core.naming import name_chunks
from fontslicer.core.partitioner import partition_glyphs
from fontslicer.core.priority import PriorityList
from fontslicer.core.ranker import rank_glyphs
from fontslicer.core.serializer import ChunkSerializer, ProgressCallback
from fontslicer.core.stylesheet import StylesheetGenerator
from fontslicer.domain import ChunkArtifact, FontMetadata, FontModel, Glyph
from fontslicer.exceptions import FontSlicerError, PriorityError
from fontslicer.io import (
    PREVIEW_FILE_NAME,
    REPORT_FILE_NAME,
    FontCodec,
    FontReader,
    FontToolsCodec,
    OutputWriter,
    PreviewRenderer,
    build_report,
    render_report,
)
from fontslicer.utils import SplitLogger, SplitStats

T = TypeVar("T")


@dataclass
class SplitResult:
    """Outcome of a successful split run.

    Attributes:
        artifacts: Named chunks in chunk order
        chunk_paths: Written chunk files, in chunk order
        estimate: Chunk length calibration details
        metadata: Metadata of the source font
        family: CSS font-family used in the stylesheet
        stylesheet_path: Path of the written stylesheet
        preview_path: Path of the preview page, if written
        report_path: Path of the JSON report, if written
        stats: Per-stage timings and totals
    """

    artifacts: list[ChunkArtifact]
    chunk_paths: list[Path]
    estimate: ChunkEstimate
    metadata: FontMetadata
    family: str
    stylesheet_path: Path
    preview_path: Path | None = None
    report_path: Path | None = None
    stats: SplitStats = field(default_factory=SplitStats)

    @property
    def timings(self) -> dict[str, float]:
        """Stage durations in milliseconds, in execution order."""
        return dict(self.stats.stage_timings_ms)

    @property
    def total_bytes(self) -> int:
        return sum(artifact.size for artifact in self.artifacts)

    @property
    def duration_seconds(self) -> float:
        return self.stats.duration_seconds


class FontSplitter:
    """Orchestrates a complete split run.

    Example:
        settings = SplitSettings(font_path=Path("font.ttf"))
        result = FontSplitter(settings).split()
        print(result.stylesheet_path, len(result.artifacts))
    """

    def __init__(
        self,
        settings: SplitSettings,
        codec: FontCodec | None = None,
        priority: PriorityList | None = None,
        logger: Any = None,
    ) -> None:
        """Initialize the splitter.

        Args:
            settings: Validated settings for the run
            codec: Font codec (defaults to FontToolsCodec)
            priority: Character priority (defaults to the configured
                priority file, else the built-in list)
            logger: structlog logger (defaults to the "fontslicer" logger)

        Raises:
            PriorityError: If the configured priority file is unusable
        """
        self.settings = settings
        self.codec: FontCodec = codec if codec is not None else FontToolsCodec()
        self.logger = logger if logger is not None else structlog.get_logger("fontslicer")
        self.priority = priority if priority is not None else self._load_priority()

    @property
    def target_format(self) -> str:
        return self.settings.chunking.target_format.value

    def split(self, progress_callback: ProgressCallback | None = None) -> SplitResult:
        """Run every stage in order.

        Args:
            progress_callback: Optional callback(completed, total) for chunk encoding

        Returns:
            SplitResult describing the written outputs

        Raises:
            FontSlicerError: Subclass matching the failed stage, with its
                ``stage`` attribute set
            Exception: Any other failure, re-raised unchanged
        """
        split_logger = SplitLogger(self.logger)
        stats = split_logger.stats
        stats.start_time = time.time()

        settings = self.settings
        target_format = self.target_format
        writer = OutputWriter(settings.output.dest_dir)
        stylesheet = StylesheetGenerator(settings.css)

        self.logger.info(
            "Starting font split",
            input=str(settings.font_path),
            output=str(settings.output.dest_dir),
            target_format=target_format,
            chunk_size=settings.chunking.chunk_size,
        )

        model = self._run_stage(split_logger, "decode", self._decode)
        split_logger.log_font_loaded(
            family=model.metadata.css_family,
            glyph_count=model.glyph_count,
            byte_size=model.byte_size,
        )
        metadata = model.metadata

        ranked = self._run_stage(split_logger, "rank", self._rank, model.addressable_glyphs)

        estimator = ChunkSizeEstimator(self.codec, target_format)
        estimate = self._run_stage(
            split_logger,
            "estimate",
            estimator.estimate,
            model,
            ranked,
            settings.chunking.chunk_size,
        )
        split_logger.log_estimate(
            bytes_per_glyph=estimate.bytes_per_glyph,
            sample_length=estimate.sample_length,
            sample_encoded_size=estimate.sample_encoded_size,
            chunk_length=estimate.chunk_length,
        )

        chunks = self._run_stage(
            split_logger, "partition", partition_glyphs, ranked, estimate.chunk_length
        )
        del ranked

        serializer = ChunkSerializer(
            self.codec,
            target_format,
            max_workers=settings.chunking.max_workers,
        )
        encoded = self._run_stage(
            split_logger, "serialize", serializer.serialize, model, chunks, progress_callback
        )
        # The serializer released the model; drop the last reference
        del model, chunks

        artifacts = self._run_stage(split_logger, "name", name_chunks, encoded, target_format)

        chunk_paths = self._run_stage(
            split_logger, "persist", writer.write_chunks, artifacts, encoded
        )
        del encoded
        for index, artifact in enumerate(artifacts):
            split_logger.log_chunk_written(index, artifact.name, artifact.size)
            if not artifact.unicodes:
                split_logger.log_chunk_skipped(index, artifact.name, "no code points")

        stylesheet_path = self._run_stage(
            split_logger,
            "stylesheet",
            self._write_stylesheet,
            writer,
            stylesheet,
            artifacts,
            metadata,
        )

        family = stylesheet.resolve_family(metadata)

        preview_path = None
        if settings.output.test_html:
            preview_path = self._run_stage(
                split_logger,
                "preview",
                self._write_preview,
                writer,
                family,
                stylesheet_path.name,
                artifacts,
            )

        report_path = None
        if settings.output.reporter:
            report_path = self._run_stage(
                split_logger, "report", self._write_report, writer, metadata, artifacts
            )

        stats.end_time = time.time()
        self.logger.info(
            "Split complete",
            chunks=stats.chunk_count,
            total_bytes=stats.total_bytes,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return SplitResult(
            artifacts=artifacts,
            chunk_paths=chunk_paths,
            estimate=estimate,
            metadata=metadata,
            family=family,
            stylesheet_path=stylesheet_path,
            preview_path=preview_path,
            report_path=report_path,
            stats=stats,
        )

    def _run_stage(
        self,
        split_logger: SplitLogger,
        stage: str,
        func: Callable[..., T],
        *args: Any,
    ) -> T:
        """Run one stage, timing it and tagging any failure with its name."""
        split_logger.log_stage_start(stage)
        start = time.perf_counter()
        try:
            result = func(*args)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            if isinstance(e, FontSlicerError) and e.stage is None:
                e.stage = stage
            split_logger.log_stage_failed(stage, e, duration_ms)
            raise
        split_logger.log_stage_complete(stage, (time.perf_counter() - start) * 1000)
        return result

    def _decode(self) -> FontModel:
        reader = FontReader(
            self.settings.font_path,
            self.settings.source_format.value,
            codec=self.codec,
        )
        return reader.load()

    def _load_priority(self) -> PriorityList:
        priority_file = self.settings.chunking.priority_file
        if priority_file is None:
            return PriorityList.default()
        try:
            return PriorityList.load(priority_file)
        except PriorityError as e:
            self.logger.error("Priority file rejected", path=e.path, error=e.reason)
            raise

    def _rank(self, glyphs: list[Glyph]) -> list[Glyph]:
        return rank_glyphs(glyphs, self.priority)

    def _write_stylesheet(
        self,
        writer: OutputWriter,
        stylesheet: StylesheetGenerator,
        artifacts: list[ChunkArtifact],
        metadata: FontMetadata,
    ) -> Path:
        css = stylesheet.render(artifacts, metadata)
        return writer.write_text(f"{self.settings.output.css_file_name}.css", css)

    def _write_preview(
        self,
        writer: OutputWriter,
        family: str,
        css_file: str,
        artifacts: list[ChunkArtifact],
    ) -> Path:
        html = PreviewRenderer().render(family, css_file, artifacts)
        return writer.write_text(PREVIEW_FILE_NAME, html)

    def _write_report(
        self,
        writer: OutputWriter,
        metadata: FontMetadata,
        artifacts: list[ChunkArtifact],
    ) -> Path:
        report = build_report(self.settings, metadata, artifacts)
        return writer.write_text(REPORT_FILE_NAME, render_report(report))
