"""Logging utilities for Fontslicer."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class SplitStats:
    """Statistics from one split run."""

    stage_timings_ms: dict[str, float] = field(default_factory=dict)
    failed_stage: str | None = None
    chunk_count: int = 0
    total_bytes: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(
        logging.ERROR if quiet else getattr(logging, console_level.upper())
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("fontslicer")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class SplitLogger:
    """Logger for tracking pipeline stages and run statistics.

    A new SplitLogger is created for every run, so its statistics never
    leak between runs.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = SplitStats()

    def log_stage_start(self, stage: str) -> None:
        """Log start of a pipeline stage."""
        self._logger.debug("Stage started", stage=stage)

    def log_stage_complete(self, stage: str, duration_ms: float) -> None:
        """Log successful completion of a stage."""
        self._logger.info("Stage complete", stage=stage, duration_ms=round(duration_ms, 2))
        self._stats.stage_timings_ms[stage] = duration_ms

    def log_stage_failed(self, stage: str, error: BaseException, duration_ms: float) -> None:
        """Log a stage failure."""
        self._logger.error(
            "Stage failed",
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.stage_timings_ms[stage] = duration_ms
        self._stats.failed_stage = stage

    def log_font_loaded(self, family: str, glyph_count: int, byte_size: int) -> None:
        """Log decoded font details."""
        self._logger.info(
            "Font loaded",
            family=family,
            glyphs=glyph_count,
            bytes=byte_size,
        )

    def log_estimate(
        self,
        bytes_per_glyph: float,
        sample_length: int,
        sample_encoded_size: int,
        chunk_length: int,
    ) -> None:
        """Log chunk length calibration."""
        self._logger.info(
            "Chunk length estimated",
            bytes_per_glyph=round(bytes_per_glyph, 2),
            sample_length=sample_length,
            sample_bytes=sample_encoded_size,
            chunk_length=chunk_length,
        )

    def log_chunk_written(self, index: int, name: str, size: int) -> None:
        """Log a persisted chunk."""
        self._logger.debug("Chunk written", index=index, name=name[:10], size=size)
        self._stats.chunk_count += 1
        self._stats.total_bytes += size

    def log_chunk_skipped(self, index: int, name: str, reason: str) -> None:
        """Log a chunk left out of the stylesheet."""
        self._logger.warning("Chunk has no stylesheet rule", index=index, name=name[:10], reason=reason)

    @property
    def stats(self) -> SplitStats:
        """Get current run statistics."""
        return self._stats
