"""Configuration settings for Fontslicer."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class FontFormat(str, Enum):
    """Font container formats understood by the codec."""

    TTF = "ttf"
    OTF = "otf"
    WOFF = "woff"
    WOFF2 = "woff2"


class FontDisplay(str, Enum):
    """CSS ``font-display`` policies."""

    AUTO = "auto"
    BLOCK = "block"
    SWAP = "swap"
    FALLBACK = "fallback"
    OPTIONAL = "optional"


class FontStyle(str, Enum):
    """CSS ``font-style`` keywords."""

    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"


class CssConfig(BaseModel):
    """Configuration for the generated ``@font-face`` rules."""

    model_config = ConfigDict(frozen=True)

    family: str = Field(
        default="",
        description="CSS font-family (empty = family name from the font)",
    )
    weight: int | None = Field(
        default=None,
        ge=1,
        le=1000,
        description="CSS font-weight (None = weight class from the font)",
    )
    style: FontStyle = Field(
        default=FontStyle.NORMAL,
        description="CSS font-style",
    )
    display: FontDisplay = Field(
        default=FontDisplay.SWAP,
        description="CSS font-display policy",
    )


class ChunkingConfig(BaseModel):
    """Configuration for chunk estimation and encoding."""

    model_config = ConfigDict(frozen=True)

    chunk_size: int = Field(
        default=200 * 1024,
        ge=1024,
        description="Target byte size of each chunk",
    )
    target_format: FontFormat = Field(
        default=FontFormat.TTF,
        description="Format of the generated chunk files",
    )
    max_workers: int | None = Field(
        default=1,
        ge=1,
        description="Encoder worker processes (1 = in-process, None = auto)",
    )
    priority_file: Path | None = Field(
        default=None,
        description="Character priority list (JSON or plain text); None = built-in list",
    )


class OutputConfig(BaseModel):
    """Configuration for files written next to the chunks."""

    model_config = ConfigDict(frozen=True)

    dest_dir: Path = Field(
        default=Path("./build"),
        description="Output directory",
    )
    css_file_name: str = Field(
        default="result",
        min_length=1,
        description="Base name of the generated stylesheet",
    )
    test_html: bool = Field(
        default=True,
        description="Write an index.html preview page",
    )
    reporter: bool = Field(
        default=True,
        description="Write a reporter.json summary",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SplitSettings(BaseModel):
    """Settings for one split run. Validated once and never mutated."""

    model_config = ConfigDict(frozen=True)

    font_path: Path
    source_format: FontFormat = Field(
        default=FontFormat.TTF,
        description="Format of the source font",
    )
    css: CssConfig = Field(default_factory=CssConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings(font_path: Path) -> SplitSettings:
    """Get default settings for splitting ``font_path``."""
    return SplitSettings(font_path=font_path)
