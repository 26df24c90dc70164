"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from fontslicer.domain import ChunkArtifact

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for chunk encoding.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def format_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form (e.g., "428 KB")."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]Fontslicer[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, source_format: str, size_bytes: int, target_format: str) -> None:
    """Print source font information.

    Args:
        font_path: Path to the font file
        source_format: Format of the source font
        size_bytes: Size of the source font in bytes
        target_format: Format of the chunk files
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(font_path)
    line.append(f" ({source_format}, {format_size(size_bytes)})")
    console.print(line)
    console.print(f"  chunks as {target_format}")


def print_estimate(chunk_length: int, sample_length: int, sample_bytes: int, budget: int) -> None:
    """Print the chunk length calibration."""
    console.print(
        f"  sample {sample_length} glyphs = {format_size(sample_bytes)} "
        f"{SYM_DOT} {chunk_length} glyphs per {format_size(budget)} chunk"
    )


def print_chunks(artifacts: Sequence[ChunkArtifact]) -> None:
    """Print a table of written chunks."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("File")
    table.add_column("Size", justify="right")
    table.add_column("Chars", justify="right")
    for index, artifact in enumerate(artifacts):
        table.add_row(
            str(index),
            artifact.filename[:16] + "…",
            format_size(artifact.size),
            str(len(artifact.unicodes)),
        )
    console.print(table)


def print_timings(timings: dict[str, float]) -> None:
    """Print per-stage durations."""
    parts = [f"{stage} {_format_time(ms / 1000)}" for stage, ms in timings.items()]
    console.print(f"  {f' {SYM_DOT} '.join(parts)}")


def print_success(
    dest_dir: str,
    stylesheet: str,
    chunk_count: int,
    total_bytes: int,
    total_time_s: float,
) -> None:
    """Print success message with summary.

    Args:
        dest_dir: Output directory
        stylesheet: Stylesheet file name
        chunk_count: Number of chunks written
        total_bytes: Combined size of all chunks
        total_time_s: Total run time in seconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    line = Text("  ")
    line.append(dest_dir, style="bold")
    line.append(f" {SYM_DOT} {stylesheet}")
    console.print(line)

    console.print(f"  {chunk_count} chunks {SYM_DOT} {format_size(total_bytes)}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print("  Output directory may contain partial results")
