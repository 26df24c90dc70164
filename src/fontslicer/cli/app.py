"""CLI application entry point for fontslicer.

This module provides the main CLI interface using Typer.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from pydantic import ValidationError

from fontslicer import __version__
from fontslicer.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_chunks,
    print_error,
    print_estimate,
    print_font_info,
    print_header,
    print_step,
    print_success,
    print_timings,
)
from fontslicer.config import (
    ChunkingConfig,
    CssConfig,
    FontDisplay,
    FontFormat,
    FontStyle,
    LoggingConfig,
    OutputConfig,
    SplitSettings,
)
from fontslicer.core import FontSplitter, SplitResult
from fontslicer.exceptions import FontSlicerError
from fontslicer.utils import configure_logging

E = TypeVar("E", bound=Enum)

# Create the Typer app
app = typer.Typer(
    name="fontslicer",
    help="Split a font into size-bounded chunks with a unicode-range stylesheet.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Fontslicer[/bold blue] v{__version__}")
        raise typer.Exit()


def _parse_choice(enum_type: type[E], value: str, option: str) -> E:
    """Convert an option string to its enum, exiting with a message if invalid."""
    try:
        return enum_type(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_type)
        print_error(f"Invalid {option}: {value}", details=f"Valid values: {valid}")
        raise typer.Exit(code=1) from None


@app.command()
def split(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to the source font file",
            show_default=False,
        ),
    ],
    dest: Annotated[
        Path,
        typer.Option(
            "--dest",
            "-d",
            help="Output directory",
        ),
    ] = Path("./build"),
    source_format: Annotated[
        str,
        typer.Option(
            "--source-format",
            "-s",
            help="Source font format (ttf|otf|woff|woff2)",
        ),
    ] = "ttf",
    target_format: Annotated[
        str,
        typer.Option(
            "--target",
            "-t",
            help="Chunk font format (ttf|otf|woff|woff2)",
        ),
    ] = "ttf",
    family: Annotated[
        str,
        typer.Option(
            "--family",
            help="CSS font-family (default: family name from the font)",
        ),
    ] = "",
    weight: Annotated[
        int | None,
        typer.Option(
            "--weight",
            help="CSS font-weight (default: weight class from the font)",
            min=1,
            max=1000,
        ),
    ] = None,
    style: Annotated[
        str,
        typer.Option(
            "--style",
            help="CSS font-style (normal|italic|oblique)",
        ),
    ] = "normal",
    display: Annotated[
        str,
        typer.Option(
            "--display",
            help="CSS font-display (auto|block|swap|fallback|optional)",
        ),
    ] = "swap",
    css_name: Annotated[
        str,
        typer.Option(
            "--css-name",
            help="Stylesheet file name without extension",
        ),
    ] = "result",
    chunk_size: Annotated[
        int,
        typer.Option(
            "--chunk-size",
            "-c",
            help="Target chunk size in bytes",
            min=1024,
        ),
    ] = 200 * 1024,
    priority: Annotated[
        Path | None,
        typer.Option(
            "--priority",
            "-p",
            help="Character priority file (JSON array or plain text)",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    no_html: Annotated[
        bool,
        typer.Option(
            "--no-html",
            help="Do not write the index.html preview page",
        ),
    ] = False,
    no_report: Annotated[
        bool,
        typer.Option(
            "--no-report",
            help="Do not write reporter.json",
        ),
    ] = False,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Encoder worker processes (default: 1, in-process; 0: one per CPU)",
            min=0,
        ),
    ] = 1,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Split a font into size-bounded chunks and write a unicode-range stylesheet.

    Glyphs are ordered by character frequency, so the first chunks hold the
    most common characters. Each chunk is named after the hash of its bytes.

    Example:
        fontslicer NotoSansSC-Regular.ttf --target woff2 --dest public/fonts

    This writes public/fonts/<hash>.woff2 chunks, result.css, index.html and
    reporter.json.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_font.is_file():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)

    source = _parse_choice(FontFormat, source_format, "source format")
    target = _parse_choice(FontFormat, target_format, "target format")
    font_style = _parse_choice(FontStyle, style, "font style")
    font_display = _parse_choice(FontDisplay, display, "font display")

    # Create settings from CLI arguments
    try:
        settings = SplitSettings(
            font_path=input_font,
            source_format=source,
            css=CssConfig(
                family=family,
                weight=weight,
                style=font_style,
                display=font_display,
            ),
            chunking=ChunkingConfig(
                chunk_size=chunk_size,
                target_format=target,
                max_workers=workers or None,
                priority_file=priority,
            ),
            output=OutputConfig(
                dest_dir=dest,
                css_file_name=css_name,
                test_html=not no_html,
                reporter=not no_report,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "ERROR",
            ),
        )
    except ValidationError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1) from None

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    # Priority file is loaded here, before the font is decoded
    try:
        splitter = FontSplitter(settings, logger=logger)
    except FontSlicerError as e:
        _print_failure(e)
        raise typer.Exit(code=1) from None

    if not quiet:
        print_header(__version__)
        print_step("Loading font")
        print_font_info(
            font_path=str(input_font),
            source_format=source.value,
            size_bytes=input_font.stat().st_size,
            target_format=target.value,
        )
        print_step("Splitting")

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task("Encoding chunks", total=None)

                def update_progress(completed: int, total: int) -> None:
                    progress.update(task_id, completed=completed, total=total)

                result = splitter.split(progress_callback=update_progress)
        else:
            result = splitter.split()
    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except FontSlicerError as e:
        _print_failure(e)
        raise typer.Exit(code=1) from None
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1) from None

    if not quiet:
        _print_result(result, settings, verbose)


def _print_failure(error: FontSlicerError) -> None:
    """Print a pipeline error together with the stage it failed in."""
    details = f"Failed during the {error.stage} stage" if error.stage else None
    print_error(str(error), details=details)


def _print_result(result: SplitResult, settings: SplitSettings, verbose: bool) -> None:
    """Print the estimate, optional details and the success summary."""
    estimate = result.estimate
    print_estimate(
        chunk_length=estimate.chunk_length,
        sample_length=estimate.sample_length,
        sample_bytes=estimate.sample_encoded_size,
        budget=settings.chunking.chunk_size,
    )

    if verbose:
        print_step("Chunks")
        print_chunks(result.artifacts)
        print_step("Timings")
        print_timings(result.timings)

    print_success(
        dest_dir=str(settings.output.dest_dir),
        stylesheet=result.stylesheet_path.name,
        chunk_count=len(result.artifacts),
        total_bytes=result.total_bytes,
        total_time_s=result.duration_seconds,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
