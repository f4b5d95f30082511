"""Command-line interface for newspaper-batch."""

import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from newspaper_batch import __version__
from newspaper_batch.config import ConfigurationError, NewspaperBatchConfig
from newspaper_batch.imaging import ImageConversionError
from newspaper_batch.metadata import MetadataError
from newspaper_batch.processor import IssueProcessor, ProcessingError

app = typer.Typer(
    name="newspaper-batch",
    help="Convert newspaper issues into the Islandora newspaper batch format",
    add_completion=False,
)
console = Console()

# Help text constants
METADATA_FILE_HELP = "Issue metadata JSON file"
TARGET_PATH_HELP = "Batch directory the issue is written into"
VERBOSE_OUTPUT_HELP = "Verbose output"
ENV_FILE_HELP = "Path to custom environment file (default: .env.newspaperbatch or .env)"


def setup_logging(verbose: bool) -> None:
    """Setup logging configuration.

    Args:
        verbose: If True, enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    # Pillow logs every TIFF tag it parses at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO if verbose else logging.WARNING)


def _fail(message: str, verbose: bool = False) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    if verbose:
        console.print_exception()
    sys.exit(1)


def process(
    metadata_file_path: str = typer.Argument(..., help=METADATA_FILE_HELP),
    target_path: str = typer.Argument(..., help=TARGET_PATH_HELP),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Replace the issue directory if it already exists (overrides config)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the planned layout without writing anything",
    ),
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Process newspaper issue pages into the batch format."""
    setup_logging(verbose)

    try:
        # Load configuration
        config = NewspaperBatchConfig(env_file=env_file)

        # Override overwrite if specified
        if overwrite:
            config.overwrite = True

        issue_processor = IssueProcessor(metadata_file_path, target_path, config=config, console=console)
        issue_processor.process(dry_run=dry_run)

    except ConfigurationError as e:
        _fail(f"Configuration error: {e}")
    except MetadataError as e:
        _fail(f"Metadata error: {e}", verbose)
    except ImageConversionError as e:
        _fail(f"Image error: {e}", verbose)
    except ProcessingError as e:
        _fail(f"Processing error: {e}", verbose)
    except Exception as e:
        _fail(f"Error: {e}", verbose)


app.command(name="process")(process)


@app.command()
def plan(
    metadata_file_path: str = typer.Argument(..., help=METADATA_FILE_HELP),
    target_path: str = typer.Argument(..., help=TARGET_PATH_HELP),
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
) -> None:
    """Print the planned batch layout of an issue as JSON."""
    try:
        config = NewspaperBatchConfig(env_file=env_file)
        layout = IssueProcessor(metadata_file_path, target_path, config=config, console=console).plan()
        typer.echo(layout.model_dump_json(indent=2))
    except ConfigurationError as e:
        _fail(f"Configuration error: {e}")
    except MetadataError as e:
        _fail(f"Metadata error: {e}")
    except ProcessingError as e:
        _fail(f"Processing error: {e}")


@app.command()
def config(
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
) -> None:
    """Show current configuration."""
    try:
        cfg = NewspaperBatchConfig(env_file=env_file)
        source = env_file or cfg.find_env_file()
        console.print("[bold]Current Configuration:[/bold]\n")
        console.print(f"  Environment file: {source or 'none'}")
        console.print(f"  Overwrite: {cfg.overwrite}")
        console.print(f"  Page MODS: {cfg.page_mods}")
        console.print(f"  Default language: {cfg.default_language}")
        console.print("\n[bold]Images:[/bold]")
        console.print(f"  TIFF compression: {cfg.tiff_compression.value}")
        console.print(f"  Recompress TIFF sources: {cfg.recompress_tiff}")
        console.print(f"  Image suffixes: {', '.join(cfg.image_suffixes)}")
        console.print(f"  Max image pixels: {cfg.max_image_pixels or 'unlimited'}")
    except ConfigurationError as e:
        _fail(f"Configuration error: {e}")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"newspaper-batch version {__version__}")


# Single-command entry point: process-issue-files METADATA TARGET
process_issue_files = typer.Typer(
    name="process-issue-files",
    help="Process newspaper issue pages into the batch format",
    add_completion=False,
)
process_issue_files.command()(process)


if __name__ == "__main__":
    app()
