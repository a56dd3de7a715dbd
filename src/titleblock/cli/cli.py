"""
titleblock CLI Application.

Main entry point for the titleblock command-line interface: render
Markdown documents with their front matter title block, and inspect the
front matter of a document.
"""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .. import __version__
from ..core.document_processor import MarkdownParser
from ..core.document_processor.front_matter import (
    FrontMatterOptions,
    extract_metadata,
    find_front_matter,
    front_matter_plugin,
)
from ..exceptions.config_exceptions import ConfigurationError
from ..utils.config import ConfigManager
from ..utils.logging_config import LoggingManager, LogLevel

# Initialize console for rich output
console = Console()

app = typer.Typer(
    name="titleblock",
    help="Render Markdown front matter as a document title block",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose (DEBUG) logging, overriding the configured level
        config: Loaded configuration; its ``logging`` section selects level,
            file and file format

    Returns:
        Configured logger instance
    """
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    LoggingManager.from_config(
        config or {},
        console_handler=rich_handler,
        log_level=LogLevel.DEBUG if verbose else None,
    )
    return logging.getLogger("titleblock")


def get_config_manager(config_path: Optional[str] = None) -> ConfigManager:
    """
    Create the configuration manager and load the configuration.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Loaded ConfigManager instance

    Raises:
        typer.Exit: If configuration loading fails
    """
    try:
        config_manager = ConfigManager(config_file=config_path, load_env=True)
        config_manager.load_config()
    except ConfigurationError as e:
        rprint(f"[red]Configuration Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    return config_manager


def get_options(ctx: typer.Context) -> FrontMatterOptions:
    """Front matter options of the current invocation."""
    return FrontMatterOptions.from_config(ctx.obj["config_manager"].config)


def read_document(path: Path) -> str:
    return path.read_text(encoding="utf-8")


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        "-c",
        help="Path to configuration file (default: titleblock.config.json)",
        metavar="PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging (DEBUG level)",
    ),
) -> None:
    """
    titleblock - front matter title blocks for Markdown documents.

    Common workflows:
    • Render a document: titleblock render paper.md
    • Show its metadata: titleblock meta paper.md
    • Locate the front matter block: titleblock scan paper.md
    """
    config_manager = get_config_manager(config_path)
    setup_logging(verbose, config_manager.config)

    ctx.obj = {
        "config_path": config_path,
        "verbose": verbose,
        "config_manager": config_manager,
    }


@app.command()
def render(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Markdown document"),
) -> None:
    """Render a document, front matter included, to HTML."""
    try:
        parser = MarkdownParser().use(front_matter_plugin, options=get_options(ctx))
        typer.echo(parser.render(read_document(path)), nl=False)
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)


@app.command()
def meta(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Markdown document"),
) -> None:
    """Print the title block and remaining metadata of a document as JSON."""
    try:
        extracted = extract_metadata(read_document(path), get_options(ctx))
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    if extracted is None:
        rprint(f"[yellow]No front matter metadata found in {escape(str(path))}[/yellow]")
        raise typer.Exit(1)

    title_block, residual = extracted
    console.print_json(data={
        "title_block": asdict(title_block),
        "metadata": residual.to_python(),
    })


@app.command()
def scan(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Markdown document"),
) -> None:
    """Show where the front matter block of a document starts and ends."""
    try:
        match = find_front_matter(read_document(path), get_options(ctx))
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    if not match:
        rprint(f"[yellow]No front matter block in {escape(str(path))}[/yellow]")
        raise typer.Exit(1)

    state = "closed" if match.closed else "auto-closed"
    typer.echo(f"Front matter: lines {match.start_line}-{match.end_line} ({state})")
    typer.echo(match.token.content, nl=False)


@app.command()
def version() -> None:
    """Show version information."""
    rprint(f"titleblock [blue]v{__version__}[/blue]")


def handle_cli_error(error: Exception) -> None:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
    """
    if isinstance(error, ConfigurationError):
        rprint(f"[red]Configuration Error:[/red] {escape(str(error))}")
        logger.debug("Configuration error details", exc_info=True)
    elif isinstance(error, FileNotFoundError):
        rprint(f"[red]File Not Found:[/red] {escape(str(error))}")
        logger.debug("File not found details", exc_info=True)
    elif isinstance(error, PermissionError):
        rprint(f"[red]Permission Denied:[/red] {escape(str(error))}")
        logger.debug("Permission error details", exc_info=True)
    elif isinstance(error, UnicodeDecodeError):
        rprint(f"[red]Unreadable Document:[/red] {escape(str(error))}")
        logger.debug("Decoding error details", exc_info=True)
    else:
        rprint(f"[red]Error:[/red] {escape(str(error))}")
        logger.debug("Unexpected error details", exc_info=True)


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        rprint("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    cli_main()
