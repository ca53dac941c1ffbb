"""
Shared option handling for CLI commands.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from mdxconv.formats.mdx.options import DecoderOptions, KeyOnDelayMode

console = Console()


def decoder_options(encoding: str, sticky_key_on_delay: bool) -> DecoderOptions:
    """Build DecoderOptions from the common command line flags."""
    mode = KeyOnDelayMode.STICKY if sticky_key_on_delay else KeyOnDelayMode.SINGLE
    return DecoderOptions(encoding=encoding, key_on_delay=mode)


def require_file(filepath: Path) -> None:
    """Exit with an error if a file does not exist."""
    if not filepath.exists():
        console.print(f"[red]Error: File not found: {filepath}[/red]")
        raise typer.Exit(1)


def setup_logging(verbose: bool) -> None:
    """Route library log records to the console through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
