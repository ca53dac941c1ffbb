"""
MDXConv - Decoder for X68000 MDX music files.

A CLI tool for inspecting MXDRV songs and converting them to MIDI.
"""

import typer
from rich.console import Console

from cli.commands.info import info
from cli.commands.voices import voices
from cli.commands.events import events
from cli.commands.convert import convert
from cli.options import setup_logging
from mdxconv import __version__

console = Console()

# Main app
app = typer.Typer(
    name="mdxconv",
    help="Inspect X68000 MDX music files and convert them to MIDI.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="voices")(voices)
app.command(name="events")(events)
app.command(name="convert")(convert)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]mdxconv[/bold] version {__version__}")
    console.print("[dim]Decoder for X68000 MXDRV (MDX) music files[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show decoder log messages"),
) -> None:
    """
    MDXConv - Inspect and convert X68000 MDX music files.

    [bold]Quick Start:[/bold]

        mdxconv info song.mdx            # Header and channel summary
        mdxconv voices song.mdx          # FM voice table
        mdxconv events song.mdx -c 0     # Decoded commands of channel A

    [bold]Conversion:[/bold]

        mdxconv convert song.mdx -o song.mid

    Use --help with any command for more details.
    """
    setup_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
