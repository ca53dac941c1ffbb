"""
Info command - display header and channel summary of an MDX file.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_header, display_song_info
from cli.options import decoder_options, require_file
from mdxconv.analysis.mdx_analyzer import MDXAnalyzer
from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.utils.validation import MDXFormatError

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="MDX file to analyze"),
    encoding: str = typer.Option("cp932", "--encoding", "-e", help="Title text encoding"),
    sticky_key_on_delay: bool = typer.Option(
        False, "--sticky-key-on-delay", help="Treat every byte after 0xF0 as a key-on delay"
    ),
) -> None:
    """
    Display MDX song information.

    Shows the title, PCM file, offsets and a summary of every channel:
    notes, rests, voices used, loops and how the channel ends.

    Examples:

        mdxconv info song.mdx

        mdxconv info song.mdx --encoding latin-1
    """
    require_file(file)

    try:
        song = MDXReader.read(file, decoder_options(encoding, sticky_key_on_delay))
    except MDXFormatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    display_header(song.header, file.stat().st_size)
    display_song_info(MDXAnalyzer().analyze(song))


if __name__ == "__main__":
    app()
