"""
Voices command - display the FM voice table of an MDX file.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.display.tables import display_voice_detail, display_voices
from cli.options import decoder_options, require_file
from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.utils.validation import MDXFormatError

console = Console()
app = typer.Typer()


@app.command()
def voices(
    file: Path = typer.Argument(..., help="MDX file to analyze"),
    voice: Optional[int] = typer.Option(None, "--voice", "-n", help="Show only this voice number"),
    detail: bool = typer.Option(False, "--detail", "-d", help="Show every operator parameter"),
    encoding: str = typer.Option("cp932", "--encoding", "-e", help="Title text encoding"),
) -> None:
    """
    Display the voice table.

    Examples:

        mdxconv voices song.mdx

        mdxconv voices song.mdx -n 3 --detail
    """
    require_file(file)

    try:
        song = MDXReader.read(file, decoder_options(encoding, False))
    except MDXFormatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    selected = song.voices
    if voice is not None:
        selected = [v for v in song.voices if v.number == voice]
        if not selected:
            console.print(f"[red]Error: Voice {voice} not found[/red]")
            raise typer.Exit(1)

    if not selected:
        console.print("[yellow]No voices defined[/yellow]")
        return

    if detail:
        for v in selected:
            display_voice_detail(v)
    else:
        display_voices(selected)


if __name__ == "__main__":
    app()
