"""
Convert command - export MDX songs to Standard MIDI Files.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from cli.options import decoder_options, require_file
from mdxconv.converters.mdx_to_midi import MDXToMIDIConverter
from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.utils.validation import MDXFormatError

console = Console()
app = typer.Typer()


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Source file (.mdx)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    velocity: int = typer.Option(100, "--velocity", help="Note-on velocity (1-127)"),
    encoding: str = typer.Option("cp932", "--encoding", "-e", help="Title text encoding"),
    sticky_key_on_delay: bool = typer.Option(
        False, "--sticky-key-on-delay", help="Treat every byte after 0xF0 as a key-on delay"
    ),
) -> None:
    """
    Convert an MDX song to a type 1 MIDI file.

    One MIDI track is written per MDX channel. Repeats are not
    expanded and FM-only commands are dropped.

    Examples:

        mdxconv convert song.mdx

        mdxconv convert song.mdx -o out/song.mid
    """
    require_file(source)

    if not 1 <= velocity <= 127:
        console.print(f"[red]Error: Velocity must be 1-127, got {velocity}[/red]")
        raise typer.Exit(1)

    output_path = output or source.with_suffix(".mid")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Converting MDX to MIDI...", total=None)

        try:
            song = MDXReader.read(source, decoder_options(encoding, sticky_key_on_delay))
        except MDXFormatError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

        midi = MDXToMIDIConverter(velocity=velocity).convert(song)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        midi.save(str(output_path))

        progress.update(task, description="Done!")

    console.print(f"[green]Converted:[/green] {source} -> {output_path}")
    console.print(f"[dim]{len(midi.tracks) - 1} channel tracks, {len(song.voices)} voices[/dim]")


if __name__ == "__main__":
    app()
