"""
Events command - list the decoded commands of MDX channels.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.display.tables import display_events
from cli.options import decoder_options, require_file
from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.utils.validation import MDXFormatError

console = Console()
app = typer.Typer()


@app.command()
def events(
    file: Path = typer.Argument(..., help="MDX file to decode"),
    channel: Optional[int] = typer.Option(
        None, "--channel", "-c", help="Channel index (0 = A), default all"
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", help="Show at most this many commands per channel"
    ),
    raw: bool = typer.Option(False, "--raw", "-r", help="Show raw command bytes"),
    encoding: str = typer.Option("cp932", "--encoding", "-e", help="Title text encoding"),
    sticky_key_on_delay: bool = typer.Option(
        False, "--sticky-key-on-delay", help="Treat every byte after 0xF0 as a key-on delay"
    ),
) -> None:
    """
    List decoded channel commands.

    Examples:

        mdxconv events song.mdx

        mdxconv events song.mdx -c 0 --raw

        mdxconv events song.mdx -c 8 -l 32
    """
    require_file(file)

    try:
        song = MDXReader.read(file, decoder_options(encoding, sticky_key_on_delay))
    except MDXFormatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if channel is not None and not 0 <= channel < len(song.channels):
        console.print(
            f"[red]Error: Channel must be 0-{len(song.channels) - 1}, got {channel}[/red]"
        )
        raise typer.Exit(1)

    selected = song.channels if channel is None else [song.channels[channel]]
    for ch in selected:
        commands = ch.commands[:limit] if limit is not None else ch.commands
        display_events(ch.index, commands, show_raw=raw)
        if len(commands) < len(ch.commands):
            console.print(f"[dim]... {len(ch.commands) - len(commands)} more commands[/dim]")


if __name__ == "__main__":
    app()
