"""
Rich table displays for MDX song information.
"""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import format_command_name, format_event, hex_bytes, value_bar
from mdxconv.analysis.mdx_analyzer import SongAnalysis
from mdxconv.models.events import DecodedCommand
from mdxconv.models.mdx_file import MDXFile
from mdxconv.models.voice import Voice
from mdxconv.utils.naming import channel_name, operator_name

console = Console()


def display_header(header: MDXFile, filesize: int) -> None:
    """Display the header fields in a panel."""
    content = f"""[bold]Title:[/bold] {header.title or "N/A"}
[bold]PCM File:[/bold] {header.pcm_file_name or "N/A"}
[bold]File Size:[/bold] {filesize} bytes
[bold]File Base:[/bold] 0x{header.file_base:04X}
[bold]Voice Table:[/bold] 0x{header.voice_table_start:04X} (offset 0x{header.voice_table_offset:04X})
[bold]Channels:[/bold] {header.num_channels}"""

    console.print(
        Panel(
            content,
            title="[bold blue]MDX Song Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )


def display_song_info(analysis: SongAnalysis) -> None:
    """Display the per-channel summary of an analyzed song."""
    if analysis.initial_tempo is not None:
        console.print(
            f"[bold]Tempo:[/bold] {analysis.initial_bpm:.1f} BPM "
            f"[dim](t={analysis.initial_tempo})[/dim]"
        )
    console.print(
        f"[bold]Voices:[/bold] {analysis.voice_count}   "
        f"[bold]Active Channels:[/bold] {analysis.active_channels}/{analysis.num_channels}   "
        f"[bold]Notes:[/bold] {analysis.total_notes}"
    )

    table = Table(title="Channels", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("Ch", style="cyan", width=3)
    table.add_column("Bytes", justify="right")
    table.add_column("Cmds", justify="right")
    table.add_column("Notes", justify="right")
    table.add_column("Rests", justify="right")
    table.add_column("Ticks", justify="right")
    table.add_column("Voices")
    table.add_column("Loops", justify="right")
    table.add_column("Status")

    for channel in analysis.channels:
        if channel.truncated:
            status = "[red]Truncated[/red]"
        elif channel.terminated:
            status = "[green]End[/green]"
        else:
            status = "[yellow]Open[/yellow]"
        if channel.undefined_count:
            status += f" [yellow]({channel.undefined_count} undefined)[/yellow]"

        table.add_row(
            channel.name,
            str(channel.byte_count),
            str(channel.command_count),
            str(channel.note_count),
            str(channel.rest_count),
            str(channel.total_ticks),
            ", ".join(str(v) for v in channel.voices) or "[dim]-[/dim]",
            str(channel.repeat_count),
            status,
        )

    console.print(table)


def display_voices(voices: List[Voice]) -> None:
    """Display the voice table, one row per voice."""
    table = Table(title="Voices", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("FL", justify="right")
    table.add_column("CON", justify="right")
    table.add_column("Slots")
    for i in range(4):
        table.add_column(f"TL {operator_name(i)}")

    for voice in voices:
        table.add_row(
            str(voice.number),
            str(voice.feedback),
            str(voice.algorithm),
            f"0x{voice.slot_mask:02X}",
            *[value_bar(osc.total_level, width=6) for osc in voice.oscillators],
        )

    console.print(table)


def display_voice_detail(voice: Voice) -> None:
    """Display every operator parameter of one voice."""
    table = Table(box=box.SIMPLE, show_header=True, header_style="dim")
    table.add_column("Param", style="cyan")
    for i in range(4):
        table.add_column(operator_name(i), justify="right")

    rows = [
        ("AR", "attack_rate"),
        ("D1R", "decay1_rate"),
        ("D2R", "decay2_rate"),
        ("RR", "release_rate"),
        ("D1L", "decay1_level"),
        ("TL", "total_level"),
        ("KS", "key_scale"),
        ("MUL", "multiple"),
        ("DT1", "detune1"),
        ("DT2", "detune2"),
        ("AMS-EN", "amplitude_mod_enable"),
    ]
    for label, attr in rows:
        table.add_row(label, *[str(getattr(osc, attr)) for osc in voice.oscillators])

    console.print(
        Panel(
            table,
            title=f"[bold]Voice {voice.number}[/bold] "
            f"[dim]FL={voice.feedback} CON={voice.algorithm} "
            f"slots=0x{voice.slot_mask:02X}[/dim]",
            border_style="cyan",
            expand=False,
        )
    )


def display_events(channel: int, commands: List[DecodedCommand], show_raw: bool = False) -> None:
    """Display decoded commands of one channel."""
    table = Table(
        title=f"Channel {channel_name(channel)}",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Offset", style="dim")
    if show_raw:
        table.add_column("Bytes", style="dim")
    table.add_column("Command", style="cyan")
    table.add_column("Arguments")

    for decoded in commands:
        row = [f"0x{decoded.offset:04X}"]
        if show_raw:
            row.append(hex_bytes(decoded.to_bytes()))
        row.append(format_command_name(decoded))
        row.append(format_event(decoded))
        table.add_row(*row)

    console.print(table)
