"""
Display formatting utilities for CLI output.

Provides bar graphics and text renderings of decoded MDX values.
"""

from dataclasses import fields

from mdxconv.analysis.mdx_analyzer import tempo_to_bpm
from mdxconv.models.events import DecodedCommand, Note, SetPan, SetTempo, SetVolume
from mdxconv.utils.naming import command_name, note_label

PAN_NAMES = {0: "off", 1: "L", 2: "R", 3: "LR"}


def value_bar(
    value: int,
    max_value: int = 127,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
) -> str:
    """
    Create a text-based bar graphic with value.

    Args:
        value: Current value
        max_value: Maximum value (127 for TL)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion

    Returns:
        Formatted string like "91 [████████░░]"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))
    fill_count = int((clamped / max_value) * width)

    bar = filled_char * fill_count + empty_char * (width - fill_count)
    return f"{value:3d} [{bar}]"


def hex_bytes(data: bytes) -> str:
    """Format bytes as space separated hex, e.g. "F1 00"."""
    return " ".join(f"{b:02X}" for b in data)


def format_volume(volume: int) -> str:
    """
    Format a set-volume operand.

    Returns:
        "v12" for coarse volumes, "@v100" for fine volumes
    """
    if volume & 0x80:
        return f"@v{volume & 0x7F}"
    return f"v{volume}"


def format_event(decoded: DecodedCommand) -> str:
    """
    Format the arguments of a decoded command.

    Returns:
        Human readable argument string, e.g. "o4c len=48"
    """
    event = decoded.event

    if isinstance(event, Note):
        return f"{note_label(event.note)} len={event.duration}"
    if isinstance(event, SetTempo):
        return f"t={event.tempo} ({tempo_to_bpm(event.tempo):.1f} BPM)"
    if isinstance(event, SetVolume):
        return format_volume(event.volume)
    if isinstance(event, SetPan):
        return PAN_NAMES.get(event.pan, str(event.pan))

    parts = []
    for f in fields(event):
        value = getattr(event, f.name)
        if isinstance(value, bytes):
            value = hex_bytes(value) or "-"
        elif value is None:
            continue
        parts.append(f"{f.name}={value}")
    return " ".join(parts)


def format_command_name(decoded: DecodedCommand) -> str:
    """Display name of a decoded command, marking truncated ones."""
    name = command_name(decoded.opcode)
    if not decoded.is_complete:
        return f"{name} (truncated)"
    return name
