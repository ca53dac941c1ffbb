"""Data models for MDX songs."""

from mdxconv.models.mdx_file import MDXFile
from mdxconv.models.song import Channel, MDXSong
from mdxconv.models.voice import DEFAULT_PAN, Oscillator, Voice
from mdxconv.models.events import DecodedCommand, Event, Opcode

__all__ = [
    "MDXFile",
    "MDXSong",
    "Channel",
    "Voice",
    "Oscillator",
    "DEFAULT_PAN",
    "DecodedCommand",
    "Event",
    "Opcode",
]
