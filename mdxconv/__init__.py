"""
MDXConv - Decoder for X68000 MDX music files.

This library provides tools to:
- Parse the MDX header, voice table and channel command streams
- Receive decoded commands through handler callbacks or as event values
- Summarize songs and export them to Standard MIDI Files

Example usage:
    from mdxconv import MDXReader
    from mdxconv.converters import convert_mdx_to_midi

    # Decode a song
    song = MDXReader.read("song.mdx")
    print(song.title, len(song.voices))

    # Export to MIDI
    convert_mdx_to_midi("song.mdx", "song.mid")
"""

__version__ = "0.1.0"
__author__ = "MDXConv Contributors"

from mdxconv.formats.mdx.options import DecoderOptions, KeyOnDelayMode
from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.handlers import MDXHandler, dispatch
from mdxconv.models.mdx_file import MDXFile
from mdxconv.models.song import Channel, MDXSong
from mdxconv.models.voice import Oscillator, Voice
from mdxconv.utils.validation import MDXError, MDXFormatError

__all__ = [
    "MDXReader",
    "MDXHandler",
    "dispatch",
    "DecoderOptions",
    "KeyOnDelayMode",
    "MDXFile",
    "MDXSong",
    "Channel",
    "Voice",
    "Oscillator",
    "MDXError",
    "MDXFormatError",
]
