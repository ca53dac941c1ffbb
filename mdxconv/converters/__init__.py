"""
Converters from decoded MDX songs to other formats.

Example:
    from mdxconv.converters import convert_mdx_to_midi

    # Convert MDX song to a Standard MIDI File
    convert_mdx_to_midi("song.mdx", "song.mid")
"""

from mdxconv.converters.mdx_to_midi import MDXToMIDIConverter, convert_mdx_to_midi

__all__ = [
    "MDXToMIDIConverter",
    "convert_mdx_to_midi",
]
