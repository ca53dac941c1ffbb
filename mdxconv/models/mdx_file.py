"""
MDX header model.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class MDXFile:
    """
    Header fields of an MDX file.

    All offsets are relative to file_base, the stream position right
    after the title and PCM file name lines.

    Attributes:
        title: Song title, trailing line terminator removed
        title_bytes: Undecoded title bytes
        pcm_file_name: ADPCM sample bank file name (may be empty)
        file_base: Absolute position all offsets are relative to
        voice_table_offset: Relative offset of the voice records
        channel_offsets: Relative offset of each channel's command stream
    """

    title: str
    title_bytes: bytes
    pcm_file_name: str
    file_base: int
    voice_table_offset: int
    channel_offsets: Tuple[int, ...]

    @property
    def num_channels(self) -> int:
        return len(self.channel_offsets)

    @property
    def voice_table_start(self) -> int:
        """Absolute position of the voice table."""
        return self.file_base + self.voice_table_offset

    def channel_start(self, channel: int) -> int:
        """Absolute position of a channel's first command byte."""
        return self.file_base + self.channel_offsets[channel]

    def channel_end(self, channel: int) -> Optional[int]:
        """
        Absolute position where a channel's data ends.

        Returns:
            Start of the next channel, or None for the last channel
        """
        if channel + 1 < self.num_channels:
            return self.file_base + self.channel_offsets[channel + 1]
        return None
