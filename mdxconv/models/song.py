"""
Collected MDX song model.

MDXSong keeps everything a decode produced, for consumers that want
the whole file in memory rather than streaming callbacks.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Type, TypeVar

from mdxconv.models.events import DataEnd, DecodedCommand, Event, TruncatedCommand
from mdxconv.models.mdx_file import MDXFile
from mdxconv.models.voice import Voice
from mdxconv.utils.naming import channel_name

E = TypeVar("E", bound=Event)


@dataclass
class Channel:
    """
    Decoded command stream of one channel.

    Attributes:
        index: Channel index (0 = A)
        commands: Decoded commands in stream order
    """

    index: int
    commands: List[DecodedCommand] = field(default_factory=list)

    @property
    def name(self) -> str:
        return channel_name(self.index)

    @property
    def events(self) -> List[Event]:
        return [c.event for c in self.commands]

    @property
    def terminated(self) -> bool:
        """True if the channel ended with an explicit data end command."""
        return bool(self.commands) and isinstance(self.commands[-1].event, DataEnd)

    @property
    def truncated(self) -> bool:
        return bool(self.commands) and isinstance(self.commands[-1].event, TruncatedCommand)

    def events_of(self, kind: Type[E]) -> List[E]:
        """Get all events of one type."""
        return [c.event for c in self.commands if isinstance(c.event, kind)]

    def to_bytes(self) -> bytes:
        """Raw bytes of every decoded command, concatenated."""
        return b"".join(c.to_bytes() for c in self.commands)


@dataclass
class MDXSong:
    """
    A fully decoded MDX file.

    Attributes:
        header: Parsed header
        voices: Voice records in table order
        channels: Decoded channels, index order
    """

    header: MDXFile
    voices: List[Voice] = field(default_factory=list)
    channels: List[Channel] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.header.title

    def voice_map(self) -> Dict[int, Voice]:
        """Voices keyed by voice number. Later records win."""
        return {voice.number: voice for voice in self.voices}

    def get_voice(self, number: int) -> Optional[Voice]:
        return self.voice_map().get(number)
