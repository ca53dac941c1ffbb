"""
MDX song analyzer.

Extracts summary information from a decoded song:
- Per-channel note, rest and tick counts
- Voices referenced and tempo changes
- Loop structure and termination state
- Undefined and truncated commands
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from mdxconv.formats.mdx.options import DecoderOptions
from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.models.events import (
    Note,
    RepeatStart,
    Rest,
    SetTempo,
    SetVoice,
    UndefinedCommand,
)
from mdxconv.models.song import Channel, MDXSong

# OPM timer B counts at 4 MHz / 1024; MXDRV runs 48 clocks per quarter note
TIMER_B_PERIOD_US = 256
CLOCKS_PER_BEAT = 48


def tempo_to_microseconds(tempo: int) -> int:
    """
    Convert an MDX tempo byte (timer B value) to microseconds per beat.

    Args:
        tempo: Timer B value 0-255

    Returns:
        Quarter note length in microseconds
    """
    return CLOCKS_PER_BEAT * TIMER_B_PERIOD_US * (256 - tempo)


def tempo_to_bpm(tempo: int) -> float:
    """Convert an MDX tempo byte to beats per minute."""
    return 60_000_000 / tempo_to_microseconds(tempo)


@dataclass
class ChannelSummary:
    """Summary of one decoded channel."""

    index: int
    name: str  # A-H, P-W
    command_count: int
    byte_count: int
    note_count: int
    rest_count: int
    total_ticks: int  # Notes + rests, repeats not expanded
    voices: List[int] = field(default_factory=list)
    tempos: List[int] = field(default_factory=list)
    repeat_count: int = 0
    undefined_count: int = 0
    terminated: bool = False
    truncated: bool = False

    @property
    def is_empty(self) -> bool:
        return self.note_count == 0 and self.rest_count == 0


@dataclass
class SongAnalysis:
    """Complete analysis of an MDX song."""

    title: str
    pcm_file: str
    num_channels: int
    voice_count: int
    channels: List[ChannelSummary] = field(default_factory=list)

    @property
    def initial_tempo(self) -> Optional[int]:
        """First tempo set on the lowest channel that sets one."""
        for channel in self.channels:
            if channel.tempos:
                return channel.tempos[0]
        return None

    @property
    def initial_bpm(self) -> Optional[float]:
        tempo = self.initial_tempo
        return tempo_to_bpm(tempo) if tempo is not None else None

    @property
    def active_channels(self) -> int:
        return sum(1 for c in self.channels if not c.is_empty)

    @property
    def total_notes(self) -> int:
        return sum(c.note_count for c in self.channels)


class MDXAnalyzer:
    """
    Analyzer for decoded MDX songs.

    Example:
        analysis = MDXAnalyzer().analyze_file("song.mdx")
        print(analysis.initial_bpm)
    """

    def __init__(self, options: Optional[DecoderOptions] = None):
        self.options = options

    def analyze_file(self, filepath: Union[str, Path]) -> SongAnalysis:
        return self.analyze(MDXReader.read(filepath, self.options))

    def analyze(self, song: MDXSong) -> SongAnalysis:
        return SongAnalysis(
            title=song.header.title,
            pcm_file=song.header.pcm_file_name,
            num_channels=song.header.num_channels,
            voice_count=len(song.voices),
            channels=[self.summarize_channel(c) for c in song.channels],
        )

    def summarize_channel(self, channel: Channel) -> ChannelSummary:
        notes = channel.events_of(Note)
        rests = channel.events_of(Rest)

        voices: List[int] = []
        for event in channel.events_of(SetVoice):
            if event.voice not in voices:
                voices.append(event.voice)

        return ChannelSummary(
            index=channel.index,
            name=channel.name,
            command_count=len(channel.commands),
            byte_count=sum(c.size for c in channel.commands),
            note_count=len(notes),
            rest_count=len(rests),
            total_ticks=sum(n.duration for n in notes) + sum(r.duration for r in rests),
            voices=voices,
            tempos=[e.tempo for e in channel.events_of(SetTempo)],
            repeat_count=len(channel.events_of(RepeatStart)),
            undefined_count=len(channel.events_of(UndefinedCommand)),
            terminated=channel.terminated,
            truncated=channel.truncated,
        )
