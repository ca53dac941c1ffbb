"""
MDX to Standard MIDI File converter.

Renders the decoded command streams of an MDX song as a type 1 MIDI
file: one conductor track for the title and tempo map, then one track
per MDX channel.

Mapping:
- Note / rest        note_on + note_off / elapsed time
- Set tempo          set_tempo meta event (conductor track)
- Set voice          program_change (voice number & 0x7F)
- Set volume         control_change 7
- Output phase       control_change 10 (left, right, center)

Repeats are not expanded and FM-specific commands (LFO, detune, OPM
registers) have no MIDI equivalent and are dropped.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import mido

from mdxconv.analysis.mdx_analyzer import CLOCKS_PER_BEAT, tempo_to_microseconds
from mdxconv.formats.mdx.options import DecoderOptions
from mdxconv.formats.mdx.reader import MDXReader
from mdxconv.models.events import Note, Rest, SetPan, SetTempo, SetVoice, SetVolume
from mdxconv.models.song import Channel, MDXSong

logger = logging.getLogger(__name__)

# MDX note 0 is D#0; MIDI 60 is o4c
NOTE_OFFSET = 15

# Output phase -> CC10 value (0 = output off, no pan change)
PAN_VALUES = {1: 0, 2: 127, 3: 64}

# MIDI channel per MDX channel. Drum channel 10 is left for the 16th
# channel (PCM8 W), the only one that needs it.
MIDI_CHANNELS = [c for c in range(16) if c != 9] + [9]

# v0-v15 -> @v (0-127), the MXDRV volume table
VOLUME_TABLE = [
    0x55, 0x57, 0x5A, 0x5D, 0x5F, 0x62, 0x65, 0x67,
    0x6A, 0x6D, 0x6F, 0x72, 0x75, 0x77, 0x7A, 0x7D,
]

DEFAULT_VELOCITY = 100


def meta_text(text: str) -> str:
    """Make text storable in a MIDI meta event (latin-1 only)."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def volume_to_cc(volume: int) -> int:
    """
    Convert an MDX volume operand to a CC7 value.

    Operands with bit 7 set carry a fine volume (@v 0-127) in the low
    bits, otherwise the value is a coarse volume 0-15.
    """
    if volume & 0x80:
        return volume & 0x7F
    return VOLUME_TABLE[min(volume, 15)]


class MDXToMIDIConverter:
    """
    Converter from decoded MDX songs to mido MidiFile objects.

    Example:
        converter = MDXToMIDIConverter()
        midi = converter.convert(MDXReader.read("song.mdx"))
        midi.save("song.mid")
    """

    def __init__(self, velocity: int = DEFAULT_VELOCITY):
        self.velocity = velocity

    def convert(self, song: MDXSong) -> mido.MidiFile:
        """
        Convert a song.

        Args:
            song: Decoded MDX song

        Returns:
            Type 1 MidiFile, ticks_per_beat = 48
        """
        midi = mido.MidiFile(type=1, ticks_per_beat=CLOCKS_PER_BEAT)

        tempo_map: List[Tuple[int, int]] = []
        tracks = []
        for channel in song.channels:
            track, tempos = self._convert_channel(channel)
            tempo_map.extend(tempos)
            tracks.append(track)

        midi.tracks.append(self._conductor_track(song.title, tempo_map))
        midi.tracks.extend(tracks)

        logger.debug("Converted %d channels, %d tempo changes", len(tracks), len(tempo_map))
        return midi

    def _conductor_track(self, title: str, tempo_map: List[Tuple[int, int]]) -> mido.MidiTrack:
        track = mido.MidiTrack()
        track.append(mido.MetaMessage("track_name", name=meta_text(title), time=0))

        now = 0
        for time, tempo in sorted(tempo_map):
            track.append(
                mido.MetaMessage(
                    "set_tempo", tempo=tempo_to_microseconds(tempo), time=time - now
                )
            )
            now = time

        track.append(mido.MetaMessage("end_of_track", time=0))
        return track

    def _convert_channel(self, channel: Channel) -> Tuple[mido.MidiTrack, List[Tuple[int, int]]]:
        """
        Build a track for one channel.

        Returns:
            Tuple of (track, [(absolute tick, tempo byte), ...])
        """
        midi_channel = MIDI_CHANNELS[channel.index]
        messages: List[Tuple[int, mido.Message]] = []
        tempos: List[Tuple[int, int]] = []
        now = 0

        for event in channel.events:
            if isinstance(event, Rest):
                now += event.duration
            elif isinstance(event, Note):
                note = min(127, event.note + NOTE_OFFSET)
                messages.append(
                    (
                        now,
                        mido.Message(
                            "note_on", channel=midi_channel, note=note, velocity=self.velocity
                        ),
                    )
                )
                now += event.duration
                messages.append(
                    (now, mido.Message("note_off", channel=midi_channel, note=note, velocity=0))
                )
            elif isinstance(event, SetTempo):
                tempos.append((now, event.tempo))
            elif isinstance(event, SetVoice):
                messages.append(
                    (
                        now,
                        mido.Message(
                            "program_change", channel=midi_channel, program=event.voice & 0x7F
                        ),
                    )
                )
            elif isinstance(event, SetVolume):
                messages.append(
                    (
                        now,
                        mido.Message(
                            "control_change",
                            channel=midi_channel,
                            control=7,
                            value=volume_to_cc(event.volume),
                        ),
                    )
                )
            elif isinstance(event, SetPan) and event.pan in PAN_VALUES:
                messages.append(
                    (
                        now,
                        mido.Message(
                            "control_change",
                            channel=midi_channel,
                            control=10,
                            value=PAN_VALUES[event.pan],
                        ),
                    )
                )

        track = mido.MidiTrack()
        track.append(mido.MetaMessage("track_name", name=f"MDX {channel.name}", time=0))

        last = 0
        for time, message in messages:
            track.append(message.copy(time=time - last))
            last = time

        track.append(mido.MetaMessage("end_of_track", time=now - last))
        return track, tempos


def convert_mdx_to_midi(
    source: Union[str, Path],
    output: Optional[Union[str, Path]] = None,
    options: Optional[DecoderOptions] = None,
) -> Path:
    """
    Convert an MDX file to a MIDI file.

    Args:
        source: Path to .mdx file
        output: Output path (default: source with .mid suffix)
        options: Decoder options

    Returns:
        Path of the written MIDI file
    """
    source = Path(source)
    output = Path(output) if output else source.with_suffix(".mid")

    song = MDXReader.read(source, options)
    midi = MDXToMIDIConverter().convert(song)
    midi.save(str(output))

    logger.info("Wrote %s", output)
    return output
