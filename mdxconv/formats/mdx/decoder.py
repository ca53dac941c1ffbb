"""
MDX channel command decoder.

Turns a channel's byte stream into DecodedCommand values, one byte at
a time. A command waiting for operands is held as a _Pending state
that accumulates its operand bytes; the command table says how many
operands each opcode needs and how to build its event from them.

Variable-length commands:
    F1 00           data end, no value
    F1 hh ll        data end with a 16-bit value
    EC/EB/EA 80     LFO off
    EC/EB/EA 81     LFO on
    EC/EB/EA ww pppp cccc
                    LFO waveform, period (u16), change (s16)
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, NamedTuple, Optional, Tuple, Union

from mdxconv.formats.mdx.options import DecoderOptions, KeyOnDelayMode
from mdxconv.formats.mdx.stream import ByteStream
from mdxconv.models.events import (
    ADPCMNoiseFrequency,
    DataEnd,
    DecodedCommand,
    Detune,
    DisableKeyOff,
    Event,
    FadeOut,
    KeyOnDelay,
    LFO_OFF,
    LFO_ON,
    LFODelay,
    NOTE_MAX,
    NOTE_MIN,
    Note,
    OPMLFO,
    OPMLFOSwitch,
    Opcode,
    PCM8ExpansionShift,
    PitchLFO,
    PitchLFOSwitch,
    Portamento,
    REST_MAX,
    RepeatEnd,
    RepeatEscape,
    RepeatStart,
    Rest,
    SetOPMRegister,
    SetPan,
    SetSoundLength,
    SetTempo,
    SetVoice,
    SetVolume,
    SyncSend,
    SyncWait,
    TruncatedCommand,
    UndefinedCommand,
    VolumeDecrement,
    VolumeIncrement,
    VolumeLFO,
    VolumeLFOSwitch,
)
from mdxconv.models.mdx_file import MDXFile
from mdxconv.utils.validation import validate_channel_index

logger = logging.getLogger(__name__)


def u16(high: int, low: int) -> int:
    return (high << 8) | low


def s16(high: int, low: int) -> int:
    value = u16(high, low)
    return value - 0x10000 if value & 0x8000 else value


def _data_end_size(operands: bytes) -> int:
    return 1 if operands[0] == 0 else 2


def _data_end(operands: bytes) -> Event:
    if len(operands) == 1:
        return DataEnd()
    return DataEnd(u16(operands[0], operands[1]))


def _lfo_size(operands: bytes) -> int:
    return 1 if operands[0] in (LFO_OFF, LFO_ON) else 5


def _lfo(control, switch) -> Callable[[bytes], Event]:
    def build(operands: bytes) -> Event:
        if len(operands) == 1:
            return switch(operands[0] == LFO_ON)
        return control(
            operands[0],
            u16(operands[1], operands[2]),
            s16(operands[3], operands[4]),
        )

    return build


class CommandSpec(NamedTuple):
    """
    Operand layout of a command.

    size is either a fixed operand count, or a function of the operands
    read so far (called once the first operand is available).
    """

    size: Union[int, Callable[[bytes], int]]
    build: Callable[[bytes], Event]


COMMAND_TABLE: Dict[int, CommandSpec] = {
    Opcode.SET_TEMPO: CommandSpec(1, lambda b: SetTempo(b[0])),
    Opcode.SET_OPM_REGISTER: CommandSpec(2, lambda b: SetOPMRegister(b[0], b[1])),
    Opcode.SET_VOICE: CommandSpec(1, lambda b: SetVoice(b[0])),
    Opcode.SET_PAN: CommandSpec(1, lambda b: SetPan(b[0])),
    Opcode.SET_VOLUME: CommandSpec(1, lambda b: SetVolume(b[0])),
    Opcode.VOLUME_DECREMENT: CommandSpec(0, lambda b: VolumeDecrement()),
    Opcode.VOLUME_INCREMENT: CommandSpec(0, lambda b: VolumeIncrement()),
    Opcode.SOUND_LENGTH: CommandSpec(1, lambda b: SetSoundLength(b[0])),
    Opcode.DISABLE_KEY_OFF: CommandSpec(0, lambda b: DisableKeyOff()),
    # Second byte is reserved
    Opcode.REPEAT_START: CommandSpec(2, lambda b: RepeatStart(b[0])),
    Opcode.REPEAT_END: CommandSpec(2, lambda b: RepeatEnd(u16(b[0], b[1]))),
    Opcode.REPEAT_ESCAPE: CommandSpec(2, lambda b: RepeatEscape(u16(b[0], b[1]))),
    Opcode.DETUNE: CommandSpec(2, lambda b: Detune(u16(b[0], b[1]))),
    Opcode.PORTAMENTO: CommandSpec(2, lambda b: Portamento(u16(b[0], b[1]))),
    Opcode.DATA_END: CommandSpec(_data_end_size, _data_end),
    Opcode.KEY_ON_DELAY: CommandSpec(1, lambda b: KeyOnDelay(b[0])),
    Opcode.SYNC_SEND: CommandSpec(1, lambda b: SyncSend(b[0])),
    Opcode.SYNC_WAIT: CommandSpec(0, lambda b: SyncWait()),
    Opcode.ADPCM_NOISE_FREQUENCY: CommandSpec(1, lambda b: ADPCMNoiseFrequency(b[0])),
    Opcode.PITCH_LFO: CommandSpec(_lfo_size, _lfo(PitchLFO, PitchLFOSwitch)),
    Opcode.VOLUME_LFO: CommandSpec(_lfo_size, _lfo(VolumeLFO, VolumeLFOSwitch)),
    Opcode.OPM_LFO: CommandSpec(_lfo_size, _lfo(OPMLFO, OPMLFOSwitch)),
    Opcode.LFO_DELAY: CommandSpec(1, lambda b: LFODelay(b[0])),
    Opcode.PCM8_EXPANSION_SHIFT: CommandSpec(0, lambda b: PCM8ExpansionShift()),
    # First byte is reserved
    Opcode.FADE_OUT: CommandSpec(2, lambda b: FadeOut(b[1])),
}


def _note_spec(opcode: int) -> CommandSpec:
    return CommandSpec(1, lambda b: Note(opcode - NOTE_MIN, b[0] + 1))


@dataclass
class _Pending:
    """A command waiting for operand bytes."""

    opcode: int
    offset: int
    spec: CommandSpec
    operands: bytearray = field(default_factory=bytearray)
    # Waiting for another key-on delay value in sticky mode. offset is
    # the operand position, and ending the stream here is not a truncation.
    sticky: bool = False

    def needed(self) -> int:
        if isinstance(self.spec.size, int):
            return self.spec.size
        if not self.operands:
            return 1
        return self.spec.size(bytes(self.operands))

    def is_complete(self) -> bool:
        return len(self.operands) >= self.needed()


class ChannelDecoder:
    """
    Finite state decoder for one channel command stream.

    Example:
        decoder = ChannelDecoder(stream)
        for decoded in decoder.decode(start, end):
            print(decoded.event)
    """

    def __init__(self, stream: ByteStream, options: DecoderOptions = DecoderOptions()):
        self.stream = stream
        self.options = options

    def decode(self, start: int, end: Optional[int] = None) -> Iterator[DecodedCommand]:
        """
        Decode commands from start until the channel ends.

        The channel ends after a data end command, once the position
        reaches end (checked between commands only), or at end of stream.

        Args:
            start: Absolute position of the first command byte
            end: Absolute position of the next channel's data, or None

        Yields:
            DecodedCommand for every recognized unit, plus a final
            TruncatedCommand if the stream ends inside a command
        """
        self.stream.seek(start)
        pending: Optional[_Pending] = None

        while True:
            offset = self.stream.tell()
            data = self.stream.read(1)

            if not data:
                if pending is not None and not pending.sticky:
                    operands = bytes(pending.operands)
                    logger.warning(
                        "Command 0x%02X at 0x%04X truncated after %d operand bytes",
                        pending.opcode,
                        pending.offset,
                        len(operands),
                    )
                    yield DecodedCommand(
                        TruncatedCommand(pending.opcode, operands),
                        pending.opcode,
                        operands,
                        pending.offset,
                    )
                return

            byte = data[0]
            if pending is None:
                decoded, pending = self._start(byte, offset)
            else:
                pending.operands.append(byte)
                decoded, pending = self._advance(pending)

            if decoded is None:
                continue

            yield decoded

            if isinstance(decoded.event, DataEnd):
                return
            if end is not None and self.stream.tell() >= end:
                return

    def _start(
        self, byte: int, offset: int
    ) -> Tuple[Optional[DecodedCommand], Optional[_Pending]]:
        """Classify a byte read in the initial state."""
        if byte <= REST_MAX:
            return DecodedCommand(Rest(byte + 1), byte, b"", offset), None

        if NOTE_MIN <= byte <= NOTE_MAX:
            return None, _Pending(byte, offset, _note_spec(byte))

        spec = COMMAND_TABLE.get(byte)
        if spec is None:
            return DecodedCommand(UndefinedCommand(byte), byte, b"", offset), None

        pending = _Pending(byte, offset, spec)
        if pending.is_complete():
            return self._finish(pending), None
        return None, pending

    def _advance(
        self, pending: _Pending
    ) -> Tuple[Optional[DecodedCommand], Optional[_Pending]]:
        """Check whether a pending command has all its operands."""
        if not pending.is_complete():
            return None, pending

        decoded = self._finish(pending)

        if (
            pending.opcode == Opcode.KEY_ON_DELAY
            and self.options.key_on_delay is KeyOnDelayMode.STICKY
        ):
            return decoded, _Pending(pending.opcode, self.stream.tell(), pending.spec, sticky=True)
        return decoded, None

    def _finish(self, pending: _Pending) -> DecodedCommand:
        operands = bytes(pending.operands)
        event = pending.spec.build(operands)
        return DecodedCommand(
            event, pending.opcode, operands, pending.offset, implied_opcode=pending.sticky
        )


def iter_channel(
    stream: ByteStream,
    mdx: MDXFile,
    channel: int,
    options: DecoderOptions = DecoderOptions(),
) -> Iterator[DecodedCommand]:
    """
    Decode one channel of a parsed MDX file.

    Args:
        stream: Stream the header was read from
        mdx: Parsed header
        channel: Channel index
        options: Decoder options

    Yields:
        DecodedCommand values in stream order
    """
    validate_channel_index(channel, mdx.num_channels)

    start = mdx.channel_start(channel)
    end = mdx.channel_end(channel)
    logger.debug(
        "Channel %d: 0x%04X-%s", channel, start, f"0x{end:04X}" if end is not None else "EOF"
    )

    return ChannelDecoder(stream, options).decode(start, end)
