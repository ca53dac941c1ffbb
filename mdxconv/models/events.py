"""
MDX channel command events.

Each command kind decoded from a channel stream is a small frozen
dataclass. The decoder wraps every event in a DecodedCommand that also
carries the raw opcode and operand bytes.

Command byte ranges:
    00-7F       Rest, duration = byte + 1
    80-DE nn    Note (byte - 0x80), duration = nn + 1
    E7-FF ...   Commands, see Opcode
    DF, E6      Undefined
"""

from dataclasses import astuple, dataclass
from enum import IntEnum
from typing import ClassVar, Optional

REST_MAX = 0x7F
NOTE_MIN = 0x80
NOTE_MAX = 0xDE


class Opcode(IntEnum):
    """Command opcodes."""

    FADE_OUT = 0xE7
    PCM8_EXPANSION_SHIFT = 0xE8
    LFO_DELAY = 0xE9
    OPM_LFO = 0xEA
    VOLUME_LFO = 0xEB
    PITCH_LFO = 0xEC
    ADPCM_NOISE_FREQUENCY = 0xED
    SYNC_WAIT = 0xEE
    SYNC_SEND = 0xEF
    KEY_ON_DELAY = 0xF0
    DATA_END = 0xF1
    PORTAMENTO = 0xF2
    DETUNE = 0xF3
    REPEAT_ESCAPE = 0xF4
    REPEAT_END = 0xF5
    REPEAT_START = 0xF6
    DISABLE_KEY_OFF = 0xF7
    SOUND_LENGTH = 0xF8
    VOLUME_INCREMENT = 0xF9
    VOLUME_DECREMENT = 0xFA
    SET_VOLUME = 0xFB
    SET_PAN = 0xFC
    SET_VOICE = 0xFD
    SET_OPM_REGISTER = 0xFE
    SET_TEMPO = 0xFF


# LFO control operand values that switch the LFO without new parameters
LFO_OFF = 0x80
LFO_ON = 0x81


@dataclass(frozen=True)
class Event:
    """
    Base class for decoded events.

    hook names the MDXHandler method receiving the event's fields.
    """

    hook: ClassVar[str] = ""

    def values(self) -> tuple:
        """Event fields in declaration order."""
        return astuple(self)


@dataclass(frozen=True)
class Rest(Event):
    hook: ClassVar[str] = "handle_rest"

    duration: int


@dataclass(frozen=True)
class Note(Event):
    hook: ClassVar[str] = "handle_note"

    note: int
    duration: int


@dataclass(frozen=True)
class SetTempo(Event):
    hook: ClassVar[str] = "handle_set_tempo"

    tempo: int


@dataclass(frozen=True)
class SetOPMRegister(Event):
    hook: ClassVar[str] = "handle_set_opm_register"

    register: int
    value: int


@dataclass(frozen=True)
class SetVoice(Event):
    hook: ClassVar[str] = "handle_set_voice"

    voice: int


@dataclass(frozen=True)
class SetPan(Event):
    """Output phase: 0 = off, 1 = left, 2 = right, 3 = both."""

    hook: ClassVar[str] = "handle_set_pan"

    pan: int


@dataclass(frozen=True)
class SetVolume(Event):
    """Volume 0-15, or 0x80 | n for fine volume n."""

    hook: ClassVar[str] = "handle_set_volume"

    volume: int


@dataclass(frozen=True)
class VolumeDecrement(Event):
    hook: ClassVar[str] = "handle_volume_decrement"


@dataclass(frozen=True)
class VolumeIncrement(Event):
    hook: ClassVar[str] = "handle_volume_increment"


@dataclass(frozen=True)
class SetSoundLength(Event):
    hook: ClassVar[str] = "handle_sound_length"

    length: int


@dataclass(frozen=True)
class DisableKeyOff(Event):
    hook: ClassVar[str] = "handle_disable_key_off"


@dataclass(frozen=True)
class RepeatStart(Event):
    hook: ClassVar[str] = "handle_repeat_start"

    count: int


@dataclass(frozen=True)
class RepeatEnd(Event):
    hook: ClassVar[str] = "handle_repeat_end"

    offset: int


@dataclass(frozen=True)
class RepeatEscape(Event):
    hook: ClassVar[str] = "handle_repeat_escape"

    offset: int


@dataclass(frozen=True)
class Detune(Event):
    hook: ClassVar[str] = "handle_detune"

    value: int


@dataclass(frozen=True)
class Portamento(Event):
    hook: ClassVar[str] = "handle_portamento"

    value: int


@dataclass(frozen=True)
class DataEnd(Event):
    """End of channel data. end is None for the short (F1 00) form."""

    hook: ClassVar[str] = "handle_data_end"

    end: Optional[int] = None


@dataclass(frozen=True)
class KeyOnDelay(Event):
    hook: ClassVar[str] = "handle_key_on_delay"

    delay: int


@dataclass(frozen=True)
class SyncSend(Event):
    hook: ClassVar[str] = "handle_sync_send"

    channel: int


@dataclass(frozen=True)
class SyncWait(Event):
    hook: ClassVar[str] = "handle_sync_wait"


@dataclass(frozen=True)
class ADPCMNoiseFrequency(Event):
    hook: ClassVar[str] = "handle_adpcm_noise_frequency"

    frequency: int


@dataclass(frozen=True)
class PitchLFO(Event):
    hook: ClassVar[str] = "handle_pitch_lfo"

    waveform: int
    period: int
    change: int


@dataclass(frozen=True)
class PitchLFOSwitch(Event):
    hook: ClassVar[str] = "handle_pitch_lfo_switch"

    enabled: bool


@dataclass(frozen=True)
class VolumeLFO(Event):
    hook: ClassVar[str] = "handle_volume_lfo"

    waveform: int
    period: int
    change: int


@dataclass(frozen=True)
class VolumeLFOSwitch(Event):
    hook: ClassVar[str] = "handle_volume_lfo_switch"

    enabled: bool


@dataclass(frozen=True)
class OPMLFO(Event):
    hook: ClassVar[str] = "handle_opm_lfo"

    waveform: int
    period: int
    change: int


@dataclass(frozen=True)
class OPMLFOSwitch(Event):
    hook: ClassVar[str] = "handle_opm_lfo_switch"

    enabled: bool


@dataclass(frozen=True)
class LFODelay(Event):
    hook: ClassVar[str] = "handle_lfo_delay"

    delay: int


@dataclass(frozen=True)
class PCM8ExpansionShift(Event):
    hook: ClassVar[str] = "handle_pcm8_expansion_shift"


@dataclass(frozen=True)
class FadeOut(Event):
    hook: ClassVar[str] = "handle_fade_out"

    speed: int


@dataclass(frozen=True)
class UndefinedCommand(Event):
    hook: ClassVar[str] = "handle_undefined_command"

    opcode: int


@dataclass(frozen=True)
class TruncatedCommand(Event):
    """A command cut off by the end of the stream."""

    hook: ClassVar[str] = "handle_truncated"

    opcode: int
    operands: bytes


@dataclass(frozen=True)
class DecodedCommand:
    """
    One decoded unit of a channel stream.

    Attributes:
        event: Typed semantic event
        opcode: Command byte as read from the stream
        operands: Operand bytes in stream order
        offset: Absolute stream position of the first byte
        implied_opcode: True when the opcode byte was not read for this
            command (sticky key-on delay values)
    """

    event: Event
    opcode: int
    operands: bytes = b""
    offset: int = 0
    implied_opcode: bool = False

    @property
    def size(self) -> int:
        """Bytes occupied in the stream."""
        return len(self.operands) + (0 if self.implied_opcode else 1)

    @property
    def is_complete(self) -> bool:
        return not isinstance(self.event, TruncatedCommand)

    def to_bytes(self) -> bytes:
        """Raw bytes as they appear in the stream."""
        if self.implied_opcode:
            return self.operands
        return bytes([self.opcode]) + self.operands
