"""
Event dispatch surface for MDX decoding.

Subclass MDXHandler and override only the hooks you need. Every hook
is a no-op by default. For each decoded command the semantic hook is
called first (with the event's decoded fields), then handle_command
with the raw opcode and operand bytes.

Hooks receive data only; they cannot seek the stream or stop the
decoder. A consumer that wants to stop early records that fact and
the caller checks it between files or channels.

Example:
    class NoteCounter(MDXHandler):
        def __init__(self):
            self.notes = 0

        def handle_note(self, note, duration):
            self.notes += 1
"""

from typing import Optional

from mdxconv.models.events import DecodedCommand, TruncatedCommand
from mdxconv.models.mdx_file import MDXFile
from mdxconv.models.voice import Voice


class MDXHandler:
    """Base handler. Every method is a no-op."""

    # Structure

    def handle_header(self, mdx: MDXFile) -> None:
        pass

    def handle_voice(self, voice: Voice) -> None:
        pass

    def handle_channel_start(self, channel: int) -> None:
        pass

    def handle_channel_end(self, channel: int) -> None:
        pass

    # Generic

    def handle_command(self, opcode: int, operands: bytes) -> None:
        """Raw command bytes, called after the semantic hook."""
        pass

    def handle_truncated(self, opcode: int, operands: bytes) -> None:
        """The stream ended inside a command. The channel ends next."""
        pass

    def handle_undefined_command(self, opcode: int) -> None:
        pass

    # Notes

    def handle_rest(self, duration: int) -> None:
        pass

    def handle_note(self, note: int, duration: int) -> None:
        pass

    # Commands

    def handle_set_tempo(self, tempo: int) -> None:
        pass

    def handle_set_opm_register(self, register: int, value: int) -> None:
        pass

    def handle_set_voice(self, voice: int) -> None:
        pass

    def handle_set_pan(self, pan: int) -> None:
        pass

    def handle_set_volume(self, volume: int) -> None:
        pass

    def handle_volume_decrement(self) -> None:
        pass

    def handle_volume_increment(self) -> None:
        pass

    def handle_sound_length(self, length: int) -> None:
        pass

    def handle_disable_key_off(self) -> None:
        pass

    def handle_repeat_start(self, count: int) -> None:
        pass

    def handle_repeat_end(self, offset: int) -> None:
        pass

    def handle_repeat_escape(self, offset: int) -> None:
        pass

    def handle_detune(self, value: int) -> None:
        pass

    def handle_portamento(self, value: int) -> None:
        pass

    def handle_data_end(self, end: Optional[int] = None) -> None:
        pass

    def handle_key_on_delay(self, delay: int) -> None:
        pass

    def handle_sync_send(self, channel: int) -> None:
        pass

    def handle_sync_wait(self) -> None:
        pass

    def handle_adpcm_noise_frequency(self, frequency: int) -> None:
        pass

    def handle_pitch_lfo(self, waveform: int, period: int, change: int) -> None:
        pass

    def handle_pitch_lfo_switch(self, enabled: bool) -> None:
        pass

    def handle_volume_lfo(self, waveform: int, period: int, change: int) -> None:
        pass

    def handle_volume_lfo_switch(self, enabled: bool) -> None:
        pass

    def handle_opm_lfo(self, waveform: int, period: int, change: int) -> None:
        pass

    def handle_opm_lfo_switch(self, enabled: bool) -> None:
        pass

    def handle_lfo_delay(self, delay: int) -> None:
        pass

    def handle_pcm8_expansion_shift(self) -> None:
        pass

    def handle_fade_out(self, speed: int) -> None:
        pass


def dispatch(handler: MDXHandler, decoded: DecodedCommand) -> None:
    """
    Deliver one decoded command to a handler.

    Calls the event's semantic hook, then handle_command with the raw
    bytes. Truncated commands only reach handle_truncated.
    """
    event = decoded.event
    getattr(handler, event.hook)(*event.values())

    if not isinstance(event, TruncatedCommand):
        handler.handle_command(decoded.opcode, decoded.operands)
